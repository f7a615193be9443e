from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable

import pytest
from returns.result import Result, Success

from checkout_cart.adapters.outbound.in_memory_cart_store import InMemoryCartSessions
from checkout_cart.adapters.outbound.in_memory_catalog import InMemoryCatalog
from checkout_cart.adapters.outbound.in_memory_discounts import InMemoryDiscounts
from checkout_cart.adapters.outbound.in_memory_postage import (
    InMemoryPostageAreas,
    PostageArea,
)
from checkout_cart.adapters.outbound.static_tax import StaticTaxConfig
from checkout_cart.core.domain.model.cart import (
    CartState,
    Discount,
    DiscountType,
    Product,
)
from checkout_cart.core.domain.model.errors import CartError
from checkout_cart.core.domain.model.money import Money
from checkout_cart.core.domain.service.cart_service import CartDeps, ShoppingCart
from checkout_cart.core.ports.outbound.cart_store import CartStore
from checkout_cart.core.ports.outbound.events import CartEvent

SESSION = "sess-1"


@dataclass
class CountingStore(CartStore):
    """Wraps a store and counts the writes that reach it."""

    inner: CartStore
    saves: int = 0

    def load(self) -> Result[CartState, CartError]:
        return self.inner.load()

    def save(self, state: CartState) -> Result[None, CartError]:
        self.saves += 1
        return self.inner.save(state)


@dataclass
class RecordingPublisher:
    events: list[CartEvent] = field(default_factory=list)

    def publish(self, event: CartEvent) -> Result[None, CartError]:
        self.events.append(event)
        return Success(None)


@pytest.fixture
def pen() -> Product:
    return Product("1", "Pen", Money.of("10.00"), Decimal("0.5"))


@pytest.fixture
def mug() -> Product:
    return Product("2", "Mug", Money.of("100.00"), Decimal("1.2"))


@pytest.fixture
def voucher() -> Product:
    # no price, no weight
    return Product("3", "Voucher")


@pytest.fixture
def lamp() -> Product:
    return Product("4", "Lamp", Money.of("200.00"))


@pytest.fixture
def catalog(pen, mug, voucher, lamp) -> InMemoryCatalog:
    return InMemoryCatalog.of("Product", [pen, mug, voucher, lamp])


@pytest.fixture
def sessions() -> InMemoryCartSessions:
    return InMemoryCartSessions()


@pytest.fixture
def store(sessions) -> CountingStore:
    return CountingStore(sessions.for_session(SESSION))


@pytest.fixture
def discounts() -> InMemoryDiscounts:
    return InMemoryDiscounts(
        [
            Discount("TENOFF", DiscountType.FIXED, Decimal("10")),
            Discount("PCT10", DiscountType.PERCENTAGE, Decimal("10")),
        ]
    )


@pytest.fixture
def postage() -> InMemoryPostageAreas:
    return InMemoryPostageAreas(
        [
            PostageArea("std", "Standard", "GB", "*", Money.of("10.00")),
            PostageArea("hl", "Highlands", "GB", "IV, KW", Money.of("25.00")),
            PostageArea("intl", "International", "*", "*", Money.of("30.00")),
        ]
    )


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def make_deps(
    store, catalog, discounts, postage, publisher
) -> Callable[..., CartDeps]:
    def _make(tax_rate: str = "0") -> CartDeps:
        return CartDeps(
            store=store,
            catalog=catalog,
            discounts=discounts,
            postage=postage,
            tax=StaticTaxConfig(Decimal(tax_rate)),
            events=(publisher,),
        )

    return _make


@pytest.fixture
def cart(make_deps) -> ShoppingCart:
    return ShoppingCart.open(make_deps()).unwrap()
