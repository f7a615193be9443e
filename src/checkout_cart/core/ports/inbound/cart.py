from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Protocol, Sequence

from returns.result import Result

from checkout_cart.core.domain.model.cart import CartState, Discount, LineItem
from checkout_cart.core.domain.model.errors import CartError
from checkout_cart.core.domain.model.money import Money
from checkout_cart.core.domain.model.postage import PostageOption, PostageStatus
from checkout_cart.core.domain.service.pricing import PriceBreakdown


@dataclass(frozen=True)
class CustomisationLine:
    title: str
    value: str
    modify_price: Decimal = Decimal("0")


@dataclass(frozen=True)
class LineItemView:
    key: str
    object_id: str
    title: str
    unit_price: Money | None
    quantity: int
    customisations: Sequence[tuple[str, str, Money]]


@dataclass(frozen=True)
class CartView:
    items: Sequence[LineItemView]
    discount_code: str | None
    postage_status: PostageStatus
    postage_id: str | None
    postage_options: Sequence[PostageOption]
    totals: PriceBreakdown


class ShoppingCartUseCase(Protocol):
    @property
    def state(self) -> CartState: ...

    def add(
        self,
        object_type: str,
        object_id: str,
        quantity: int = 1,
        customisations: Sequence[CustomisationLine] = (),
    ) -> Result[LineItem, CartError]: ...

    def update(self, key: str, quantity: int) -> Result[LineItem, CartError]: ...

    def remove(self, key: str) -> Result[bool, CartError]: ...

    def remove_all(self) -> Result[None, CartError]: ...

    def clear(self) -> Result[None, CartError]: ...

    def set_discount(self, discount: Discount) -> Result[Discount, CartError]: ...

    def use_discount_code(
        self, code: str, today: date
    ) -> Result[Discount | None, CartError]: ...

    def search_postage(
        self, country: str, postal_code: str
    ) -> Result[tuple[PostageOption, ...], CartError]: ...

    def select_postage(
        self, postage_id: str
    ) -> Result[PostageOption | None, CartError]: ...

    def breakdown(self) -> Result[PriceBreakdown, CartError]: ...
