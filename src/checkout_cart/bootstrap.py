from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Sequence

from fastapi import FastAPI
from returns.result import Result

from checkout_cart.adapters.inbound.web.fastapi_app import create_app
from checkout_cart.adapters.outbound.in_memory_cart_store import InMemoryCartSessions
from checkout_cart.adapters.outbound.in_memory_catalog import InMemoryCatalog
from checkout_cart.adapters.outbound.in_memory_discounts import InMemoryDiscounts
from checkout_cart.adapters.outbound.in_memory_postage import (
    InMemoryPostageAreas,
    PostageArea,
)
from checkout_cart.adapters.outbound.logging_events import LoggingEventPublisher
from checkout_cart.adapters.outbound.static_tax import StaticTaxConfig
from checkout_cart.core.domain.model.cart import Discount, DiscountType, Product
from checkout_cart.core.domain.model.errors import CartError
from checkout_cart.core.domain.model.money import Money
from checkout_cart.core.domain.service.cart_service import CartDeps, ShoppingCart
from checkout_cart.core.ports.outbound.catalog import Catalog
from checkout_cart.core.ports.outbound.discounts import DiscountResolver
from checkout_cart.core.ports.outbound.events import CartEventPublisher
from checkout_cart.core.ports.outbound.postage import PostageResolver
from checkout_cart.core.ports.outbound.tax import TaxConfig
from checkout_cart.log_config import configure_logging
from checkout_cart.settings import CheckoutSettings


@dataclass(frozen=True)
class Checkout:
    settings: CheckoutSettings
    sessions: InMemoryCartSessions
    catalog: Catalog
    discounts: DiscountResolver
    postage: PostageResolver
    tax: TaxConfig
    events: Sequence[CartEventPublisher] = field(default_factory=tuple)

    def open_cart(self, session_id: str) -> Result[ShoppingCart, CartError]:
        return ShoppingCart.open(
            CartDeps(
                store=self.sessions.for_session(session_id),
                catalog=self.catalog,
                discounts=self.discounts,
                postage=self.postage,
                tax=self.tax,
                events=self.events,
                currency=self.settings.currency,
            )
        )


def build_checkout(settings: CheckoutSettings | None = None) -> Checkout:
    settings = settings or CheckoutSettings.from_env()
    currency = settings.currency

    catalog = InMemoryCatalog.of(
        "Product",
        [
            Product("1", "Notebook", Money.of("4.50", currency), Decimal("0.3")),
            Product("2", "Fountain Pen", Money.of("24.00", currency), Decimal("0.05")),
            Product("3", "Gift Card", Money.of("10.00", currency)),
        ],
    )
    discounts = InMemoryDiscounts(
        [
            Discount("WELCOME5", DiscountType.FIXED, Decimal("5")),
            Discount("SAVE10", DiscountType.PERCENTAGE, Decimal("10"), date(2099, 12, 31)),
        ]
    )
    postage = InMemoryPostageAreas(
        [
            PostageArea("1", "UK Standard", "GB", "*", Money.of("3.95", currency)),
            PostageArea("2", "UK Next Day", "GB", "*", Money.of("7.50", currency)),
            PostageArea("3", "Highlands", "GB", "IV,KW,PH", Money.of("12.00", currency)),
            PostageArea("4", "International", "*", "*", Money.of("15.00", currency)),
        ]
    )

    return Checkout(
        settings=settings,
        sessions=InMemoryCartSessions(),
        catalog=catalog,
        discounts=discounts,
        postage=postage,
        tax=StaticTaxConfig(settings.tax_rate),
        events=(LoggingEventPublisher(),),
    )


def build_app(settings: CheckoutSettings | None = None) -> FastAPI:
    checkout = build_checkout(settings)
    configure_logging(checkout.settings.log_level, json=checkout.settings.log_json)
    return create_app(
        checkout.open_cart, show_discount_form=checkout.settings.show_discount_form
    )


def create_asgi_app() -> FastAPI:
    return build_app()
