from __future__ import annotations

import base64
import json
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Protocol, Sequence

from checkout_cart.core.domain.model.money import Money
from checkout_cart.core.domain.model.postage import PostageSearch, PostageStatus


class Priceable(Protocol):
    """Anything the catalog can hand to the cart."""

    @property
    def id(self) -> str: ...

    @property
    def title(self) -> str: ...

    @property
    def price(self) -> Money | None: ...

    @property
    def weight(self) -> Decimal | None: ...


@dataclass(frozen=True)
class Product:
    id: str
    title: str
    price: Money | None = None
    weight: Decimal | None = None


@dataclass(frozen=True)
class Customisation:
    title: str
    value: str
    modify_price: Money


def display_title(raw: str) -> str:
    """``"gift-wrap_style"`` -> ``"Gift Wrap Style"``."""
    words = raw.replace("-", " ").replace("_", " ").split(" ")
    return " ".join(w[:1].upper() + w[1:] for w in words)


def compute_key(object_id: str | int, customisations: Sequence[Customisation]) -> str:
    if not customisations:
        return str(object_id)

    payload = [[c.title, c.value, str(c.modify_price.raw())] for c in customisations]
    blob = json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    token = base64.urlsafe_b64encode(blob).decode("ascii")
    return f"{object_id}:{token}"


@dataclass(frozen=True)
class LineItem:
    key: str
    object: Priceable
    quantity: int
    customisations: tuple[Customisation, ...] = ()

    def with_quantity(self, quantity: int) -> "LineItem":
        return replace(self, quantity=quantity)


class DiscountType(str, Enum):
    FIXED = "Fixed"
    PERCENTAGE = "Percentage"


@dataclass(frozen=True)
class Discount:
    code: str
    type: DiscountType
    amount: Decimal
    expires_on: date | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError(f"discount amount must be >= 0: {self.amount}")
        if self.type is DiscountType.PERCENTAGE and self.amount > 100:
            raise ValueError(f"percentage discount must be <= 100: {self.amount}")

    def is_expired(self, today: date) -> bool:
        return self.expires_on is not None and self.expires_on < today


@dataclass(frozen=True)
class CartState:
    items: tuple[LineItem, ...] = ()
    discount: Discount | None = None
    postage_id: str | None = None
    postage_search: PostageSearch | None = None

    @staticmethod
    def empty() -> "CartState":
        return CartState()

    def find(self, key: str) -> LineItem | None:
        for item in self.items:
            if item.key == key:
                return item
        return None

    def keys(self) -> tuple[str, ...]:
        return tuple(item.key for item in self.items)


def postage_status(state: CartState) -> PostageStatus:
    if state.postage_id is not None:
        return PostageStatus.POSTAGE_CONFIRMED
    if state.postage_search is not None:
        return PostageStatus.SEARCH_RESULTS_AVAILABLE
    return PostageStatus.NO_SEARCH
