from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from returns.result import Result

from checkout_cart.core.domain.model.cart import Discount, LineItem
from checkout_cart.core.domain.model.errors import CartError
from checkout_cart.core.domain.model.postage import PostageOption


@dataclass(frozen=True)
class ItemAdded:
    item: LineItem


@dataclass(frozen=True)
class ItemUpdated:
    item: LineItem
    previous_quantity: int


@dataclass(frozen=True)
class ItemRemoved:
    item: LineItem


@dataclass(frozen=True)
class CartEmptied:
    removed: int


@dataclass(frozen=True)
class CartCleared:
    pass


@dataclass(frozen=True)
class DiscountApplied:
    discount: Discount


@dataclass(frozen=True)
class PostageSearched:
    country: str
    postal_code: str
    options: int


@dataclass(frozen=True)
class PostageConfirmed:
    option: PostageOption


CartEvent = (
    ItemAdded
    | ItemUpdated
    | ItemRemoved
    | CartEmptied
    | CartCleared
    | DiscountApplied
    | PostageSearched
    | PostageConfirmed
)


class CartEventPublisher(Protocol):
    def publish(self, event: CartEvent) -> Result[None, CartError]: ...
