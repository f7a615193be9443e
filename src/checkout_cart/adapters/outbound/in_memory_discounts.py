from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from returns.result import Failure, Result, Success

from checkout_cart.core.domain.model.cart import Discount
from checkout_cart.core.domain.model.errors import CartError, ResolverUnavailable
from checkout_cart.core.ports.outbound.discounts import DiscountResolver


@dataclass
class InMemoryDiscounts(DiscountResolver):
    discounts: list[Discount] = field(default_factory=list)
    unavailable: bool = False

    def find(self, code: str, today: date) -> Result[Discount | None, CartError]:
        if self.unavailable:
            return Failure(
                ResolverUnavailable(message="discount lookup is down", resolver="discounts")
            )
        for discount in self.discounts:
            if discount.code == code and not discount.is_expired(today):
                return Success(discount)
        return Success(None)
