from __future__ import annotations

from datetime import date
from typing import Protocol

from returns.result import Result

from checkout_cart.core.domain.model.cart import Discount
from checkout_cart.core.domain.model.errors import CartError


class DiscountResolver(Protocol):
    def find(self, code: str, today: date) -> Result[Discount | None, CartError]:
        """Only discounts that have not expired before ``today`` are returned."""
        ...
