from __future__ import annotations

from typing import Protocol

from returns.result import Result

from checkout_cart.core.domain.model.cart import Priceable
from checkout_cart.core.domain.model.errors import CartError


class Catalog(Protocol):
    def find(
        self, object_type: str, object_id: str
    ) -> Result[Priceable | None, CartError]:
        """Success(None) when nothing matches; Failure only when the lookup itself broke."""
        ...
