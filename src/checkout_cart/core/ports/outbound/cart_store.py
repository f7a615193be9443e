from __future__ import annotations

from typing import Protocol

from returns.result import Result

from checkout_cart.core.domain.model.cart import CartState
from checkout_cart.core.domain.model.errors import CartError


class CartStore(Protocol):
    """
    Session-scoped snapshot storage for one cart.

    save() replaces the whole snapshot; there is no merge with what was
    stored before, so saving the same state twice is harmless.
    """

    def load(self) -> Result[CartState, CartError]: ...

    def save(self, state: CartState) -> Result[None, CartError]: ...
