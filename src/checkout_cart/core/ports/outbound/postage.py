from __future__ import annotations

from typing import Protocol, Sequence

from returns.result import Result

from checkout_cart.core.domain.model.errors import CartError
from checkout_cart.core.domain.model.postage import PostageOption


class PostageResolver(Protocol):
    def search(
        self, country: str, postal_code: str
    ) -> Result[Sequence[PostageOption], CartError]: ...

    def get(self, postage_id: str) -> Result[PostageOption | None, CartError]: ...
