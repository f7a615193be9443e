from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from returns.result import Failure, Result, Success

from checkout_cart.core.domain.model.errors import CartError, ResolverUnavailable
from checkout_cart.core.domain.model.money import Money
from checkout_cart.core.domain.model.postage import PostageOption
from checkout_cart.core.ports.outbound.postage import PostageResolver

WILDCARD = "*"


@dataclass(frozen=True)
class PostageArea:
    """
    A shipping rate for a region.

    ``country`` is a 2 letter code or ``*``. ``zip_codes`` is a comma
    separated list of postal code prefixes, or ``*`` for any code.
    """

    id: str
    title: str
    country: str
    zip_codes: str
    cost: Money

    def matches(self, country: str, postal_code: str) -> bool:
        if self.country != WILDCARD and self.country.upper() != country.upper():
            return False
        code = postal_code.replace(" ", "").upper()
        for prefix in self.zip_codes.split(","):
            prefix = prefix.strip().replace(" ", "").upper()
            if prefix == WILDCARD or (prefix and code.startswith(prefix)):
                return True
        return False

    def to_option(self) -> PostageOption:
        return PostageOption(id=self.id, title=self.title, cost=self.cost)


@dataclass
class InMemoryPostageAreas(PostageResolver):
    areas: list[PostageArea] = field(default_factory=list)
    unavailable: bool = False

    def search(
        self, country: str, postal_code: str
    ) -> Result[Sequence[PostageOption], CartError]:
        if self.unavailable:
            return self._down()
        return Success(
            tuple(a.to_option() for a in self.areas if a.matches(country, postal_code))
        )

    def get(self, postage_id: str) -> Result[PostageOption | None, CartError]:
        if self.unavailable:
            return self._down()
        for area in self.areas:
            if area.id == postage_id:
                return Success(area.to_option())
        return Success(None)

    @staticmethod
    def _down() -> Failure[CartError]:
        return Failure(
            ResolverUnavailable(message="postage lookup is down", resolver="postage")
        )
