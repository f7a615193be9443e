from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from checkout_cart.core.domain.model.money import Money


@dataclass(frozen=True)
class PostageOption:
    id: str
    title: str
    cost: Money


@dataclass(frozen=True)
class PostageSearch:
    """Candidate options found for the last address the shopper entered."""

    country: str
    postal_code: str
    options: tuple[PostageOption, ...] = ()

    def find(self, postage_id: str) -> PostageOption | None:
        for option in self.options:
            if option.id == postage_id:
                return option
        return None


class PostageStatus(str, Enum):
    NO_SEARCH = "no_search"
    SEARCH_RESULTS_AVAILABLE = "search_results_available"
    POSTAGE_CONFIRMED = "postage_confirmed"
