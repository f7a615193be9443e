from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from returns.result import Failure, Result, Success

from checkout_cart.core.domain.model.cart import Priceable
from checkout_cart.core.domain.model.errors import CartError, ResolverUnavailable
from checkout_cart.core.ports.outbound.catalog import Catalog


@dataclass
class InMemoryCatalog(Catalog):
    _objects: dict[tuple[str, str], Priceable] = field(default_factory=dict)
    unavailable: bool = False

    @classmethod
    def of(cls, object_type: str, objects: Iterable[Priceable]) -> "InMemoryCatalog":
        catalog = cls()
        for obj in objects:
            catalog.register(object_type, obj)
        return catalog

    def register(self, object_type: str, obj: Priceable) -> None:
        self._objects[(object_type, str(obj.id))] = obj

    def find(
        self, object_type: str, object_id: str
    ) -> Result[Priceable | None, CartError]:
        if self.unavailable:
            return Failure(
                ResolverUnavailable(message="catalog is down", resolver="catalog")
            )
        return Success(self._objects.get((object_type, str(object_id))))
