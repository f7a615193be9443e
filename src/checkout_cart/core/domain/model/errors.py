from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CartError(Exception):
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@dataclass(frozen=True)
class InvalidInput(CartError):
    pass


@dataclass(frozen=True)
class InvalidQuantity(InvalidInput):
    quantity: int

    def __str__(self) -> str:  # pragma: no cover
        return f"invalid_quantity: {self.quantity} ({self.message})"


@dataclass(frozen=True)
class NotFound(CartError):
    pass


@dataclass(frozen=True)
class ItemNotFound(NotFound):
    key: str

    def __str__(self) -> str:  # pragma: no cover
        return f"item_not_found: {self.key} ({self.message})"


@dataclass(frozen=True)
class ObjectNotFound(NotFound):
    object_type: str
    object_id: str

    def __str__(self) -> str:  # pragma: no cover
        return f"object_not_found: {self.object_type}#{self.object_id} ({self.message})"


@dataclass(frozen=True)
class ResolverUnavailable(CartError):
    resolver: str

    def __str__(self) -> str:  # pragma: no cover
        return f"resolver_unavailable: {self.resolver} ({self.message})"


@dataclass(frozen=True)
class PersistenceError(CartError):
    pass


@dataclass(frozen=True)
class PublishError(CartError):
    pass
