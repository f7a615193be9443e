from __future__ import annotations

from dataclasses import dataclass, field

from returns.result import Failure, Result, Success

from checkout_cart.core.domain.model.cart import CartState
from checkout_cart.core.domain.model.errors import CartError, PersistenceError
from checkout_cart.core.ports.outbound.cart_store import CartStore


@dataclass
class InMemoryCartSessions:
    """Cart snapshots for every session, keyed by session id."""

    _store: dict[str, CartState] = field(default_factory=dict)
    fail_writes: bool = False

    def for_session(self, session_id: str) -> "SessionCartStore":
        return SessionCartStore(sessions=self, session_id=session_id)

    def get(self, session_id: str) -> CartState:
        return self._store.get(session_id, CartState.empty())

    def put(self, session_id: str, state: CartState) -> Result[None, CartError]:
        if self.fail_writes:
            return Failure(PersistenceError(message="session store is unavailable"))
        self._store[session_id] = state
        return Success(None)

    def __len__(self) -> int:
        return len(self._store)


@dataclass(frozen=True)
class SessionCartStore(CartStore):
    sessions: InMemoryCartSessions
    session_id: str

    def load(self) -> Result[CartState, CartError]:
        return Success(self.sessions.get(self.session_id))

    def save(self, state: CartState) -> Result[None, CartError]:
        return self.sessions.put(self.session_id, state)
