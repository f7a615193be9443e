from __future__ import annotations

from dataclasses import dataclass

import structlog
from returns.result import Failure, Result, Success

from checkout_cart.core.domain.model.errors import CartError, PublishError
from checkout_cart.core.ports.outbound.events import CartEvent, CartEventPublisher

logger = structlog.get_logger(__name__)


@dataclass
class LoggingEventPublisher(CartEventPublisher):
    fail: bool = False

    def publish(self, event: CartEvent) -> Result[None, CartError]:
        if self.fail:
            return Failure(PublishError(message="publisher is down"))
        logger.info("cart_event", event_type=type(event).__name__)
        return Success(None)
