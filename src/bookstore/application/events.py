"""Post-commit notifications.

Handlers publish ``OrderChanged`` only after their transaction committed,
so listeners (cache invalidation, push notifications) never see a change
that was rolled back.  The domain layer never publishes anything itself.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Callable

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OrderChanged:
    order_id: uuid.UUID


OrderListener = Callable[[OrderChanged], None]


class OrderEvents:
    """In-process dispatcher: subscribe listeners, publish invokes them."""

    def __init__(self) -> None:
        self._listeners: list[OrderListener] = []

    def subscribe(self, listener: OrderListener) -> None:
        self._listeners.append(listener)

    def publish(self, event: OrderChanged) -> None:
        # Runs after commit: a failing listener is logged, not raised.
        for listener in self._listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("order_listener_failed", order_id=str(event.order_id))
