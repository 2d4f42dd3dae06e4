"""Application service: Delete Order use case.

Every reserved copy goes back to its book before the order row is
removed.  Releases and the delete commit together or not at all.
"""

from __future__ import annotations

import uuid

import structlog

from bookstore.application.events import OrderChanged, OrderEvents
from bookstore.application.failures import logged_failures
from bookstore.application.unit_of_work import UnitOfWork
from bookstore.domain.exceptions import ValidationError
from bookstore.domain.service.reservation_engine import ReservationEngine

logger = structlog.get_logger(__name__)


class DeleteOrderHandler:

    def __init__(self, uow: UnitOfWork, events: OrderEvents | None = None) -> None:
        self._uow = uow
        self._events = events or OrderEvents()

    def handle(self, order_id: uuid.UUID) -> bool:
        """Delete an order.

        Returns False if it does not exist or its copies cannot be returned
        to stock; nothing is changed in that case.
        """
        log = logger.bind(order_id=str(order_id))

        with logged_failures(log, "delete_order"), self._uow:
            order = self._uow.orders.get_with_lines(order_id)
            if order is None:
                return False

            engine = ReservationEngine(self._uow.books, self._uow.orders)
            try:
                released = engine.release_order(order)
            except ValidationError as exc:
                log.warning("delete_order_rejected", reason=str(exc))
                return False
            self._uow.orders.delete(order_id)
            self._uow.commit()
            log.debug("order_deleted", copies_released=released)

        self._events.publish(OrderChanged(order_id))
        return True
