"""Application service: Remove Book From Order use case.

Releases every copy held by the order line back to the book, drops the
line and recomputes the order total, all in one transaction.
"""

from __future__ import annotations

import uuid

import structlog

from bookstore.application.events import OrderChanged, OrderEvents
from bookstore.application.failures import logged_failures
from bookstore.application.results import OperationResult
from bookstore.application.unit_of_work import UnitOfWork
from bookstore.domain.exceptions import EntityNotFoundError, ValidationError
from bookstore.domain.service.reservation_engine import ReservationEngine

logger = structlog.get_logger(__name__)


class RemoveBookFromOrderHandler:

    def __init__(self, uow: UnitOfWork, events: OrderEvents | None = None) -> None:
        self._uow = uow
        self._events = events or OrderEvents()

    def handle(self, order_id: uuid.UUID, book_id: uuid.UUID) -> OperationResult:
        log = logger.bind(order_id=str(order_id), book_id=str(book_id))

        with logged_failures(log, "remove_book_from_order"), self._uow:
            order = self._uow.orders.get_with_lines(order_id)
            if order is None:
                return OperationResult.not_found(f"Order with ID '{order_id}' not found.")

            engine = ReservationEngine(self._uow.books, self._uow.orders)
            try:
                line = engine.remove_line(order, book_id)
            except (EntityNotFoundError, ValidationError) as exc:
                return OperationResult.from_exception(exc)

            self._uow.commit()
            log.debug("book_removed_from_order", released=line.quantity.value)

        self._events.publish(OrderChanged(order_id))
        return OperationResult.ok()
