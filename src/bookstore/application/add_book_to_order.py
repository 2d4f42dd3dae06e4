"""Application service: Add Book To Order use case.

Orchestrates the Reservation Engine inside one transaction: load the
order and the book, reserve the copies, recompute the total, commit.
Listeners hear about the change only after the commit succeeded.
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


class AddBookToOrderHandler:

    def __init__(self, uow: UnitOfWork, events: OrderEvents | None = None) -> None:
        self._uow = uow
        self._events = events or OrderEvents()

    def handle(
        self,
        order_id: uuid.UUID,
        book_id: uuid.UUID,
        quantity: int,
    ) -> OperationResult:
        log = logger.bind(order_id=str(order_id), book_id=str(book_id), quantity=quantity)

        with logged_failures(log, "add_book_to_order"), self._uow:
            order = self._uow.orders.get_with_lines(order_id)
            if order is None:
                return OperationResult.not_found(f"Order with ID '{order_id}' not found.")

            book = self._uow.books.get_by_id(book_id)
            if book is None:
                return OperationResult.not_found(f"Book with ID '{book_id}' not found.")

            engine = ReservationEngine(self._uow.books, self._uow.orders)
            try:
                line = engine.add_line(order, book, quantity)
            except (EntityNotFoundError, ValidationError) as exc:
                log.debug("add_book_to_order_rejected", reason=str(exc))
                return OperationResult.from_exception(exc)

            self._uow.commit()
            log.debug(
                "book_added_to_order",
                line_quantity=line.quantity.value,
                copies_left=book.number_of_copies,
                total_cost=str(order.total_cost.amount),
            )

        self._events.publish(OrderChanged(order_id))
        return OperationResult.ok()
