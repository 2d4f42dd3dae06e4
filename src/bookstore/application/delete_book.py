"""Application service: Delete Book use case.

Deleting a book detaches it from every order that holds it.  The copies
reserved in those lines disappear with the book; each affected order's
total is recomputed so it keeps matching its remaining lines.
"""

from __future__ import annotations

import uuid

import structlog

from bookstore.application.events import OrderChanged, OrderEvents
from bookstore.application.failures import logged_failures
from bookstore.application.unit_of_work import UnitOfWork
from bookstore.domain.service.reservation_engine import ReservationEngine

logger = structlog.get_logger(__name__)


class DeleteBookHandler:

    def __init__(self, uow: UnitOfWork, events: OrderEvents | None = None) -> None:
        self._uow = uow
        self._events = events or OrderEvents()

    def handle(self, book_id: uuid.UUID) -> bool:
        """Delete a book. Returns False if it does not exist."""
        log = logger.bind(book_id=str(book_id))

        with logged_failures(log, "delete_book"), self._uow:
            book = self._uow.books.get_by_id(book_id)
            if book is None:
                return False

            engine = ReservationEngine(self._uow.books, self._uow.orders)
            affected = engine.detach_book(book)
            self._uow.commit()
            log.info("book_deleted", affected_orders=len(affected))

        for order_id in affected:
            self._events.publish(OrderChanged(order_id))
        return True


class DeleteAllBooksHandler:
    """Clear the whole catalog in one transaction (development reset)."""

    def __init__(self, uow: UnitOfWork, events: OrderEvents | None = None) -> None:
        self._uow = uow
        self._events = events or OrderEvents()

    def handle(self) -> int:
        """Delete every book. Returns how many were deleted."""
        affected: set[uuid.UUID] = set()

        with logged_failures(logger, "delete_all_books"), self._uow:
            engine = ReservationEngine(self._uow.books, self._uow.orders)
            catalog = self._uow.books.list_all()
            for book in catalog:
                affected.update(engine.detach_book(book))
            self._uow.commit()
            logger.info("books_deleted", count=len(catalog), affected_orders=len(affected))

        for order_id in sorted(affected, key=str):
            self._events.publish(OrderChanged(order_id))
        return len(catalog)
