"""Application services: catalog updates for a single book.

Neither update touches existing order lines.  Lines captured their price
when the copies were reserved, and reserved copies are no longer part of
the book's available stock.
"""

from __future__ import annotations

import uuid

import structlog

from bookstore.application.failures import logged_failures
from bookstore.application.unit_of_work import UnitOfWork
from bookstore.domain.model.value_objects import Money

logger = structlog.get_logger(__name__)


class UpdateBookPriceHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, book_id: uuid.UUID, new_price: str) -> bool:
        """Set a new catalog price. Returns False for an unknown book.

        Raises ValidationError if the price is malformed or out of bounds.
        """
        price = Money.price(new_price)
        log = logger.bind(book_id=str(book_id), price=str(price.amount))

        with logged_failures(log, "update_book_price"), self._uow:
            book = self._uow.books.get_by_id(book_id)
            if book is None:
                return False
            book.update_price(price)
            self._uow.commit()

        log.info("book_price_updated")
        return True


class UpdateBookCopiesHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, book_id: uuid.UUID, number_of_copies: int) -> bool:
        """Overwrite the available stock. Returns False for an unknown book.

        Raises ValidationError if the new stock plus the copies reserved by
        orders would exceed the catalog ceiling.
        """
        log = logger.bind(book_id=str(book_id), copies=number_of_copies)

        with logged_failures(log, "update_book_copies"), self._uow:
            book = self._uow.books.get_by_id(book_id)
            if book is None:
                return False
            reserved = sum(
                line.quantity.value for line in self._uow.orders.lines_for_book(book_id)
            )
            book.set_number_of_copies(number_of_copies, reserved=reserved)
            self._uow.commit()

        log.info("book_copies_updated")
        return True
