"""Domain service: Reservation Engine.

This service coordinates the cross-aggregate operation of reserving or
releasing book copies for an order.  It lives in the domain layer because
the logic is a core business rule, not just orchestration.

Every operation validates first and mutates second, so a rejected
request leaves the book, the line and the order total untouched.  The
engine never commits and never talks to the outside world; the caller
owns the transaction and persists (or rolls back) what the engine did.
"""

from __future__ import annotations

import uuid

from bookstore.domain.exceptions import EntityNotFoundError
from bookstore.domain.model.book import Book
from bookstore.domain.model.order import Order, OrderLine
from bookstore.domain.model.value_objects import Quantity
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.order_repository import OrderRepository


class ReservationEngine:

    def __init__(
        self,
        book_repo: BookRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._book_repo = book_repo
        self._order_repo = order_repo

    def add_line(self, order: Order, book: Book, quantity: int) -> OrderLine:
        """Reserve *quantity* copies of *book* into *order*.

        The stock check runs against the book's live available count, which
        already excludes every earlier reservation, including this order's
        own line for the same book.  Adding a book that is already in the
        order grows the existing line and keeps its price snapshot.
        """
        requested = Quantity(quantity)
        line = self._order_repo.get_line(order.id, book.id)

        # Phase 1: validate (raises before anything is mutated)
        grown = line.quantity + requested if line is not None else None

        # Phase 2: mutate
        book.reserve(requested.value)
        if line is not None:
            line.quantity = grown
        else:
            line = OrderLine(
                order_id=order.id,
                book_id=book.id,
                quantity=requested,
                price_at_purchase=book.price,  # <-- price snapshot
                book=book,
            )
            order.attach(line)
            self._order_repo.add_line(line)

        order.recalculate_total()
        return line

    def remove_line(self, order: Order, book_id: uuid.UUID) -> OrderLine:
        """Release a line's full quantity back to its book and drop the line."""
        line = self._order_repo.get_line(order.id, book_id)
        if line is None:
            raise EntityNotFoundError(
                f"Book with ID '{book_id}' not found in order '{order.id}'"
            )

        book = self._book_repo.get_by_id(book_id)
        if book is not None:
            book.release(line.quantity.value)

        order.detach(line)
        self._order_repo.remove_line(line)
        order.recalculate_total()
        return line

    def release_order(self, order: Order) -> int:
        """Release every line of an order ahead of deleting it.

        Returns the number of copies returned to stock.
        """
        released = 0
        for line in list(order.lines):
            book = self._book_repo.get_by_id(line.book_id)
            if book is not None:
                book.release(line.quantity.value)
                released += line.quantity.value
            order.detach(line)
            self._order_repo.remove_line(line)
        order.recalculate_total()
        return released

    def detach_book(self, book: Book) -> list[uuid.UUID]:
        """Remove a book from circulation.

        Every line referencing the book is dropped from its order.  This is
        a hard detach: no copies go back to stock since the book itself is
        going away.  Totals of the affected orders are recomputed so they
        keep matching their remaining lines.  Returns the affected order IDs.
        """
        affected: list[uuid.UUID] = []
        for line in self._order_repo.lines_for_book(book.id):
            order = self._order_repo.get_with_lines(line.order_id)
            if order is None:
                raise EntityNotFoundError(f"Order with ID '{line.order_id}' not found")
            order.detach(line)
            self._order_repo.remove_line(line)
            order.recalculate_total()
            affected.append(order.id)

        self._book_repo.delete(book)
        return affected
