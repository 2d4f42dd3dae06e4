"""Abstract repository for the Order aggregate and its lines."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod

from bookstore.domain.model.order import Order, OrderLine


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: uuid.UUID) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_with_lines(self, order_id: uuid.UUID) -> Order | None:
        """Return an order with its lines and their books eagerly loaded."""

    @abstractmethod
    def get_line(self, order_id: uuid.UUID, book_id: uuid.UUID) -> OrderLine | None:
        """Return the line for *book_id* in *order_id*, or None."""

    @abstractmethod
    def lines_for_book(self, book_id: uuid.UUID) -> list[OrderLine]:
        """Return every line, across all orders, that references a book."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, newest first."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Register a new order; written on the next flush/commit."""

    @abstractmethod
    def add_line(self, line: OrderLine) -> None:
        """Register a new order line."""

    @abstractmethod
    def remove_line(self, line: OrderLine) -> None:
        """Mark an order line for deletion."""

    @abstractmethod
    def delete(self, order_id: uuid.UUID) -> bool:
        """Delete an order and its lines. Returns False if it did not exist."""
