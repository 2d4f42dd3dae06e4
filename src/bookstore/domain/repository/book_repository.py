"""Abstract repository for the Book entity.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQLAlchemy, in-memory)
live in the infrastructure layer and in the tests.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod

from bookstore.domain.model.book import Book


class BookRepository(ABC):

    @abstractmethod
    def get_by_id(self, book_id: uuid.UUID) -> Book | None:
        """Return a book by its ID, or None if not found."""

    @abstractmethod
    def get_by_number(self, number: int) -> Book | None:
        """Return a book by its external catalog number, or None."""

    @abstractmethod
    def existing_numbers(self) -> set[int]:
        """Return the catalog numbers of every stored book."""

    @abstractmethod
    def list_all(self) -> list[Book]:
        """Return every book, ordered by catalog number."""

    @abstractmethod
    def add(self, book: Book) -> None:
        """Register a new book; written on the next flush/commit."""

    @abstractmethod
    def delete(self, book: Book) -> None:
        """Remove a book; its order lines must already be detached."""
