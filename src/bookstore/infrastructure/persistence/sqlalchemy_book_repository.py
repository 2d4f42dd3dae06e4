"""SQLAlchemy-backed implementation of BookRepository."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookstore.application.cancellation import CancellationToken
from bookstore.domain.model.book import Book
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.infrastructure.persistence.orm import books


class SqlAlchemyBookRepository(BookRepository):

    def __init__(self, session: Session, cancel_token: CancellationToken) -> None:
        self._session = session
        self._cancel_token = cancel_token

    # --- BookRepository interface ---------------------------------------------

    def get_by_id(self, book_id: uuid.UUID) -> Book | None:
        self._cancel_token.raise_if_cancelled()
        return self._session.get(Book, book_id)

    def get_by_number(self, number: int) -> Book | None:
        self._cancel_token.raise_if_cancelled()
        stmt = select(Book).where(books.c.number == number)
        return self._session.scalars(stmt).one_or_none()

    def existing_numbers(self) -> set[int]:
        self._cancel_token.raise_if_cancelled()
        return set(self._session.scalars(select(books.c.number)))

    def list_all(self) -> list[Book]:
        self._cancel_token.raise_if_cancelled()
        stmt = select(Book).order_by(books.c.number)
        return list(self._session.scalars(stmt))

    def add(self, book: Book) -> None:
        self._cancel_token.raise_if_cancelled()
        self._session.add(book)

    def delete(self, book: Book) -> None:
        self._cancel_token.raise_if_cancelled()
        self._session.delete(book)
