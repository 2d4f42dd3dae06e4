"""Application service: Show Book use case (query)."""

from __future__ import annotations

import uuid

from bookstore.application.dto import BookDTO
from bookstore.application.unit_of_work import UnitOfWork


class ShowBookHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, book_id: uuid.UUID) -> BookDTO | None:
        with self._uow:
            book = self._uow.books.get_by_id(book_id)
            if book is None:
                return None
            return BookDTO.from_book(book)
