"""Application service: List Books use case (query)."""

from __future__ import annotations

from bookstore.application.dto import BookDTO
from bookstore.application.unit_of_work import UnitOfWork


class ListBooksHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[BookDTO]:
        with self._uow:
            return [BookDTO.from_book(b) for b in self._uow.books.list_all()]
