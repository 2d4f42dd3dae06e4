"""Application service: List Orders use case (query)."""

from __future__ import annotations

from bookstore.application.dto import OrderDTO
from bookstore.application.unit_of_work import UnitOfWork


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[OrderDTO]:
        """All orders, newest first."""
        with self._uow:
            return [OrderDTO.from_order(o) for o in self._uow.orders.list_all()]
