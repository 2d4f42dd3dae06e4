"""Application service: Show Order Lines use case (query)."""

from __future__ import annotations

import uuid

from bookstore.application.dto import OrderLineDTO
from bookstore.application.unit_of_work import UnitOfWork


class ShowOrderLinesHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: uuid.UUID) -> list[OrderLineDTO]:
        """Lines of an order with book titles. Unknown order gives an empty list."""
        with self._uow:
            order = self._uow.orders.get_with_lines(order_id)
            if order is None:
                return []
            return [OrderLineDTO.from_line(line) for line in order.lines]
