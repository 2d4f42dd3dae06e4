"""Application service: Show Order use case (query)."""

from __future__ import annotations

import uuid

from bookstore.application.dto import OrderDTO
from bookstore.application.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: uuid.UUID) -> OrderDTO | None:
        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                return None
            return OrderDTO.from_order(order)
