"""Application service: Create Order use case.

Orders start empty; books are added one line at a time afterwards.
Creation is idempotent on a client-generated order ID: repeating the
request returns the order created the first time instead of inserting
a duplicate or failing.
"""

from __future__ import annotations

import uuid

import structlog

from bookstore.application.dto import OrderDTO
from bookstore.application.failures import logged_failures
from bookstore.application.unit_of_work import UnitOfWork
from bookstore.domain.model.order import Order

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, address: str, order_id: uuid.UUID | None = None) -> OrderDTO:
        """Create a new empty order.

        Steps:
        1. If the caller supplied an ID, look it up before any write and
           return the existing order unchanged when found.
        2. Otherwise let the Order factory validate the address.
        3. Persist and return a DTO.
        """
        log = logger.bind(order_id=str(order_id) if order_id else None)
        with logged_failures(log, "create_order"), self._uow:
            if order_id is not None:
                existing = self._uow.orders.get_by_id(order_id)
                if existing is not None:
                    log.debug("create_order_idempotent_hit")
                    return OrderDTO.from_order(existing)

            order = Order.create(address=address, order_id=order_id)
            self._uow.orders.add(order)
            self._uow.commit()

        log.info("order_created", created_id=str(order.id))
        return OrderDTO.from_order(order)
