"""SQLAlchemy-backed implementation of OrderRepository.

Lines are owned by their order (``delete-orphan`` cascade), so detaching
a line from ``order.lines`` is what schedules its DELETE.  ``remove_line``
only has to deal with lines that were never flushed.
"""

from __future__ import annotations

import uuid

from sqlalchemy import inspect, select
from sqlalchemy.orm import Session, joinedload, selectinload

from bookstore.application.cancellation import CancellationToken
from bookstore.domain.model.order import Order, OrderLine
from bookstore.domain.repository.order_repository import OrderRepository
from bookstore.infrastructure.persistence.orm import order_lines, orders


class SqlAlchemyOrderRepository(OrderRepository):

    def __init__(self, session: Session, cancel_token: CancellationToken) -> None:
        self._session = session
        self._cancel_token = cancel_token

    # --- Orders ---------------------------------------------------------------

    def get_by_id(self, order_id: uuid.UUID) -> Order | None:
        self._cancel_token.raise_if_cancelled()
        return self._session.get(Order, order_id)

    def get_with_lines(self, order_id: uuid.UUID) -> Order | None:
        self._cancel_token.raise_if_cancelled()
        stmt = (
            select(Order)
            .where(orders.c.id == order_id)
            .options(selectinload(Order.lines).joinedload(OrderLine.book))
        )
        return self._session.scalars(stmt).one_or_none()

    def list_all(self) -> list[Order]:
        self._cancel_token.raise_if_cancelled()
        stmt = select(Order).order_by(orders.c.created_at.desc())
        return list(self._session.scalars(stmt))

    def add(self, order: Order) -> None:
        self._cancel_token.raise_if_cancelled()
        self._session.add(order)

    def delete(self, order_id: uuid.UUID) -> bool:
        self._cancel_token.raise_if_cancelled()
        order = self._session.get(Order, order_id)
        if order is None:
            return False
        self._session.delete(order)
        return True

    # --- Lines ----------------------------------------------------------------

    def get_line(self, order_id: uuid.UUID, book_id: uuid.UUID) -> OrderLine | None:
        # Goes through the aggregate so unflushed lines are visible too.
        order = self.get_with_lines(order_id)
        if order is None:
            return None
        return order.line_for(book_id)

    def lines_for_book(self, book_id: uuid.UUID) -> list[OrderLine]:
        self._cancel_token.raise_if_cancelled()
        stmt = select(OrderLine).where(order_lines.c.book_id == book_id)
        return list(self._session.scalars(stmt))

    def add_line(self, line: OrderLine) -> None:
        self._cancel_token.raise_if_cancelled()
        self._session.add(line)

    def remove_line(self, line: OrderLine) -> None:
        self._cancel_token.raise_if_cancelled()
        state = inspect(line)
        if state.pending:
            self._session.expunge(line)
        elif state.persistent:
            self._session.delete(line)
