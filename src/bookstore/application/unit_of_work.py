"""Unit of Work: the transaction boundary for every use case.

A unit of work hands out the repositories for one transaction.  Use it as
a context manager: anything not explicitly committed when the block exits
is rolled back, including after an exception.

    with uow:
        order = uow.orders.get_with_lines(order_id)
        ...
        uow.commit()
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from bookstore.application.cancellation import CancellationToken
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.order_repository import OrderRepository


class UnitOfWork(ABC):

    books: BookRepository
    orders: OrderRepository

    def __init__(self, cancel_token: CancellationToken | None = None) -> None:
        self.cancel_token = cancel_token or CancellationToken()

    def __enter__(self) -> UnitOfWork:
        self.cancel_token.raise_if_cancelled()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    def commit(self) -> None:
        """Commit the transaction unless the caller has cancelled it.

        Raises ConcurrencyConflictError when another transaction changed
        the same book or order first.
        """
        self.cancel_token.raise_if_cancelled()
        self._commit()

    @abstractmethod
    def save_changes(self) -> None:
        """Write pending changes inside the open transaction (no commit)."""

    @abstractmethod
    def _commit(self) -> None:
        ...

    @abstractmethod
    def rollback(self) -> None:
        """Discard everything since the last commit. Safe to call twice."""
