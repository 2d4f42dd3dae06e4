"""Fixtures for tests that run against a real SQLite database file."""

from __future__ import annotations

import pytest

from bookstore.domain.model.book import Book
from bookstore.domain.model.order import Order
from bookstore.domain.model.value_objects import Money
from bookstore.infrastructure import bootstrap
from bookstore.infrastructure.config import Settings
from bookstore.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(database_url=f"sqlite:///{tmp_path / 'bookstore.db'}")


@pytest.fixture
def session_factory(settings):
    return bootstrap.session_factory(settings)


@pytest.fixture
def make_uow(session_factory):
    def _make(cancel_token=None) -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(session_factory, cancel_token)

    return _make


@pytest.fixture
def seed(make_uow):
    """Store a book (stock 10, price 15.00) and an empty order; return their IDs."""

    def _seed(copies: int = 10, price: str = "15.00", title: str = "Dune", number: int = 1):
        book = Book(number=number, title=title, price=Money.of(price), number_of_copies=copies)
        order = Order.create("Main St 1")
        with make_uow() as uow:
            uow.books.add(book)
            uow.orders.add(order)
            uow.commit()
        return book.id, order.id

    return _seed
