"""Relational schema and the mapping of domain classes onto it.

The domain dataclasses stay free of persistence concerns; they are mapped
imperatively onto plain ``Table`` objects here.  The database repeats the
domain bounds as CHECK constraints, and ``books``/``orders`` carry a
``version`` column that SQLAlchemy compares-and-swaps on every UPDATE.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    Uuid,
)
from sqlalchemy.orm import registry, relationship
from sqlalchemy.types import TypeDecorator

from bookstore.domain.model.book import MAX_COPIES, Book
from bookstore.domain.model.order import MAX_ADDRESS_LENGTH, Order, OrderLine
from bookstore.domain.model.value_objects import (
    MAX_LINE_QUANTITY,
    MAX_PRICE,
    Money,
    Quantity,
)

metadata = MetaData()
mapper_registry = registry(metadata=metadata)


# --- Value object columns -----------------------------------------------------


class MoneyType(TypeDecorator):
    """Stores ``Money`` as NUMERIC(12, 2)."""

    impl = Numeric(12, 2)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return value.amount

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Money.of(Decimal(value))


class QuantityType(TypeDecorator):
    """Stores ``Quantity`` as a plain INTEGER."""

    impl = Integer
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return value.value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Quantity(int(value))


# --- Tables -------------------------------------------------------------------

books = Table(
    "books",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("number", Integer, nullable=False, unique=True),
    Column("title", String(500), nullable=False),
    Column("original_title", String(500), nullable=False, default=""),
    Column("release_date", DateTime, nullable=True),
    Column("description", Text, nullable=False, default=""),
    Column("pages", Integer, nullable=False, default=0),
    Column("cover", String(1000), nullable=False, default=""),
    Column("index", Integer, nullable=False, default=0),
    Column("number_of_copies", Integer, nullable=False, default=0),
    Column("price", MoneyType, nullable=False),
    Column("version", Integer, nullable=False),
    CheckConstraint(
        f"number_of_copies >= 0 AND number_of_copies <= {MAX_COPIES}",
        name="ck_books_copies_range",
    ),
    CheckConstraint(f"price >= 0 AND price <= {MAX_PRICE}", name="ck_books_price_range"),
)

orders = Table(
    "orders",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("address", String(MAX_ADDRESS_LENGTH), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Column("total_cost", MoneyType, nullable=False),
    Column("version", Integer, nullable=False),
    CheckConstraint("total_cost >= 0", name="ck_orders_total_nonneg"),
)

order_lines = Table(
    "order_lines",
    metadata,
    Column(
        "order_id",
        Uuid,
        ForeignKey("orders.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "book_id",
        Uuid,
        ForeignKey("books.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("quantity", QuantityType, nullable=False),
    Column("price_at_purchase", MoneyType, nullable=False),
    CheckConstraint(
        f"quantity >= 1 AND quantity <= {MAX_LINE_QUANTITY}",
        name="ck_order_lines_quantity_range",
    ),
    CheckConstraint(
        f"price_at_purchase >= 0 AND price_at_purchase <= {MAX_PRICE}",
        name="ck_order_lines_price_range",
    ),
)


# --- Mappers ------------------------------------------------------------------


def start_mappers() -> None:
    """Map the domain classes onto the tables. Safe to call more than once."""
    if mapper_registry.mappers:
        return

    mapper_registry.map_imperatively(Book, books, version_id_col=books.c.version)
    mapper_registry.map_imperatively(
        OrderLine,
        order_lines,
        properties={"book": relationship(Book, lazy="joined")},
    )
    mapper_registry.map_imperatively(
        Order,
        orders,
        version_id_col=orders.c.version,
        properties={
            "lines": relationship(OrderLine, cascade="all, delete-orphan"),
        },
    )
