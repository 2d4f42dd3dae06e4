"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals (or ORM-attached entities) to the outside world.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from bookstore.domain.model.book import Book
from bookstore.domain.model.order import Order, OrderLine


@dataclass(frozen=True)
class OrderDTO:
    """Output: order summary (no lines)."""

    id: uuid.UUID
    address: str
    created_at: datetime
    total_cost: Decimal

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            address=order.address,
            created_at=order.created_at,
            total_cost=order.total_cost.amount,
        )


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single order line as displayed to the user."""

    book_id: uuid.UUID
    title: str
    quantity: int
    price_at_purchase: Decimal

    @property
    def subtotal(self) -> Decimal:
        return self.price_at_purchase * self.quantity

    @staticmethod
    def from_line(line: OrderLine) -> OrderLineDTO:
        return OrderLineDTO(
            book_id=line.book_id,
            title=line.title,
            quantity=line.quantity.value,
            price_at_purchase=line.price_at_purchase.amount,
        )


@dataclass(frozen=True)
class BookDTO:
    """Output: a catalog entry."""

    id: uuid.UUID
    number: int
    title: str
    original_title: str
    release_date: datetime | None
    description: str
    pages: int
    cover: str
    index: int
    number_of_copies: int
    price: Decimal

    @staticmethod
    def from_book(book: Book) -> BookDTO:
        return BookDTO(
            id=book.id,
            number=book.number,
            title=book.title,
            original_title=book.original_title,
            release_date=book.release_date,
            description=book.description,
            pages=book.pages,
            cover=book.cover,
            index=book.index,
            number_of_copies=book.number_of_copies,
            price=book.price.amount,
        )


@dataclass(frozen=True)
class ExternalBookRecord:
    """Input: one catalog record as published by the external book feed."""

    number: int
    title: str
    original_title: str = ""
    release_date: str = ""
    description: str = ""
    pages: int = 0
    cover: str = ""
    index: int = 0

    @staticmethod
    def from_json(raw: dict) -> ExternalBookRecord:
        return ExternalBookRecord(
            number=int(raw["number"]),
            title=raw.get("title", ""),
            original_title=raw.get("originalTitle", ""),
            release_date=raw.get("releaseDate", ""),
            description=raw.get("description", ""),
            pages=int(raw.get("pages", 0)),
            cover=raw.get("cover", ""),
            index=int(raw.get("index", 0)),
        )
