"""Order aggregate: the core of the domain.

The Order is an aggregate root that owns its lines.  Each line reserves
copies of exactly one book and carries the price that book had when the
copies were first reserved.  The order's ``total_cost`` is a stored,
denormalized figure that must always equal the sum of its lines.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.book import Book
from bookstore.domain.model.value_objects import Money, Quantity

MAX_ADDRESS_LENGTH = 500


@dataclass(eq=False)
class OrderLine:
    """Copies of one book reserved by one order.

    ``price_at_purchase`` is locked when the line is created; only the
    quantity may grow afterwards.
    """

    order_id: uuid.UUID
    book_id: uuid.UUID
    quantity: Quantity
    price_at_purchase: Money  # locked at reservation time
    book: Book | None = None

    @property
    def subtotal(self) -> Money:
        return self.price_at_purchase * self.quantity.value

    @property
    def title(self) -> str:
        return self.book.title if self.book is not None else ""

    def increase(self, quantity: int) -> None:
        """Grow the reservation by *quantity* copies (snapshot unchanged)."""
        self.quantity = self.quantity + Quantity(quantity)


@dataclass(eq=False)
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders; it validates the
    address.  The ``__init__`` is intentionally simple so the repository
    can reconstitute persisted orders without re-validating.
    """

    address: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    total_cost: Money = field(default_factory=Money.zero)
    lines: list[OrderLine] = field(default_factory=list)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(address: str, order_id: uuid.UUID | None = None) -> Order:
        """Create a new, empty order."""
        if not address or not address.strip():
            raise ValidationError("Address is required")
        if len(address) > MAX_ADDRESS_LENGTH:
            raise ValidationError(
                f"Address cannot exceed {MAX_ADDRESS_LENGTH} characters"
            )
        return Order(address=address.strip(), id=order_id or uuid.uuid4())

    # --- Lines ----------------------------------------------------------------

    def line_for(self, book_id: uuid.UUID) -> OrderLine | None:
        for line in self.lines:
            if line.book_id == book_id:
                return line
        return None

    def attach(self, line: OrderLine) -> None:
        """Add a brand-new line; one line per book per order."""
        if line.order_id != self.id:
            raise ValidationError("Order line belongs to a different order")
        if self.line_for(line.book_id) is not None:
            raise ValidationError(
                f"Book '{line.book_id}' already has a line in order '{self.id}'"
            )
        self.lines.append(line)

    def detach(self, line: OrderLine) -> None:
        if line not in self.lines:
            raise ValidationError(
                f"Book '{line.book_id}' has no line in order '{self.id}'"
            )
        self.lines.remove(line)

    # --- Totals ---------------------------------------------------------------

    def calculate_total(self) -> Money:
        result = Money.zero()
        for line in self.lines:
            result = result + line.subtotal
        return result

    def recalculate_total(self) -> None:
        """Bring the stored total back in line with the order's lines.

        Must be called in the same transaction as every line mutation.
        """
        self.total_cost = self.calculate_total()

    @property
    def is_total_consistent(self) -> bool:
        return self.total_cost == self.calculate_total()
