"""Book entity and its inventory ledger.

Books live independently of orders.  Each book knows how many copies are
still available for sale; every reservation into an order line takes
copies out of that count and every release puts them back.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.value_objects import Money

MAX_COPIES = 100_000


@dataclass(eq=False)
class Book:
    """A book in the catalog.

    Invariants:
    - ``number_of_copies`` is always within ``0..MAX_COPIES``
    - stock only moves through ``reserve()`` / ``release()`` or an explicit
      catalog stock update (``set_number_of_copies()``)
    """

    number: int
    title: str
    price: Money = field(default_factory=Money.zero)
    number_of_copies: int = 0
    original_title: str = ""
    release_date: datetime | None = None
    description: str = ""
    pages: int = 0
    cover: str = ""
    index: int = 0
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    # --- Inventory ledger -----------------------------------------------------

    def reserve(self, quantity: int) -> None:
        """Take copies out of available stock for an order line.

        Raises ValidationError if no copies are left or the request is
        larger than what is currently available.
        """
        if quantity <= 0:
            raise ValidationError("Reservation quantity must be positive")
        if self.number_of_copies <= 0:
            raise ValidationError(
                f"Book '{self.title}' has no copies available "
                f"(requested {quantity}, available 0)"
            )
        if quantity > self.number_of_copies:
            raise ValidationError(
                f"Requested quantity ({quantity}) exceeds available copies "
                f"({self.number_of_copies}) for book '{self.title}'"
            )
        self.number_of_copies -= quantity

    def release(self, quantity: int) -> None:
        """Return previously reserved copies to available stock."""
        if quantity <= 0:
            raise ValidationError("Release quantity must be positive")
        if self.number_of_copies + quantity > MAX_COPIES:
            raise ValidationError(
                f"Cannot release {quantity} copies of '{self.title}' "
                f"(stock would exceed {MAX_COPIES})"
            )
        self.number_of_copies += quantity

    # --- Catalog updates ------------------------------------------------------

    def set_number_of_copies(self, number_of_copies: int, reserved: int = 0) -> None:
        """Overwrite the available stock (restock / stock correction).

        *reserved* is the number of copies currently held by order lines.
        They come back on release, so available plus reserved must fit
        under ``MAX_COPIES``.
        """
        if number_of_copies < 0 or number_of_copies > MAX_COPIES:
            raise ValidationError(
                f"Number of copies must be between 0 and {MAX_COPIES}, "
                f"got {number_of_copies}"
            )
        if number_of_copies + reserved > MAX_COPIES:
            raise ValidationError(
                f"Number of copies for '{self.title}' can be at most "
                f"{MAX_COPIES - reserved} while {reserved} copies are reserved, "
                f"got {number_of_copies}"
            )
        self.number_of_copies = number_of_copies

    def update_price(self, new_price: Money) -> None:
        """Change the catalog price.

        This does NOT affect any existing order lines because they
        captured a price snapshot when the copies were reserved.
        """
        self.price = Money.price(new_price.amount)
