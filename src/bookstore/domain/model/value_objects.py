"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from bookstore.domain.exceptions import ValidationError

CENT = Decimal("0.01")
MAX_PRICE = Decimal("9999.99")
MAX_LINE_QUANTITY = 10_000


@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount with two decimal places.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.  Catalog prices are further
    bounded by ``MAX_PRICE`` (see ``Money.price``); totals are not.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor)

    def __lt__(self, other: Money) -> bool:
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        return self.amount >= other.amount

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0.00"))

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to a 2-place Decimal safely."""
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        if not value.is_finite():
            raise ValidationError(f"Invalid money amount: {amount!r}")
        return Money(value.quantize(CENT, rounding=ROUND_HALF_UP))

    @staticmethod
    def price(amount: str | float | int | Decimal) -> Money:
        """Build a catalog price: at most 2 decimal places, 0..9999.99."""
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid price: {amount!r}") from exc
        if not value.is_finite() or value.as_tuple().exponent < -2:
            raise ValidationError(
                f"Price can have at most 2 decimal places, got {amount!r}"
            )
        if value < 0 or value > MAX_PRICE:
            raise ValidationError(
                f"Price must be between 0 and {MAX_PRICE}, got {value}"
            )
        return Money(value.quantize(CENT))


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity of copies on a single order line.

    Enforces the invariant that you cannot order zero or negative items,
    nor more than ``MAX_LINE_QUANTITY`` copies of one book per order.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")
        if self.value > MAX_LINE_QUANTITY:
            raise ValidationError(
                f"Quantity must not exceed {MAX_LINE_QUANTITY}, got {self.value}"
            )

    def __add__(self, other: Quantity) -> Quantity:
        return Quantity(self.value + other.value)

    def __str__(self) -> str:
        return str(self.value)
