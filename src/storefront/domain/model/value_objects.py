"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from storefront.domain.exceptions import ValidationError

_MINOR_PER_MAJOR = 100


@dataclass(frozen=True)
class Money:
    """Monetary amount in integer minor units (cents).

    Integers keep cart arithmetic exact; Decimal is used only where a
    percentage has to be rounded back to a whole minor unit.
    """

    minor_units: int
    currency: str = "USD"

    def __post_init__(self) -> None:
        if isinstance(self.minor_units, bool) or not isinstance(self.minor_units, int):
            raise ValidationError(
                f"Money must be whole minor units, got {type(self.minor_units).__name__}"
            )
        if self.minor_units < 0:
            raise ValidationError(
                f"Money amount cannot be negative, got {self.minor_units}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.minor_units + other.minor_units, self.currency)

    def __sub__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.minor_units - other.minor_units
        if result < 0:
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(result, self.currency)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.minor_units * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.minor_units < other.minor_units

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.minor_units <= other.minor_units

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.minor_units > other.minor_units

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.minor_units >= other.minor_units

    def percent(self, rate: int | float | Decimal) -> Money:
        """Return ``rate`` percent of this amount, rounded half-up."""
        exact = Decimal(self.minor_units) * Decimal(str(rate)) / Decimal(100)
        rounded = int(exact.quantize(Decimal(1), rounding=ROUND_HALF_UP))
        return Money(max(0, rounded), self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        major = Decimal(self.minor_units) / _MINOR_PER_MAJOR
        return f"${major:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(0, currency)

    @staticmethod
    def of(amount: str | int | Decimal) -> Money:
        """Parse a major-unit amount such as ``"12.50"`` into minor units."""
        try:
            major = Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        if not major.is_finite():
            raise ValidationError(f"Invalid money amount: {amount!r}")
        minor = major * _MINOR_PER_MAJOR
        if minor != minor.to_integral_value():
            raise ValidationError(
                f"Money amount {amount!r} has more precision than one minor unit"
            )
        return Money(int(minor))


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    A cart line never holds zero units: dropping to zero removes the line.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __add__(self, other: int) -> Quantity:
        return Quantity(self.value + other)

    def __str__(self) -> str:
        return str(self.value)
