"""Exact fixed-point currency values."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from fractions import Fraction

CENTS = Decimal("0.01")


class MoneyParseError(ValueError):
    """Raised when text cannot be read as an amount of money."""


def _quantize(value: Decimal) -> Decimal:
    try:
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"Amount out of range: {value}") from exc


@dataclass(frozen=True, order=True, slots=True)
class Money:
    """
    An amount of money held to exactly two fraction digits.

    Every constructed value is rounded half-up to cents, so arithmetic never
    accumulates binary floating-point drift. Scaling by a payout ratio does a
    single multiply-then-divide and rounds once at the end.
    """

    amount: Decimal = Decimal("0.00")

    def __post_init__(self) -> None:
        amount = self.amount
        if not isinstance(amount, Decimal):
            if isinstance(amount, float):
                raise TypeError("Money cannot be built from a float")
            amount = Decimal(amount)
        object.__setattr__(self, "amount", _quantize(amount))

    @classmethod
    def zero(cls) -> "Money":
        """Return $0.00."""
        return cls(Decimal(0))

    @classmethod
    def from_major(cls, units: int) -> "Money":
        """Return a whole-dollar amount."""
        return cls(Decimal(units))

    @classmethod
    def parse(cls, text: str) -> "Money":
        """
        Parse a decimal string such as ``"12.5"``, ``"$1,000"`` or ``" 10 "``.

        Raises:
            MoneyParseError: If the text is not a finite decimal number
                or is too large to hold to the cent.
        """
        cleaned = text.strip().replace(",", "")
        if cleaned.startswith("$"):
            cleaned = cleaned[1:]
        elif cleaned.startswith("-$"):
            cleaned = "-" + cleaned[2:]
        try:
            value = Decimal(cleaned)
        except InvalidOperation as exc:
            raise MoneyParseError(f"Not an amount of money: {text!r}") from exc
        if not value.is_finite():
            raise MoneyParseError(f"Not an amount of money: {text!r}")
        try:
            return cls(value)
        except ValueError as exc:
            raise MoneyParseError(f"Not an amount of money: {text!r}") from exc

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    @property
    def is_positive(self) -> bool:
        return self.amount > 0

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.amount + other.amount)

    def __sub__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.amount - other.amount)

    def __mul__(self, factor: int | Fraction) -> "Money":
        if isinstance(factor, bool):
            return NotImplemented
        if isinstance(factor, int):
            return Money(self.amount * factor)
        if isinstance(factor, Fraction):
            return Money(self.amount * factor.numerator / factor.denominator)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, divisor: int) -> "Money":
        if isinstance(divisor, bool) or not isinstance(divisor, int):
            return NotImplemented
        if divisor == 0:
            raise ZeroDivisionError("Cannot divide money by zero")
        return Money(self.amount / divisor)

    def __neg__(self) -> "Money":
        return Money(-self.amount)

    def __abs__(self) -> "Money":
        return Money(abs(self.amount))

    def __str__(self) -> str:
        sign = "-" if self.amount < 0 else ""
        return f"{sign}${abs(self.amount):,.2f}"

    def __repr__(self) -> str:
        return f"Money('{self.amount}')"

    def to_display_string(self) -> str:
        """Format as a currency string, e.g. ``$12.50``."""
        return str(self)
