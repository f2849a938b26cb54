"""Money and Quantity, the two primitives every price calculation uses.

Both are frozen dataclasses that validate on construction, so a negative
amount or a zero quantity cannot exist anywhere in the domain.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import total_ordering
from typing import Iterable

from pos.domain.exceptions import ValidationError

CURRENCY_SYMBOLS = {"INR": "₹", "USD": "$"}
CENTS = Decimal("0.01")


def set_currency_symbol(currency: str, symbol: str) -> None:
    """Override how a currency is shown (``[display] currency_symbol``)."""
    CURRENCY_SYMBOLS[currency] = symbol


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@total_ordering
@dataclass(frozen=True)
class Money:
    """A non-negative amount in one currency.

    Arithmetic stays exact in Decimal; only ``rounded()`` and ``str()``
    round to paise.
    """

    amount: Decimal
    currency: str = "INR"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Build Money from user input or stored text.

        Floats go through ``str`` so ``Money.of(0.1)`` is exactly 0.10.
        """
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        if not value.is_finite():
            raise ValidationError(f"Invalid money amount: {amount!r}")
        return Money(value)

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))

    @staticmethod
    def total(amounts: Iterable[Money]) -> Money:
        result = Money.zero()
        for amount in amounts:
            result += amount
        return result

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + self._other_amount(other), self.currency)

    def __sub__(self, other: Money) -> Money:
        difference = self.amount - self._other_amount(other)
        if difference < 0:
            raise ValidationError(
                f"Subtracting {other} from {self} would give a negative amount"
            )
        return Money(difference, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not _is_int(factor):
            raise TypeError(f"Money can only be multiplied by an int, not {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def scale(self, ratio: Decimal) -> Money:
        """Multiply by a non-negative decimal ratio (e.g. an estimated cost share)."""
        return Money(self.amount * ratio, self.currency)

    def __lt__(self, other: Money) -> bool:
        return self.amount < self._other_amount(other)

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def rounded(self) -> Decimal:
        return self.amount.quantize(CENTS, rounding=ROUND_HALF_UP)

    def __str__(self) -> str:
        symbol = CURRENCY_SYMBOLS.get(self.currency, f"{self.currency} ")
        return f"{symbol}{self.rounded():.2f}"

    def _other_amount(self, other: Money) -> Decimal:
        if self.currency != other.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")
        return other.amount


@dataclass(frozen=True)
class Quantity:
    """Number of units on a line; always a positive int."""

    value: int

    def __post_init__(self) -> None:
        if not _is_int(self.value):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError(f"Quantity must be positive, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)
