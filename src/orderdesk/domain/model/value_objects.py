"""Value Objects: Money and Quantity.

Both are frozen dataclasses that refuse to hold an invalid value, so an
order total can never go negative and a cart line can never be empty.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from orderdesk.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "USD"
_ZERO = Decimal("0")


@functools.total_ordering
@dataclass(frozen=True)
class Money:
    """A non-negative Decimal amount in one currency.

    Prices, cart totals and coupon reductions are all Money.  Mixing
    currencies in arithmetic or comparisons raises ValidationError.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < _ZERO:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")

    @staticmethod
    def of(amount: str | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        return Money(value, currency)

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(_ZERO, currency)

    @property
    def is_zero(self) -> bool:
        return self.amount == _ZERO

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + self._amount_of(other), self.currency)

    def __sub__(self, other: Money) -> Money:
        difference = self.amount - self._amount_of(other)
        if difference < _ZERO:
            raise ValidationError(
                f"Subtracting {other} from {self} would give a negative amount"
            )
        return Money(difference, self.currency)

    def minus_floored(self, other: Money) -> Money:
        """``self - other``, or zero when *other* is larger."""
        return Money(max(self.amount - self._amount_of(other), _ZERO), self.currency)

    def __mul__(self, factor: int | Decimal) -> Money:
        # bool is an int subclass; True * price is never meant.
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError(f"Money can be scaled by int or Decimal, not {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        return self.amount < self._amount_of(other)

    def __str__(self) -> str:
        if self.currency == DEFAULT_CURRENCY:
            return f"${self.amount:.2f}"
        return f"{self.amount:.2f} {self.currency}"

    def _amount_of(self, other: Money) -> Decimal:
        if other.currency != self.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")
        return other.amount


@dataclass(frozen=True)
class Quantity:
    """How many units of a product a cart line holds; always at least one."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 1:
            raise ValidationError(f"Quantity must be positive, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)
