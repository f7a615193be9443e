from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

DEFAULT_CURRENCY = "GBP"

_CENT = Decimal("0.01")

Amount = Decimal | int | str | float


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def to_decimal(value: Amount) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() first so floats never leak binary noise into the amount
    return Decimal(str(value))


@dataclass(frozen=True)
class Money:
    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", _quantize(to_decimal(self.amount)))

    @staticmethod
    def of(amount: Amount, currency: str = DEFAULT_CURRENCY) -> "Money":
        return Money(_quantize(to_decimal(amount)), currency)

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> "Money":
        return Money(Decimal("0"), currency)

    def raw(self) -> Decimal:
        return self.amount

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_positive(self) -> bool:
        return self.amount > 0

    def __add__(self, other: "Money") -> "Money":
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: "Money") -> "Money":
        self._assert_same_currency(other)
        return Money(self.amount - other.amount, self.currency)

    def __mul__(self, n: int | Decimal) -> "Money":
        if isinstance(n, float):
            raise TypeError("multiply Money by int or Decimal, not float")
        return Money(self.amount * Decimal(n), self.currency)

    __rmul__ = __mul__

    def percent(self, rate: Amount) -> "Money":
        """``rate`` percent of this amount, rounded once at the end."""
        return Money(self.amount * to_decimal(rate) / Decimal(100), self.currency)

    def __lt__(self, other: "Money") -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: "Money") -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: "Money") -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: "Money") -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def _assert_same_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise ValueError(f"currency_mismatch: {self.currency} vs {other.currency}")


def fold_money(values: Iterable[Money], currency: str = DEFAULT_CURRENCY) -> Money:
    total = Money.zero(currency)
    for v in values:
        total = total + v
    return total
