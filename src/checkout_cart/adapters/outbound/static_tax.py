from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from checkout_cart.core.ports.outbound.tax import TaxConfig


@dataclass(frozen=True)
class StaticTaxConfig(TaxConfig):
    rate: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        if self.rate < 0:
            raise ValueError(f"tax rate must be >= 0: {self.rate}")

    def tax_rate(self) -> Decimal:
        return self.rate
