from __future__ import annotations

from decimal import Decimal
from typing import Protocol


class TaxConfig(Protocol):
    def tax_rate(self) -> Decimal:
        """Non-negative percentage, e.g. Decimal("20") for 20%."""
        ...
