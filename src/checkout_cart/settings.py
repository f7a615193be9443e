from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Mapping

from checkout_cart.core.domain.model.money import DEFAULT_CURRENCY

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class CheckoutSettings:
    currency: str = DEFAULT_CURRENCY
    tax_rate: Decimal = Decimal("0")
    show_discount_form: bool = False
    log_level: str = "INFO"
    log_json: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    def __post_init__(self) -> None:
        if self.tax_rate < 0:
            raise ValueError(f"CHECKOUT_TAX_RATE must be >= 0: {self.tax_rate}")
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"CHECKOUT_LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}")
        if not 0 < self.port < 65536:
            raise ValueError(f"CHECKOUT_PORT out of range: {self.port}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "CheckoutSettings":
        env = os.environ if environ is None else environ
        return cls(
            currency=env.get("CHECKOUT_CURRENCY", DEFAULT_CURRENCY).strip().upper(),
            tax_rate=_decimal(env.get("CHECKOUT_TAX_RATE", "0"), "CHECKOUT_TAX_RATE"),
            show_discount_form=_flag(
                env.get("CHECKOUT_SHOW_DISCOUNT_FORM", "false"),
                "CHECKOUT_SHOW_DISCOUNT_FORM",
            ),
            log_level=env.get("CHECKOUT_LOG_LEVEL", "INFO").strip().upper(),
            log_json=_flag(env.get("CHECKOUT_LOG_JSON", "false"), "CHECKOUT_LOG_JSON"),
            host=env.get("CHECKOUT_HOST", "0.0.0.0"),
            port=_int(env.get("CHECKOUT_PORT", "8000"), "CHECKOUT_PORT"),
        )


def _decimal(raw: str, name: str) -> Decimal:
    try:
        return Decimal(raw.strip())
    except InvalidOperation:
        raise ValueError(f"{name} must be a number: {raw!r}") from None


def _int(raw: str, name: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer: {raw!r}") from None


def _flag(raw: str, name: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be true or false: {raw!r}")
