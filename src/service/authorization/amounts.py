"""
Amount Validation for settlement requests.

Each currency has its own rules:

LAMPORTS:
    Any finite number is accepted and truncated toward zero. The ceiling is
    checked against the value as sent, before truncation, so ``10000.5`` with
    a ceiling of ``10000`` is rejected.

USDC:
    The amount must already be an exact integer of minor units; there is no
    truncation path. The token mint defaults to the configured mock mint and
    must have the shape of a base58 address.

Zero and negative amounts pass this stage; the ledger refuses them.

The validator returns a result object rather than raising, so the caller
decides how each rejection is reported.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional, Union

from src.core.config import Settings
from src.domain.entities import Currency, is_base58_address


@dataclass(frozen=True)
class ValidatedAmount:
    """An amount accepted for settlement, in the currency's smallest unit."""

    currency: Currency
    amount: int
    mint: Optional[str] = None


@dataclass(frozen=True)
class AmountRejection:
    """
    Why an amount was refused.

    ``reason`` is ``bad_request`` (with ``field``/``issue`` set) or
    ``amount_exceeds_max``.
    """

    reason: str
    field: Optional[str] = None
    issue: Optional[str] = None


AmountCheck = Union[ValidatedAmount, AmountRejection]


def to_finite_number(raw: Any) -> Optional[float]:
    """Coerce a JSON value to a finite number, or None if it is not one."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return raw if math.isfinite(raw) else None
    if isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            return None
        return value if math.isfinite(value) else None
    return None


def to_exact_integer(raw: Any) -> Optional[int]:
    """Coerce a JSON value to an int if it is integral, else None."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    value = to_finite_number(raw)
    if value is None or not float(value).is_integer():
        return None
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            pass
    return int(value)


class AmountValidator:
    """Per-currency numeric checks and per-transaction ceilings."""

    def __init__(self, settings: Settings):
        self._settings = settings

    def validate(
        self,
        currency: Currency,
        raw_amount: Any,
        mint: Optional[str] = None,
    ) -> AmountCheck:
        if currency is Currency.LAMPORTS:
            return self._validate_lamports(raw_amount)
        if currency is Currency.USDC:
            return self._validate_usdc(raw_amount, mint)
        raise ValueError(f"no amount rules for {currency!r}")

    def _validate_lamports(self, raw_amount: Any) -> AmountCheck:
        value = to_finite_number(raw_amount)
        if value is None:
            return AmountRejection(
                reason="bad_request",
                field=Currency.LAMPORTS.amount_field,
                issue="number_required",
            )
        if value > self._settings.max_lamports_per_tx:
            return AmountRejection(reason="amount_exceeds_max")
        return ValidatedAmount(currency=Currency.LAMPORTS, amount=math.trunc(value))

    def _validate_usdc(self, raw_amount: Any, mint: Optional[str]) -> AmountCheck:
        amount = to_exact_integer(raw_amount)
        if amount is None:
            return AmountRejection(
                reason="bad_request",
                field=Currency.USDC.amount_field,
                issue="integer_required",
            )
        if amount > self._settings.max_usdc_minor_per_tx:
            return AmountRejection(reason="amount_exceeds_max")

        mint = mint or self._settings.default_usdc_mint
        if not is_base58_address(mint):
            return AmountRejection(reason="bad_request", field="mint", issue="invalid_format")

        return ValidatedAmount(currency=Currency.USDC, amount=amount, mint=mint)
