"""Settlement entities: currencies, requests and ledger outcomes."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

_BASE58_ADDRESS = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")


def is_base58_address(value: str) -> bool:
    """Check that a string has the shape of a base58 account address."""
    return isinstance(value, str) and _BASE58_ADDRESS.match(value) is not None


class Currency(str, Enum):
    """Settlement currency."""

    LAMPORTS = "LAMPORTS"  # Native SOL, smallest unit
    USDC = "USDC"  # SPL token, minor units

    @property
    def amount_field(self) -> str:
        """Name of the request field carrying the amount."""
        return {
            Currency.LAMPORTS: "amountLamports",
            Currency.USDC: "amountMinor",
        }[self]

    @property
    def tx_prefix(self) -> str:
        """Prefix of simulated ledger transaction ids."""
        return {
            Currency.LAMPORTS: "SIM_SOL_",
            Currency.USDC: "SIM_USDC_",
        }[self]


@dataclass(frozen=True)
class SettlementRequest:
    """
    A settlement request that passed structural validation.

    Attributes:
        job_id: Caller's job correlation id
        dest: Destination account address
        currency: Settlement currency
        amount: Amount in the currency's smallest unit
        mint: Token mint address (USDC only)
    """

    job_id: str
    dest: str
    currency: Currency
    amount: int
    mint: Optional[str] = None


@dataclass(frozen=True)
class LedgerReceipt:
    """Simulated on-chain transfer reference."""

    currency: Currency
    tx_id: str


@dataclass(frozen=True)
class LedgerFailure:
    """
    Ledger refusal.

    Codes: invalid_destination_format, invalid_mint,
    invalid_amount, invalid_amount_minor.
    """

    code: str


LedgerResult = Union[LedgerReceipt, LedgerFailure]
