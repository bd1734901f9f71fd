"""Simulated implementation of LedgerClient."""

import secrets

import structlog

from src.core.metrics import track_ledger_latency
from src.domain.entities import (
    Currency,
    LedgerFailure,
    LedgerReceipt,
    LedgerResult,
    is_base58_address,
)
from src.domain.interfaces import LedgerClient

logger = structlog.get_logger(__name__)


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class MockLedgerClient(LedgerClient):
    """
    Mock ledger that validates transfer shape and returns simulated ids.

    No funds move. Transaction ids are the currency prefix followed by
    16 random bytes in hex, e.g. ``SIM_SOL_3f9c...``.
    """

    TX_ENTROPY_BYTES = 16

    async def pay_lamports(self, dest: str, lamports: int) -> LedgerResult:
        with track_ledger_latency(Currency.LAMPORTS.value):
            if not is_base58_address(dest):
                return LedgerFailure("invalid_destination_format")
            if not _is_positive_int(lamports):
                return LedgerFailure("invalid_amount")
            return self._receipt(Currency.LAMPORTS)

    async def pay_token(self, mint: str, dest: str, amount_minor: int) -> LedgerResult:
        with track_ledger_latency(Currency.USDC.value):
            if not is_base58_address(mint):
                return LedgerFailure("invalid_mint")
            if not is_base58_address(dest):
                return LedgerFailure("invalid_destination_format")
            if not _is_positive_int(amount_minor):
                return LedgerFailure("invalid_amount_minor")
            return self._receipt(Currency.USDC)

    def _receipt(self, currency: Currency) -> LedgerReceipt:
        tx_id = currency.tx_prefix + secrets.token_hex(self.TX_ENTROPY_BYTES)
        logger.info("ledger_transfer_simulated", currency=currency.value, tx=tx_id)
        return LedgerReceipt(currency=currency, tx_id=tx_id)
