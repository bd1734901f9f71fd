"""Domain Entities - Core business objects."""

from .settlement import (
    Currency,
    LedgerFailure,
    LedgerReceipt,
    LedgerResult,
    SettlementRequest,
    is_base58_address,
)

__all__ = [
    "Currency",
    "LedgerFailure",
    "LedgerReceipt",
    "LedgerResult",
    "SettlementRequest",
    "is_base58_address",
]
