"""External service clients."""

from .ledger_client import MockLedgerClient

__all__ = [
    "MockLedgerClient",
]
