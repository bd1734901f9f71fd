"""
Domain Interfaces (Ports)
"""

from .clients import LedgerClient

__all__ = [
    "LedgerClient",
]
