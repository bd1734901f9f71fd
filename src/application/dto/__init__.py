"""Data Transfer Objects for application layer."""

from .quote import QuoteRequest, QuoteResponse
from .settlement import JobAcknowledgement, SettlementResult

__all__ = [
    "QuoteRequest",
    "QuoteResponse",
    "JobAcknowledgement",
    "SettlementResult",
]
