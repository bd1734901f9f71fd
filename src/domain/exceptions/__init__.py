"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException
from .authentication import AuthenticationFailure
from .settlement import (
    AmountExceedsMax,
    DailyLimitReached,
    DestinationNotWhitelisted,
    PolicyRejection,
    SettlementFailed,
    UnsupportedCurrency,
    ValidationFailure,
)

__all__ = [
    "DomainException",
    "AuthenticationFailure",
    "ValidationFailure",
    "UnsupportedCurrency",
    "PolicyRejection",
    "DestinationNotWhitelisted",
    "DailyLimitReached",
    "AmountExceedsMax",
    "SettlementFailed",
]
