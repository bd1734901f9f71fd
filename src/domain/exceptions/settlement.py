"""Settlement-related domain exceptions."""

from typing import Dict, Optional

from .base import DomainException


class ValidationFailure(DomainException):
    """Raised when a field is missing or malformed."""

    status_code = 400

    def __init__(
        self,
        issues: Dict[str, str],
        message: Optional[str] = None,
        code: str = "bad_request",
    ):
        super().__init__(
            message=message or "; ".join(f"{field}: {issue}" for field, issue in issues.items()),
            code=code,
        )
        self.issues = dict(issues)


class UnsupportedCurrency(ValidationFailure):
    """Raised when the requested currency is not settled by this gateway."""

    def __init__(self, currency: str):
        super().__init__(
            {},
            message=f"Unsupported currency: {currency}",
            code="unsupported_currency",
        )
        self.currency = currency


class PolicyRejection(DomainException):
    """Base for spending-policy rejections."""

    status_code = 403


class DestinationNotWhitelisted(PolicyRejection):
    """Raised when the destination is not on the treasury whitelist."""

    def __init__(self):
        super().__init__(
            message="Destination is not whitelisted",
            code="dest_not_whitelisted",
        )


class DailyLimitReached(PolicyRejection):
    """Raised when the daily settlement quota is exhausted."""

    status_code = 429

    def __init__(self):
        super().__init__(
            message="Daily settlement limit reached",
            code="daily_limit_reached",
        )


class AmountExceedsMax(PolicyRejection):
    """Raised when an amount is above the per-transaction ceiling."""

    status_code = 429

    def __init__(self):
        super().__init__(
            message="Amount exceeds per-transaction maximum",
            code="amount_exceeds_max",
        )


class SettlementFailed(DomainException):
    """Raised when the ledger refuses or fails a validated settlement."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="settlement_failed",
        )
