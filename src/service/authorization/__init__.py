"""
Settlement Authorization Module

Provides the gates every settlement passes through, in order:

1. SignatureVerifier - HMAC over the canonical request body
2. WhitelistGuard - destination allow-list
3. RateLimiter - daily attempt quota
4. AmountValidator - per-currency numeric rules and ceilings

Usage:
    from src.service.authorization import SignatureVerifier, RateLimiter

    verifier = SignatureVerifier(secret="change-me")
    ok = verifier.verify(payload, signature)
"""

from .signature import SignatureVerifier, canonical_json, to_json_number_domain
from .whitelist import WhitelistGuard, parse_whitelist
from .rate_limit import RateLimiter
from .amounts import (
    AmountCheck,
    AmountRejection,
    AmountValidator,
    ValidatedAmount,
    to_exact_integer,
    to_finite_number,
)

__all__ = [
    "SignatureVerifier",
    "canonical_json",
    "to_json_number_domain",
    "WhitelistGuard",
    "parse_whitelist",
    "RateLimiter",
    "AmountValidator",
    "AmountCheck",
    "AmountRejection",
    "ValidatedAmount",
    "to_exact_integer",
    "to_finite_number",
]
