"""Dependency injection for FastAPI."""

import json
from typing import Annotated, Any, Optional

from fastapi import Depends, Header, Request

from src.core.config import Settings, get_settings
from src.domain.exceptions import ValidationFailure
from src.domain.interfaces import LedgerClient
from src.infrastructure.clients import MockLedgerClient
from src.service.authorization import (
    AmountValidator,
    RateLimiter,
    SignatureVerifier,
    WhitelistGuard,
)
from src.application.services import QuoteService, SettlementPipeline


def get_app_settings() -> Settings:
    """Get the application settings."""
    return get_settings()


# Request dependencies
async def get_json_body(request: Request) -> Any:
    """Parse the request body as JSON; an empty body is ``{}``."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise ValidationFailure({"body": "invalid_json"})


def get_signature(
    x_signature: Annotated[Optional[str], Header()] = None,
) -> Optional[str]:
    """Get the hex HMAC from the X-Signature header."""
    return x_signature


# Authorization dependencies
def get_rate_limiter(request: Request) -> RateLimiter:
    """Get the application's RateLimiter (one per app)."""
    return request.app.state.rate_limiter


def get_signature_verifier(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> SignatureVerifier:
    """Get a SignatureVerifier keyed with the shared secret."""
    return SignatureVerifier(settings.hmac_secret)


def get_whitelist_guard(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> WhitelistGuard:
    """Get a WhitelistGuard instance."""
    return WhitelistGuard(settings)


def get_amount_validator(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AmountValidator:
    """Get an AmountValidator instance."""
    return AmountValidator(settings)


# External client dependencies
def get_ledger_client() -> LedgerClient:
    """Get a LedgerClient instance."""
    return MockLedgerClient()


# Service dependencies
def get_settlement_pipeline(
    verifier: Annotated[SignatureVerifier, Depends(get_signature_verifier)],
    whitelist: Annotated[WhitelistGuard, Depends(get_whitelist_guard)],
    rate_limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
    amount_validator: Annotated[AmountValidator, Depends(get_amount_validator)],
    ledger_client: Annotated[LedgerClient, Depends(get_ledger_client)],
) -> SettlementPipeline:
    """Get a SettlementPipeline instance with all dependencies."""
    return SettlementPipeline(
        verifier=verifier,
        whitelist=whitelist,
        rate_limiter=rate_limiter,
        amount_validator=amount_validator,
        ledger_client=ledger_client,
    )


def get_quote_service(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> QuoteService:
    """Get a QuoteService instance."""
    return QuoteService(settings)
