"""Settlement pipeline - orchestrates authorization of a settlement request."""

from typing import Any, Dict, Optional

import structlog

from src.core.metrics import record_daily_attempts, record_rejection, record_settlement
from src.domain.entities import Currency, LedgerFailure, LedgerResult, SettlementRequest
from src.domain.exceptions import (
    AmountExceedsMax,
    AuthenticationFailure,
    DailyLimitReached,
    DestinationNotWhitelisted,
    DomainException,
    SettlementFailed,
    UnsupportedCurrency,
    ValidationFailure,
)
from src.domain.interfaces import LedgerClient
from src.application.dto import JobAcknowledgement, SettlementResult
from src.service.authorization import (
    AmountRejection,
    AmountValidator,
    RateLimiter,
    SignatureVerifier,
    WhitelistGuard,
)

logger = structlog.get_logger(__name__)


def _required_text(body: Dict[str, Any], field: str) -> str:
    value = body.get(field)
    if not isinstance(value, str) or not value:
        raise ValidationFailure({field: "required"})
    return value


class SettlementPipeline:
    """
    Application service for the settle and job-complete use cases.

    Stages run in a fixed order and the first failure ends the request:

    1. signature        -> 401 invalid_signature
    2. jobId, dest      -> 400 bad_request
    3. whitelist        -> 403 dest_not_whitelisted
    4. daily quota      -> 429 daily_limit_reached
    5. currency, amount -> 400 unsupported_currency / bad_request,
                           429 amount_exceeds_max
    6. ledger           -> 500 settlement_failed

    Authentication comes first so that nothing about the payload is
    revealed to an unauthenticated caller. The quota is consumed before
    amount validation, so malformed amounts still count against it.
    """

    def __init__(
        self,
        verifier: SignatureVerifier,
        whitelist: WhitelistGuard,
        rate_limiter: RateLimiter,
        amount_validator: AmountValidator,
        ledger_client: LedgerClient,
    ):
        self._verifier = verifier
        self._whitelist = whitelist
        self._rate_limiter = rate_limiter
        self._amount_validator = amount_validator
        self._ledger_client = ledger_client

    def _authenticate(self, payload: Any, signature: Optional[str]) -> Dict[str, Any]:
        if not self._verifier.verify(payload, signature):
            raise self._reject(AuthenticationFailure())
        return payload if isinstance(payload, dict) else {}

    def _reject(self, exc: DomainException, currency: str = "unknown", **context) -> DomainException:
        logger.warning("settlement_rejected", reason=exc.code, currency=currency, **context)
        record_rejection(exc.code, currency)
        return exc

    async def acknowledge_job(
        self,
        payload: Any,
        signature: Optional[str],
    ) -> JobAcknowledgement:
        """
        Accept a signed job-completion notice.

        Raises:
            AuthenticationFailure: If the signature does not verify
            ValidationFailure: If jobId is missing
        """
        if not self._verifier.verify(payload, signature):
            logger.warning("job_complete_rejected", reason="invalid_signature")
            raise AuthenticationFailure()
        body = payload if isinstance(payload, dict) else {}
        job_id = _required_text(body, "jobId")

        logger.info("job_completed", job_id=job_id)
        return JobAcknowledgement(job_id=job_id)

    async def settle(self, payload: Any, signature: Optional[str]) -> SettlementResult:
        """
        Authorize and execute a settlement.

        Args:
            payload: Parsed JSON request body
            signature: Hex HMAC from the request header

        Returns:
            SettlementResult with the simulated transaction id

        Raises:
            AuthenticationFailure, ValidationFailure, UnsupportedCurrency,
            DestinationNotWhitelisted, DailyLimitReached, AmountExceedsMax,
            SettlementFailed
        """
        body = self._authenticate(payload, signature)

        try:
            job_id = _required_text(body, "jobId")
            dest = _required_text(body, "dest")
        except ValidationFailure as exc:
            raise self._reject(exc, issues=exc.issues)

        log = logger.bind(job_id=job_id, dest=dest)

        if not self._whitelist.is_whitelisted(dest):
            raise self._reject(DestinationNotWhitelisted(), job_id=job_id)

        allowed = self._rate_limiter.allow()
        record_daily_attempts(self._rate_limiter.count)
        if not allowed:
            raise self._reject(DailyLimitReached(), job_id=job_id)

        raw_currency = body.get("currency") or Currency.LAMPORTS.value
        try:
            currency = Currency(raw_currency)
        except (TypeError, ValueError):
            raise self._reject(UnsupportedCurrency(str(raw_currency)), job_id=job_id)

        check = self._amount_validator.validate(
            currency,
            body.get(currency.amount_field),
            mint=body.get("mint"),
        )
        if isinstance(check, AmountRejection):
            if check.reason == "amount_exceeds_max":
                raise self._reject(AmountExceedsMax(), currency.value, job_id=job_id)
            raise self._reject(
                ValidationFailure({check.field: check.issue}),
                currency.value,
                job_id=job_id,
            )

        log.info("settlement_authorized", currency=currency.value, amount=check.amount)

        request = SettlementRequest(
            job_id=job_id,
            dest=dest,
            currency=check.currency,
            amount=check.amount,
            mint=check.mint,
        )
        outcome = await self._execute(request, log)
        if isinstance(outcome, LedgerFailure):
            raise self._reject(SettlementFailed(outcome.code), currency.value, job_id=job_id)

        record_settlement(currency.value, request.amount)
        log.info("settlement_completed", currency=currency.value, tx=outcome.tx_id)
        return SettlementResult.from_receipt(job_id, outcome)

    async def _execute(self, request: SettlementRequest, log) -> LedgerResult:
        try:
            if request.currency is Currency.LAMPORTS:
                return await self._ledger_client.pay_lamports(request.dest, request.amount)
            if request.currency is Currency.USDC:
                return await self._ledger_client.pay_token(request.mint, request.dest, request.amount)
        except Exception as e:
            log.error("ledger_error", error=str(e), error_type=type(e).__name__)
            raise self._reject(
                SettlementFailed(str(e) or type(e).__name__),
                request.currency.value,
                job_id=request.job_id,
            ) from e
        raise ValueError(f"no ledger operation for {request.currency!r}")
