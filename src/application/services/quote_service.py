"""Quote service - prices agent jobs in lamports."""

from typing import Dict

import structlog

from src.core.config import Settings
from src.domain.exceptions import ValidationFailure
from src.application.dto import QuoteRequest, QuoteResponse

logger = structlog.get_logger(__name__)


class QuoteService:
    """
    Application service for job price quotes.
    """

    PRICE_TABLE: Dict[str, int] = {
        "AUDIO_SNIPPET": 5000,
        "IMAGE_VARIATION": 7000,
        "EBOOK_PAGE": 6000,
    }
    DEFAULT_KIND = "AUDIO_SNIPPET"

    def __init__(self, settings: Settings):
        self._settings = settings

    def quote(self, request: QuoteRequest) -> QuoteResponse:
        """
        Price a job.

        Unknown or absent kinds are priced as AUDIO_SNIPPET.

        Raises:
            ValidationFailure: If jobId is missing
        """
        errors = request.validate()
        if errors:
            raise ValidationFailure({field: "required" for field in errors})

        kind = request.kind or self.DEFAULT_KIND
        amount = self.PRICE_TABLE.get(kind, self.PRICE_TABLE[self.DEFAULT_KIND])

        logger.info("quote_issued", job_id=request.job_id, kind=kind, amount=amount)

        return QuoteResponse(
            job_id=request.job_id,
            amount=amount,
            max_per_tx=self._settings.max_lamports_per_tx,
        )
