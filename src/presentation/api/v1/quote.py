"""Quote API endpoint."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from src.application.dto import QuoteRequest
from src.application.services import QuoteService
from src.core.dependencies import get_json_body, get_quote_service
from src.presentation.schemas import ErrorResponseSchema, QuoteResponseSchema

quote_router = APIRouter(prefix="/quote")


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


@quote_router.post(
    "",
    response_model=QuoteResponseSchema,
    summary="Quote Job Price",
    description="""Price a job in lamports. No signature required.""",
    responses={
        400: {"model": ErrorResponseSchema, "description": "jobId missing"},
    },
)
async def create_quote(
    body: Annotated[Any, Depends(get_json_body)],
    quote_service: Annotated[QuoteService, Depends(get_quote_service)],
) -> QuoteResponseSchema:
    fields = body if isinstance(body, dict) else {}
    response = quote_service.quote(
        QuoteRequest(
            job_id=_text(fields.get("jobId")),
            kind=_text(fields.get("kind")) or None,
        )
    )

    return QuoteResponseSchema(
        job_id=response.job_id,
        currency=response.currency,
        amount=response.amount,
        max_per_tx=response.max_per_tx,
    )
