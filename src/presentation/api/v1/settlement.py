"""Settlement API endpoints."""

from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends

from src.application.services import SettlementPipeline
from src.core.dependencies import get_json_body, get_settlement_pipeline, get_signature
from src.presentation.schemas import (
    ErrorResponseSchema,
    JobCompleteResponseSchema,
    SettleResponseSchema,
)

settlement_router = APIRouter(
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        401: {"model": ErrorResponseSchema, "description": "Invalid signature"},
    },
)


@settlement_router.post(
    "/job/complete",
    response_model=JobCompleteResponseSchema,
    status_code=200,
    summary="Report Job Completion",
    description="""Acknowledge a signed job-completion notice before settlement""",
)
async def complete_job(
    body: Annotated[Any, Depends(get_json_body)],
    signature: Annotated[Optional[str], Depends(get_signature)],
    pipeline: Annotated[SettlementPipeline, Depends(get_settlement_pipeline)],
) -> JobCompleteResponseSchema:
    ack = await pipeline.acknowledge_job(body, signature)

    return JobCompleteResponseSchema(received=ack.received, next=ack.next)


@settlement_router.post(
    "/settle",
    response_model=SettleResponseSchema,
    status_code=200,
    summary="Settle Payment",
    description="""
    Authorize and execute an agent-to-agent settlement.

    The body must be signed with the shared HMAC secret. The destination
    must be whitelisted and the amount within the per-transaction and daily
    limits.
    """,
    responses={
        200: {"description": "Settlement executed"},
        403: {"model": ErrorResponseSchema, "description": "Destination not whitelisted"},
        429: {"model": ErrorResponseSchema, "description": "Daily limit or amount ceiling hit"},
        500: {"model": ErrorResponseSchema, "description": "Ledger refused the transfer"},
    },
)
async def settle(
    body: Annotated[Any, Depends(get_json_body)],
    signature: Annotated[Optional[str], Depends(get_signature)],
    pipeline: Annotated[SettlementPipeline, Depends(get_settlement_pipeline)],
) -> SettleResponseSchema:
    """
    Settle a payment to a whitelisted destination.

    Returns the simulated ledger transaction id.
    """
    result = await pipeline.settle(body, signature)

    return SettleResponseSchema(ok=result.ok, currency=result.currency, tx=result.tx)
