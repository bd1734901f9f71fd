"""Health check endpoint for service monitoring."""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.core.config import Settings
from src.core.dependencies import get_app_settings

health_router = APIRouter()


class HealthResponse(BaseModel):
    ok: bool = True
    service: str
    mode: str = "mock"


@health_router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Returns the health status of the service.",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    return HealthResponse(ok=True, service=settings.app_name, mode="mock")
