"""Pydantic schema for API error responses."""

from typing import Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Error code",
        examples=["dest_not_whitelisted"],
    )
    issues: Optional[Dict[str, str]] = Field(
        None,
        description="Field-level problems (bad_request only)",
        examples=[{"amountMinor": "integer_required"}],
    )
    message: Optional[str] = Field(
        None,
        description="Underlying failure (settlement_failed only)",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"error": "invalid_signature"},
                {"error": "bad_request", "issues": {"dest": "required"}},
                {"error": "settlement_failed", "message": "invalid_amount"},
            ]
        }
    }
