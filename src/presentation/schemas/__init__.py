"""Pydantic schemas for API request/response validation."""

from .settlement import (
    JobCompleteResponseSchema,
    QuoteResponseSchema,
    SettleResponseSchema,
)
from .error import ErrorResponseSchema

__all__ = [
    "JobCompleteResponseSchema",
    "QuoteResponseSchema",
    "SettleResponseSchema",
    "ErrorResponseSchema",
]
