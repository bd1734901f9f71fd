"""Application Services - Use case orchestration."""

from .quote_service import QuoteService
from .settlement_pipeline import SettlementPipeline

__all__ = [
    "QuoteService",
    "SettlementPipeline",
]
