"""Data transfer objects for price quotes."""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class QuoteRequest:
    """Input data for requesting a quote."""
    job_id: str
    kind: Optional[str] = None

    def validate(self) -> List[str]:
        errors = []

        if not isinstance(self.job_id, str) or not self.job_id:
            errors.append("jobId")

        return errors


@dataclass(frozen=True)
class QuoteResponse:
    """Price quote for a job, always in lamports."""

    job_id: str
    amount: int
    max_per_tx: int
    currency: str = "LAMPORTS"
