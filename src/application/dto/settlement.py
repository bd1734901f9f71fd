"""Data transfer objects for settlement operations."""

from dataclasses import dataclass

from src.domain.entities import LedgerReceipt


@dataclass(frozen=True)
class SettlementResult:
    """Outcome of an authorized settlement."""

    job_id: str
    currency: str
    tx: str
    ok: bool = True

    @classmethod
    def from_receipt(cls, job_id: str, receipt: LedgerReceipt) -> "SettlementResult":
        return cls(job_id=job_id, currency=receipt.currency.value, tx=receipt.tx_id)


@dataclass(frozen=True)
class JobAcknowledgement:
    """Response to a signed job-completion notice."""

    job_id: str
    next: str = "/settle"
    received: bool = True
