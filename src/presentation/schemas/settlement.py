"""Settlement-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field


class SettleResponseSchema(BaseModel):
    """Schema for POST /settle response body."""

    ok: bool = Field(
        True,
        description="Always true for a completed settlement",
    )
    currency: str = Field(
        ...,
        description="Settlement currency",
        examples=["LAMPORTS"],
    )
    tx: str = Field(
        ...,
        description="Simulated ledger transaction id",
        examples=["SIM_SOL_4b1f0c9e2d7a4e6f8a0b1c2d3e4f5a6b"],
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "ok": True,
                    "currency": "USDC",
                    "tx": "SIM_USDC_9e8d7c6b5a4f3e2d1c0b9a8f7e6d5c4b",
                }
            ]
        }
    )


class JobCompleteResponseSchema(BaseModel):
    """Schema for POST /job/complete response body."""

    received: bool = True
    next: str = Field(
        ...,
        description="Endpoint to call to settle the job",
        examples=["/settle"],
    )


class QuoteResponseSchema(BaseModel):
    """Schema for POST /quote response body."""

    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(..., alias="jobId", examples=["job-1"])
    currency: str = Field("LAMPORTS", description="Quote currency")
    amount: int = Field(..., ge=0, description="Price in lamports", examples=[5000])
    max_per_tx: int = Field(
        ...,
        alias="maxPerTx",
        description="Per-transaction lamport ceiling",
        examples=[10000],
    )
