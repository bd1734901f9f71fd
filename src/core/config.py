"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables
    or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "yunazero-wallet-demo"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 3001

    # Authentication
    hmac_secret: str = "change-me"

    # Spending policy
    treasury_dest_whitelist: str = ""
    max_lamports_per_tx: int = 10_000
    max_usdc_minor_per_tx: int = 100_000
    daily_tx_limit: int = 50

    # Ledger
    default_usdc_mint: str = "MockUSDCMint11111111111111111111111111111"

    # Metrics
    metrics_enabled: bool = True

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator(
        "port",
        "max_lamports_per_tx",
        "max_usdc_minor_per_tx",
        "daily_tx_limit",
        mode="before",
    )
    @classmethod
    def fallback_to_default(cls, v, info: ValidationInfo):
        """Absent, empty or non-numeric values use the field default."""
        default = cls.model_fields[info.field_name].default
        if v is None or isinstance(v, bool):
            return default
        if isinstance(v, int):
            return v
        try:
            return int(float(str(v).strip()))
        except (TypeError, ValueError, OverflowError):
            return default


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
