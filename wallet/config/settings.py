"""
Configuration Management for Wallet

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every tunable of the ledger (where dumps go, how payments are chunked,
how many workers sum payments) is read from one place and validated
when first loaded.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class WalletSettings(BaseSettings):
    """
    Main ledger settings.

    Loads configuration from WALLET_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="WALLET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Persistence
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory used for directory dumps"
    )
    records_per_file: int = Field(
        default=100,
        ge=1,
        description="Maximum payments per file for chunked history export"
    )

    # Aggregation
    sum_parallelism: int = Field(
        default=1,
        ge=1,
        le=64,
        description="Worker count used when summing payments"
    )

    # Audit
    audit_enabled: bool = Field(
        default=True,
        description="Emit audit events for ledger mutations"
    )

    @field_validator('data_dir')
    @classmethod
    def warn_missing_data_dir(cls, v: Path) -> Path:
        """Warn if the dump directory doesn't exist (but don't fail - might be created later)."""
        if not v.exists():
            import warnings
            warnings.warn(
                f"Wallet data directory not found at {v}. "
                "Create it before exporting the ledger."
            )
        return v


@lru_cache()
def get_settings() -> WalletSettings:
    """
    Get ledger settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return WalletSettings()
