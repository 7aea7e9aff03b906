"""
Ledger settings read from ``STOCKBOOK_*`` environment variables or ``.env``.

The storage location and the two ledger policies live here; business
settings such as currency and taxes are stored with the ledger data.
"""

from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-level settings for the CLI."""

    model_config = SettingsConfigDict(
        env_prefix="STOCKBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Literal["development", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    # Storage: one JSON file per collection
    data_dir: Path = Path("data")

    # Ledger policies
    on_unknown_product: Literal["skip", "reject"] = "skip"
    release_cancelled: bool = True

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.upper()
        return v


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
