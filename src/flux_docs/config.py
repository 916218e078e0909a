"""Centralized configuration for flux-docs using Pydantic Settings."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strictly typed configuration loaded from ``FLUX_DOCS_*`` environment variables.

    The data directory is resolved here once and handed to the document
    store; nothing else looks it up.
    """

    model_config = SettingsConfigDict(
        env_prefix="FLUX_DOCS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    data_dir: Path = Field(default=Path("data"), description="Directory holding category folders and index.json")

    # Logging
    log_level: str = Field(default="warning", description="Logging level")
    log_json: bool = Field(default=False, description="Emit structured JSON logs on stderr")

    # Output
    search_limit: int = Field(default=10, ge=1, description="Default maximum number of search results")
    suggestion_limit: int = Field(default=5, ge=1, description="Number of 'did you mean' suggestions on a miss")
    description_width: int = Field(default=50, ge=10, description="Description column width in result tables")

    @field_validator("data_dir")
    @classmethod
    def _resolve_data_dir(cls, value: Path) -> Path:
        return value.expanduser().resolve(strict=False)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return normalized
