# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for sheet names, document headings, extraction
sentinels, cache backend and logging options.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Destination sheets ===
    tracking_sheet_name: str = "True Positives"
    matrix_sheet_name: str = "rawMitigationScoreMatrix"

    # === Document layout ===
    document_type: str = "docx"
    summary_start_heading: str = "A summary of the incident"
    summary_end_heading: str = "Mitigation Matrix:"
    matrix_required_headers: str = "inbound,endpoint,outbound,other"
    matrix_data_start_row: int = 2

    # === Field classification ===
    confirmed_positive_status: str = "TP:EVIL"
    assignee_placeholder: str = "SELECT Analyst"

    # === Categories ===
    categories_file: Path | None = None

    # === Monthly report provisioning ===
    template_name: str = "TEMPLATE_Incident Summary"
    report_name_prefix: str = "Incident Summary"

    # === Cache ===
    cache_enabled: bool = True
    cache_backend: Literal["json", "sqlite", "redis", "memory"] = "json"
    cache_root: Path = Path("~/.incidentsync/cache")
    cache_redis_url: str = ""
    cache_ttl_seconds: int = 21600

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("cache_ttl_seconds")
    @classmethod
    def validate_cache_ttl(cls, v: int) -> int:  # noqa: N805
        """Cache entries must expire."""
        if v <= 0:
            raise ValueError("cache_ttl_seconds must be > 0")
        return v

    @field_validator("matrix_data_start_row")
    @classmethod
    def validate_data_start_row(cls, v: int) -> int:  # noqa: N805
        """Row 0 is the header row and is never data."""
        if v < 1:
            raise ValueError("matrix_data_start_row must be >= 1")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if not self.matrix_required_headers_list:
            errors.append("MATRIX_REQUIRED_HEADERS must list at least one header")

        if self.cache_backend == "redis" and not self.cache_redis_url:
            errors.append("CACHE_REDIS_URL must be set when CACHE_BACKEND=redis")

        if self.summary_start_heading.strip() == self.summary_end_heading.strip():
            errors.append(
                "SUMMARY_START_HEADING and SUMMARY_END_HEADING must differ"
            )

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def matrix_required_headers_list(self) -> list[str]:
        """Parse comma-separated required matrix headers (lowercased)."""
        return [
            h.strip().lower()
            for h in self.matrix_required_headers.split(",")
            if h.strip()
        ]


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-run config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
