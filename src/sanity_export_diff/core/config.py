"""Configuration management for sanity-export-diff.

This module provides configuration classes using pydantic-settings
for environment variable management and validation.
"""

from __future__ import annotations

import hashlib

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sanity_export_diff.core.exceptions import ConfigurationError

# Metadata written by the content store on every save
DEFAULT_IGNORED_FIELDS: tuple[str, ...] = ("_rev", "_updatedAt", "_key", "_createdAt")

DEFAULT_ASSET_FIELD = "_sanityAsset"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be configured via environment variables with
    the SANITY_DIFF_ prefix.

    Attributes:
        ignored_fields: Field names excluded from comparison at every depth.
        asset_field: Field holding asset references compared by content.
        hash_algorithm: hashlib algorithm used to fingerprint assets.
        output_path: Where the CLI writes the JSON report.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).

    Example:
        >>> # export SANITY_DIFF_HASH_ALGORITHM=sha256
        >>> settings = Settings()
        >>> settings.hash_algorithm
        'sha256'

    Environment Variables:
        SANITY_DIFF_IGNORED_FIELDS: JSON list (default: ["_rev", "_updatedAt", "_key", "_createdAt"])
        SANITY_DIFF_ASSET_FIELD: Asset reference field (default: _sanityAsset)
        SANITY_DIFF_HASH_ALGORITHM: Digest for asset content (default: md5)
        SANITY_DIFF_OUTPUT_PATH: Report location (default: web/data.json)
        SANITY_DIFF_LOG_LEVEL: Logging level (default: WARNING)
    """

    model_config = SettingsConfigDict(
        env_prefix="SANITY_DIFF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    ignored_fields: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORED_FIELDS),
        description="Field names excluded from comparison at every nesting depth",
    )
    asset_field: str = Field(
        default=DEFAULT_ASSET_FIELD,
        min_length=1,
        description="Field holding asset references compared by file content",
    )
    hash_algorithm: str = Field(
        default="md5",
        description="hashlib algorithm used to fingerprint asset files",
    )
    output_path: str = Field(
        default="web/data.json",
        description="Default location of the JSON report",
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    @field_validator("hash_algorithm")
    @classmethod
    def _check_algorithm(cls, value: str) -> str:
        value = value.lower()
        if value not in hashlib.algorithms_available:
            raise ValueError(f"Unsupported hash algorithm: {value}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {value}")
        return value


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment, applying explicit overrides.

    Args:
        **overrides: Values that take precedence over the environment.
            None values are ignored so unset CLI options fall through.

    Returns:
        Validated Settings.

    Raises:
        ConfigurationError: If a value fails validation.
    """
    values = {k: v for k, v in overrides.items() if v is not None}
    try:
        return Settings(**values)  # type: ignore[arg-type]
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
