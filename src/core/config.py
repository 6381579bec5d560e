"""Configuration management for the nyc_property_contacts service.

All configuration is loaded from environment variables and/or .env file.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.exceptions import ConfigurationError

# Project root detection
PROJECT_ROOT = Path(__file__).resolve().parents[2]
ENV_FILE = PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """
    Runtime configuration powered by environment variables and .env overrides.

    All settings can be configured via:
    1. Environment variables (highest priority)
    2. .env file in project root (loaded automatically)
    3. Default values (lowest priority)
    """

    model_config = SettingsConfigDict(
        env_file=ENV_FILE if ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,  # Allow case-insensitive env vars
    )

    # -------------------------------------------------------------------------
    # Deduplication
    # -------------------------------------------------------------------------
    dedup_threshold: float = Field(
        default=0.65,
        alias="DEDUP_THRESHOLD",
        ge=0.0,
        le=1.0,
        description="Minimum combined similarity for two contacts to be merged.",
    )
    name_weight: float = Field(default=0.6, alias="NAME_WEIGHT", ge=0.0)
    address_weight: float = Field(default=0.4, alias="ADDRESS_WEIGHT", ge=0.0)
    address_match_cutoff: float = Field(
        default=90.0,
        alias="ADDRESS_MATCH_CUTOFF",
        ge=0.0,
        le=100.0,
        description="rapidfuzz ratio at or above which two normalized addresses count as the same.",
    )
    respect_source_groups: bool = Field(
        default=False,
        alias="RESPECT_SOURCE_GROUPS",
        description="Only merge contacts reported by the same agency/source.",
    )
    phone_default_region: str = Field(default="US", alias="PHONE_DEFAULT_REGION")

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="text", alias="LOG_FORMAT")  # "text" or "json"
    environment: str = Field(default="local", alias="ENVIRONMENT")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Ensure log format is valid."""
        lower = v.lower()
        if lower not in {"text", "json"}:
            raise ValueError("log_format must be 'text' or 'json'")
        return lower

    @field_validator("phone_default_region")
    @classmethod
    def validate_phone_region(cls, v: str) -> str:
        """Phone regions are ISO 3166-1 alpha-2 codes."""
        upper = v.strip().upper()
        if len(upper) != 2 or not upper.isalpha():
            raise ValueError("phone_default_region must be a two-letter region code")
        return upper

    @model_validator(mode="after")
    def validate_weights(self) -> "Settings":
        """At least one similarity component must carry weight."""
        if self.name_weight + self.address_weight <= 0:
            raise ValueError("name_weight and address_weight cannot both be zero")
        return self

    def as_public_dict(self) -> dict:
        """Settings shown by the CLI `info` command and the health endpoint."""
        return {
            "dedup_threshold": self.dedup_threshold,
            "name_weight": self.name_weight,
            "address_weight": self.address_weight,
            "address_match_cutoff": self.address_match_cutoff,
            "respect_source_groups": self.respect_source_groups,
            "phone_default_region": self.phone_default_region,
            "log_level": self.log_level,
            "log_format": self.log_format,
            "environment": self.environment,
        }


@lru_cache
def get_settings() -> Settings:
    """
    Settings loaded once per process; see `reload_settings`.

    Raises:
        ConfigurationError: If an environment value fails validation.
    """
    try:
        return Settings()
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def reload_settings() -> Settings:
    """Drop the cached settings and read the environment again (tests, .env edits)."""
    get_settings.cache_clear()
    return get_settings()
