"""Application configuration via pydantic-settings.

Values are loaded from environment variables (.env file).
Settings are organized into logical groups and composed into a single Settings object.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.schemas.student import FieldConstraints


class ValidationSettings(BaseSettings):
    """Field bounds for student-record validation and APS normalization."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    min_mark: float = Field(default=0, description="Lowest accepted percentage mark")
    max_mark: float = Field(default=100, description="Highest accepted percentage mark")
    min_level: int = Field(default=0, description="Lowest achievement level")
    max_level: int = Field(default=7, description="Highest achievement level")
    min_aps: int = Field(default=0, description="Lowest Admission Point Score")
    max_aps: int = Field(default=42, description="Highest Admission Point Score (score normalizer)")
    max_text_length: int = Field(default=255, description="Text fields are truncated beyond this")
    uuid_length: int = Field(default=36, description="Canonical UUID string length")
    mark_precision: int = Field(default=2, description="Decimal places kept on marks")

    def to_constraints(self) -> FieldConstraints:
        """Freeze the loaded values into a FieldConstraints instance."""
        return FieldConstraints(**self.model_dump())


class Settings(BaseSettings):
    """Root settings composing all sub-settings.

    Usage:
        settings = Settings()
        settings.log_level
        settings.validation.max_aps
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Logging
    log_level: str = Field(default="INFO")

    # Composed settings (loaded from same .env)
    validation: ValidationSettings = Field(default_factory=ValidationSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper


# Module-level singleton — import this wherever settings are needed.
settings = Settings()


@lru_cache(maxsize=1)
def get_field_constraints() -> FieldConstraints:
    """Default constraints injected into the validator and the matcher."""
    return settings.validation.to_constraints()
