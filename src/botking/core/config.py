"""Configuration management for the Botking entity layer.

This module provides centralized configuration using pydantic-settings,
supporting environment variables, .env files, and runtime overrides.
Validation limits live here so a different rule provider can be built
without touching the validation engine.

Example:
    >>> from botking.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.validation.name_max_length
    100

Environment Variables:
    BOTKING_DEBUG: Enable debug mode
    BOTKING_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    BOTKING_LOG_JSON: Emit JSON log lines instead of console output
    BOTKING_VALIDATION_NAME_MAX_LENGTH: Maximum bot and state name length
    BOTKING_VALIDATION_ENERGY_MAX: Upper bound for validated energy levels
    BOTKING_VALIDATION_MAINTENANCE_MAX: Upper bound for maintenance levels
    BOTKING_VALIDATION_BOND_MAX: Upper bound for bond levels
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from botking.core.constants import DEFAULT_NAME_MAX_LENGTH, PERCENT_MAX
from botking.core.exceptions import ConfigurationError


class ValidationSettings(BaseSettings):
    """Limits used by the shape and business-rule validation phases.

    Instances are frozen so they can key the cache of generated schemas.

    Attributes:
        name_max_length: Maximum length of bot and state names.
        energy_max: Upper bound for energyLevel in validated payloads.
        maintenance_max: Upper bound for maintenanceLevel.
        bond_max: Upper bound for bondLevel.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOTKING_VALIDATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    name_max_length: int = Field(
        default=DEFAULT_NAME_MAX_LENGTH,
        ge=1,
        le=10_000,
        description="Maximum bot and state name length",
    )
    energy_max: int = Field(
        default=PERCENT_MAX,
        description="Upper bound for validated energy levels",
    )
    maintenance_max: int = Field(
        default=PERCENT_MAX,
        description="Upper bound for maintenance levels",
    )
    bond_max: int = Field(
        default=PERCENT_MAX,
        description="Upper bound for bond levels",
    )

    @model_validator(mode="after")
    def validate_level_bounds(self) -> "ValidationSettings":
        """Ensure every level bound leaves room above zero.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If a level bound is not positive.
        """
        for key in ("energy_max", "maintenance_max", "bond_max"):
            value = getattr(self, key)
            if value <= 0:
                raise ConfigurationError(
                    f"{key} ({value}) must be greater than 0",
                    config_key=key,
                )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        log_json: Emit JSON log lines.
        validation: Validation limits.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOTKING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Botking Entities",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    validation: ValidationSettings = Field(default_factory=ValidationSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.

    Example:
        >>> settings = get_settings()
        >>> settings.app_name
        'Botking Entities'
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Example:
        >>> clear_settings_cache()
        >>> settings = get_settings()  # Reloads from environment
    """
    get_settings.cache_clear()


__all__ = [
    "ValidationSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
