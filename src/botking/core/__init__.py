"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        BotkingError: Base exception for all application errors.
        ConfigurationError: Configuration-related errors.
        ValidationError: Data validation errors.
        EntityValidationError: Raised by the throwing validation API.
        UnknownBotTypeError: Raised by the state factory for unknown roles.

    Configuration:
        Settings: Main application settings class.
        ValidationSettings: Limits used by the validation phases.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
        entity_context: Bind logging context for a block.
"""

from __future__ import annotations

from botking.core.config import (
    Settings,
    ValidationSettings,
    clear_settings_cache,
    get_settings,
)
from botking.core.exceptions import (
    BotkingError,
    ConfigurationError,
    EntityValidationError,
    UnknownBotTypeError,
    ValidationError,
)
from botking.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    entity_context,
    get_logger,
)


__all__ = [
    # Exceptions
    "BotkingError",
    "ConfigurationError",
    "ValidationError",
    "EntityValidationError",
    "UnknownBotTypeError",
    # Configuration
    "Settings",
    "ValidationSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
    "entity_context",
]
