"""Custom exception hierarchy for the Botking entity layer.

All exceptions inherit from BotkingError, enabling unified error handling
at the application boundary while preserving domain-specific context.

Variant construction and factory dispatch never raise. Every data problem
surfaces through validation, either as a structured result or through the
throwing adapter which raises EntityValidationError.

Example:
    >>> from botking.core.exceptions import ConfigurationError
    >>> raise ConfigurationError("Bad limit", config_key="bond_max")
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Sequence

    from botking.validation.result import Violation


class BotkingError(Exception):
    """Base exception for all Botking errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(BotkingError):
    """Raised when application configuration is invalid.

    This includes invalid validation limits or settings that cannot be
    loaded from the environment.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


# =============================================================================
# Validation Exceptions
# =============================================================================


class ValidationError(BotkingError):
    """Raised when data validation fails.

    This includes schema validation errors, business-rule violations,
    or type mismatches in records coming from storage or API callers.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


class EntityValidationError(ValidationError):
    """Raised by the throwing validation API when a record has violations.

    The message concatenates every violation so nothing reported by the
    structured result is lost when the caller prefers exceptions.

    Attributes:
        violations: The violations reported by the validation engine.
        phase: The phase that failed ("shape" or "business").
        entity: Label of the validated entity, e.g. "GOVBOT bot".
    """

    def __init__(
        self,
        *,
        violations: Sequence[Violation],
        phase: str | None = None,
        entity: str = "record",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize from the violations of a failed validation.

        Args:
            violations: The violations reported by the validation engine.
            phase: The phase that produced the violations.
            entity: Label of the validated entity.
            details: Optional dictionary containing additional error context.
        """
        self.violations = list(violations)
        self.phase = phase
        self.entity = entity
        summary = "; ".join(f"{v.field}: {v.message}" for v in self.violations)
        message = f"{entity} failed validation: {summary}" if summary else f"{entity} failed validation"
        combined_details = details or {}
        if phase:
            combined_details["phase"] = phase
        field_name = self.violations[0].field if len(self.violations) == 1 else None
        super().__init__(message, field_name=field_name, details=combined_details)

    @property
    def fields(self) -> list[str]:
        """Names of every field that has at least one violation."""
        return list(dict.fromkeys(v.field for v in self.violations))


class UnknownBotTypeError(BotkingError):
    """Raised when an operation needs a bot type it does not recognize.

    Only the state factory raises this. Bot construction falls back to the
    base entity instead.
    """

    def __init__(
        self,
        message: str,
        *,
        bot_type: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with the offending bot type.

        Args:
            message: Human-readable error description.
            bot_type: The bot type value that was not recognized.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if bot_type is not None:
            combined_details["bot_type"] = bot_type
        super().__init__(message, details=combined_details)


__all__ = [
    "BotkingError",
    "ConfigurationError",
    "ValidationError",
    "EntityValidationError",
    "UnknownBotTypeError",
]
