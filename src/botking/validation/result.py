"""Validation result types.

The structured ValidationResult is the primary output of every validation
call. The throwing API is a thin adapter on top of it
(``ValidationResult.raise_for_errors``).
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from botking.core.exceptions import EntityValidationError


class Operation(StrEnum):
    """Which write a record is validated for."""

    CREATE = "create"
    UPDATE = "update"


class ValidationPhase(StrEnum):
    """Validation phase that produced a failure."""

    SHAPE = "shape"
    BUSINESS = "business"


class ViolationCode(StrEnum):
    """Codes used by business-rule violations.

    Shape violations carry the pydantic error type instead.
    """

    REQUIRED = "REQUIRED"
    INVALID_FIELD = "INVALID_FIELD"
    INVALID_RANGE = "INVALID_RANGE"
    INVALID_CALCULATION = "INVALID_CALCULATION"
    STATE_TYPE_MISMATCH = "STATE_TYPE_MISMATCH"


class Violation(BaseModel):
    """A single validation failure.

    Attributes:
        field: Wire (camelCase) name of the offending field; nested
            locations are dot-joined, e.g. ``statusEffects.0``.
        message: Human-readable description.
        code: Machine-readable code.
    """

    model_config = ConfigDict(frozen=True)

    field: str
    message: str
    code: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ValidationResult(BaseModel):
    """Outcome of validating one record.

    Attributes:
        success: True when no violation was found.
        data: The shape-validated record (camelCase keys) on success.
        errors: Violations of the failing phase, in rule order.
        phase: The phase that failed, or None on success.
        warnings: Non-fatal observations.
    """

    success: bool
    data: dict[str, Any] | None = None
    errors: list[Violation] = Field(default_factory=list)
    phase: ValidationPhase | None = None
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def ok(
        cls,
        data: dict[str, Any] | None = None,
        *,
        warnings: list[str] | None = None,
    ) -> ValidationResult:
        """Build a successful result."""
        return cls(success=True, data=data, warnings=warnings or [])

    @classmethod
    def failed(
        cls,
        phase: ValidationPhase,
        errors: list[Violation],
        *,
        warnings: list[str] | None = None,
    ) -> ValidationResult:
        """Build a failed result for the given phase."""
        return cls(success=False, phase=phase, errors=errors, warnings=warnings or [])

    @property
    def error_fields(self) -> list[str]:
        """Names of every field with at least one violation, in order."""
        return list(dict.fromkeys(v.field for v in self.errors))

    def errors_for(self, field: str) -> list[Violation]:
        """Get the violations reported for one field."""
        return [v for v in self.errors if v.field == field]

    def raise_for_errors(self, *, entity: str = "record") -> None:
        """Raise EntityValidationError if this result is a failure.

        Args:
            entity: Label used in the exception message.

        Raises:
            EntityValidationError: Carrying every violation of the result.
        """
        if self.success:
            return
        raise EntityValidationError(
            violations=self.errors,
            phase=self.phase.value if self.phase else None,
            entity=entity,
        )


__all__ = [
    "Operation",
    "ValidationPhase",
    "ViolationCode",
    "Violation",
    "ValidationResult",
]
