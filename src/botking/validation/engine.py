"""Two-phase validation engine for bots and bot states.

Validation runs in a fixed order:

1. Shape: the payload is validated against the provider's pydantic schema.
   If it fails, only the shape violations are reported.
2. Business rules: every rule of the role (or of bot states) runs against
   the shape-validated data and all violations are reported together.

The structured ValidationResult is the primary output and the engine never
raises for invalid data. ``ensure_valid_bot`` and ``ensure_valid_state``
adapt the result to the throwing style.

Example:
    >>> engine = ValidationEngine(RuleProvider())
    >>> result = engine.validate_state({"stateType": "worker", "bondLevel": 30})
    >>> result.success, result.error_fields
    (False, ['bondLevel'])
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from botking.core.config import get_settings
from botking.core.logging import entity_context, get_logger
from botking.validation.provider import RuleProvider
from botking.validation.result import (
    Operation,
    ValidationPhase,
    ValidationResult,
    Violation,
)


if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from botking.models.enums import BotType
    from botking.validation.rules import Rule


logger = get_logger(__name__)


def _violations_from_pydantic(exc: PydanticValidationError) -> list[Violation]:
    """Map pydantic errors to violations keyed by wire name."""
    violations = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "record"
        violations.append(Violation(field=location, message=error["msg"], code=error["type"]))
    return violations


class ValidationEngine:
    """Runs shape then business-rule validation using a rule provider.

    Attributes:
        provider: Source of shape schemas and business rules.
    """

    def __init__(self, provider: RuleProvider) -> None:
        """Initialize the engine.

        Args:
            provider: Source of shape schemas and business rules.
        """
        self.provider = provider

    def run(
        self,
        payload: Any,
        shape: type[BaseModel],
        rules: Sequence[Rule],
        *,
        entity: str = "record",
    ) -> ValidationResult:
        """Validate a payload against a shape and a set of business rules.

        Args:
            payload: The record to validate (never mutated).
            shape: Pydantic model checking the payload shape.
            rules: Business rules run when the shape is valid.
            entity: Label used in log events.

        Returns:
            The validation result.
        """
        with entity_context(entity=entity):
            try:
                validated = shape.model_validate(payload)
            except PydanticValidationError as exc:
                violations = _violations_from_pydantic(exc)
                logger.debug(
                    "Shape validation failed",
                    violations=len(violations),
                    fields=[v.field for v in violations],
                )
                return ValidationResult.failed(ValidationPhase.SHAPE, violations)

            data = validated.model_dump(by_alias=True)
            violations = [violation for rule in rules for violation in rule(data)]
            if violations:
                logger.debug(
                    "Business rule validation failed",
                    violations=len(violations),
                    fields=[v.field for v in violations],
                )
                return ValidationResult.failed(ValidationPhase.BUSINESS, violations)

            return ValidationResult.ok(data)

    # -------------------------------------------------------------------------
    # Bots
    # -------------------------------------------------------------------------

    def validate_bot(
        self,
        record: Mapping[str, Any],
        *,
        bot_type: BotType | None = None,
        operation: Operation | str = Operation.CREATE,
    ) -> ValidationResult:
        """Validate a bot record for a role.

        Args:
            record: Bot record with camelCase (or snake_case) keys.
            bot_type: Role whose rules apply; None for the base entity.
            operation: CREATE or UPDATE.

        Returns:
            The validation result.
        """
        operation = Operation(operation)
        return self.run(
            record,
            self.provider.bot_shape(bot_type, operation),
            self.provider.bot_rules(bot_type),
            entity=_bot_label(bot_type),
        )

    def ensure_valid_bot(
        self,
        record: Mapping[str, Any],
        *,
        bot_type: BotType | None = None,
        operation: Operation | str = Operation.CREATE,
    ) -> dict[str, Any]:
        """Validate a bot record and raise on failure.

        Returns:
            The shape-validated record.

        Raises:
            EntityValidationError: Carrying every violation found.
        """
        result = self.validate_bot(record, bot_type=bot_type, operation=operation)
        result.raise_for_errors(entity=_bot_label(bot_type))
        return result.data or {}

    # -------------------------------------------------------------------------
    # Bot states
    # -------------------------------------------------------------------------

    def validate_state(
        self,
        payload: Mapping[str, Any],
        *,
        operation: Operation | str = Operation.CREATE,
    ) -> ValidationResult:
        """Validate a bot-state payload.

        The rules applied depend on the payload's ``stateType``.

        Args:
            payload: State payload with camelCase (or snake_case) keys.
            operation: CREATE or UPDATE.

        Returns:
            The validation result.
        """
        operation = Operation(operation)
        return self.run(
            payload,
            self.provider.state_shape(operation),
            self.provider.state_rules(),
            entity="bot state",
        )

    def ensure_valid_state(
        self,
        payload: Mapping[str, Any],
        *,
        operation: Operation | str = Operation.CREATE,
    ) -> dict[str, Any]:
        """Validate a bot-state payload and raise on failure.

        Returns:
            The shape-validated payload.

        Raises:
            EntityValidationError: Carrying every violation found.
        """
        result = self.validate_state(payload, operation=operation)
        result.raise_for_errors(entity="bot state")
        return result.data or {}


def _bot_label(bot_type: BotType | None) -> str:
    return f"{bot_type.value} bot" if bot_type is not None else "bot"


def get_default_engine() -> ValidationEngine:
    """Build an engine from the current application settings."""
    return ValidationEngine(RuleProvider(get_settings().validation))


__all__ = [
    "ValidationEngine",
    "get_default_engine",
]
