"""Two-phase validation for bot records and bot-state payloads.

Submodules:
    result: Violation and ValidationResult types.
    schemas: Generated pydantic shape schemas.
    rules: Business rules derived from the role policy table.
    provider: RuleProvider combining schemas and rules for given limits.
    engine: ValidationEngine running shape then business rules.

Example:
    >>> from botking.validation import RuleProvider, ValidationEngine
    >>> engine = ValidationEngine(RuleProvider())
    >>> engine.validate_state({"stateType": "non-worker", "bondLevel": 30}).success
    True
"""

from __future__ import annotations

from botking.validation.engine import ValidationEngine, get_default_engine
from botking.validation.provider import RuleProvider
from botking.validation.result import (
    Operation,
    ValidationPhase,
    ValidationResult,
    Violation,
    ViolationCode,
)
from botking.validation.rules import Rule, bot_rules_for, state_rules_for
from botking.validation.schemas import build_bot_shape, build_state_shape


__all__ = [
    # Engine
    "ValidationEngine",
    "get_default_engine",
    "RuleProvider",
    # Results
    "Operation",
    "ValidationPhase",
    "ValidationResult",
    "Violation",
    "ViolationCode",
    # Rules and schemas
    "Rule",
    "bot_rules_for",
    "state_rules_for",
    "build_bot_shape",
    "build_state_shape",
]
