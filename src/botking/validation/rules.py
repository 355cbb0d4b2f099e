"""Business rules for bot records and bot-state payloads.

Rules run after the shape phase succeeded, against the shape-validated
data keyed by wire (camelCase) names. Each rule returns zero or more
violations; the engine runs every rule and reports all of them.

Bot rules are derived from the per-role field policy table, so they
re-check the constructor normalization for records that reached
validation without going through a role constructor.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from functools import lru_cache
from typing import Any

from pydantic.alias_generators import to_camel

from botking.core.config import ValidationSettings
from botking.core.constants import PERCENT_MIN
from botking.models.enums import BotType, StateType
from botking.models.roles import POLICY_FIELDS, FieldPolicy, policy_for
from botking.validation.result import Violation, ViolationCode


Rule = Callable[[Mapping[str, Any]], list[Violation]]
"""A business rule: validated data in, violations out."""


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


# =============================================================================
# Bot Rules
# =============================================================================


def _label(field_name: str) -> str:
    """Turn an attribute name into a readable label (``soul_chip_id`` -> "soul chip id")."""
    return field_name.replace("_", " ")


def required_field_rule(bot_type: BotType, field_name: str) -> Rule:
    """Build a rule requiring a non-empty value for a field.

    Args:
        bot_type: Role the rule belongs to, used in the message.
        field_name: Record attribute name.

    Returns:
        The rule.
    """
    wire_name = to_camel(field_name)
    message = f"{bot_type.value} bots require a {_label(field_name)}"

    def rule(data: Mapping[str, Any]) -> list[Violation]:
        if _is_empty(data.get(wire_name)):
            return [Violation(field=wire_name, message=message, code=ViolationCode.REQUIRED)]
        return []

    return rule


def forbidden_field_rule(bot_type: BotType, field_name: str) -> Rule:
    """Build a rule requiring a field to be empty.

    Args:
        bot_type: Role the rule belongs to, used in the message.
        field_name: Record attribute name.

    Returns:
        The rule.
    """
    wire_name = to_camel(field_name)
    message = f"{bot_type.value} bots cannot have a {_label(field_name)}"

    def rule(data: Mapping[str, Any]) -> list[Violation]:
        if not _is_empty(data.get(wire_name)):
            return [Violation(field=wire_name, message=message, code=ViolationCode.INVALID_FIELD)]
        return []

    return rule


@lru_cache(maxsize=8)
def bot_rules_for(bot_type: BotType | None) -> tuple[Rule, ...]:
    """Get the business rules of a role.

    The base entity (``None``) has no role rules.

    Args:
        bot_type: The role.

    Returns:
        Rules in policy-field order.
    """
    if bot_type is None:
        return ()
    policies = policy_for(bot_type)
    rules: list[Rule] = []
    for field_name in POLICY_FIELDS:
        policy = policies[field_name]
        if policy is FieldPolicy.REQUIRED:
            rules.append(required_field_rule(bot_type, field_name))
        elif policy is FieldPolicy.FORBIDDEN:
            rules.append(forbidden_field_rule(bot_type, field_name))
    return tuple(rules)


# =============================================================================
# Bot State Rules
# =============================================================================

NON_WORKER_ONLY_FIELDS: dict[str, str] = {
    "bondLevel": "bond level",
    "battlesWon": "battles won",
    "battlesLost": "battles lost",
    "totalBattles": "total battles",
}
"""State fields only non-worker states may carry, with their labels."""


def worker_exclusive_fields(data: Mapping[str, Any]) -> list[Violation]:
    """Reject non-worker fields on worker states, one violation per field."""
    if data.get("stateType") != StateType.WORKER:
        return []
    return [
        Violation(
            field=wire_name,
            message=f"Worker bots cannot have {label}",
            code=ViolationCode.INVALID_FIELD,
        )
        for wire_name, label in NON_WORKER_ONLY_FIELDS.items()
        if data.get(wire_name) is not None
    ]


def level_range_rule(wire_name: str, label: str, maximum: float) -> Rule:
    """Build a rule keeping a level within ``[0, maximum]`` when present.

    Args:
        wire_name: Payload field name.
        label: Readable name used in the message.
        maximum: Inclusive upper bound.

    Returns:
        The rule.
    """
    message = f"{label} must be between {PERCENT_MIN} and {maximum}"

    def rule(data: Mapping[str, Any]) -> list[Violation]:
        value = data.get(wire_name)
        if value is not None and not PERCENT_MIN <= value <= maximum:
            return [Violation(field=wire_name, message=message, code=ViolationCode.INVALID_RANGE)]
        return []

    return rule


def battle_totals(data: Mapping[str, Any]) -> list[Violation]:
    """Require totalBattles >= battlesWon + battlesLost on non-worker states.

    Only checked when all three counters are present.
    """
    if data.get("stateType") != StateType.NON_WORKER:
        return []
    won = data.get("battlesWon")
    lost = data.get("battlesLost")
    total = data.get("totalBattles")
    if won is None or lost is None or total is None:
        return []
    if total < won + lost:
        return [
            Violation(
                field="totalBattles",
                message="Total battles must be greater than or equal to won + lost battles",
                code=ViolationCode.INVALID_CALCULATION,
            )
        ]
    return []


@lru_cache(maxsize=8)
def state_rules_for(limits: ValidationSettings) -> tuple[Rule, ...]:
    """Get the bot-state business rules for the given limits."""
    return (
        worker_exclusive_fields,
        level_range_rule("energyLevel", "Energy level", limits.energy_max),
        level_range_rule("maintenanceLevel", "Maintenance level", limits.maintenance_max),
        level_range_rule("bondLevel", "Bond level", limits.bond_max),
        battle_totals,
    )


__all__ = [
    "Rule",
    "NON_WORKER_ONLY_FIELDS",
    "required_field_rule",
    "forbidden_field_rule",
    "bot_rules_for",
    "worker_exclusive_fields",
    "level_range_rule",
    "battle_totals",
    "state_rules_for",
]
