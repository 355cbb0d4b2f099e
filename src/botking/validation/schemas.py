"""Shape schemas for bot records and bot-state payloads.

Shape schemas are pydantic models generated per role and per operation
from the configured ValidationSettings limits. They check types, required
and non-empty identifiers, enumeration membership and length bounds. The
role-specific field combinations are business rules and live in
``botking.validation.rules``.

Payloads use camelCase wire names; snake_case attribute names are accepted
too. Generated classes are cached per (limits, role, operation).
"""

from __future__ import annotations

from datetime import datetime
from functools import lru_cache
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    NonNegativeFloat,
    NonNegativeInt,
    StrictStr,
    StringConstraints,
    create_model,
)
from pydantic.alias_generators import to_camel

from botking.core.config import ValidationSettings
from botking.models.enums import (
    BotLocation,
    BotType,
    CombatRole,
    GovernmentType,
    StateType,
    UtilitySpecialization,
)
from botking.validation.result import Operation


IdentifierStr = Annotated[str, StringConstraints(strict=True, min_length=1)]
"""A non-empty string reference."""


# =============================================================================
# Base Shapes
# =============================================================================


class BotShape(BaseModel):
    """Base for generated bot record shapes.

    Unknown keys are rejected so misspelled fields do not pass silently.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class StatusEffectShape(BaseModel):
    """An active status effect as carried in a state payload."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: IdentifierStr
    effect: StrictStr
    magnitude: float = 0
    duration: float = 0
    source: StrictStr | None = None


class BotStateShape(BaseModel):
    """Base for generated bot-state payload shapes.

    Unknown keys are ignored so legacy payloads (``energy``, ``health``,
    ``location``, ``level``) are still accepted.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# =============================================================================
# Shape Builders
# =============================================================================


def _id_field(operation: Operation) -> tuple[Any, Any]:
    if operation is Operation.UPDATE:
        return (IdentifierStr, ...)
    return (StrictStr | None, None)


def _name_type(limits: ValidationSettings, *, min_length: int) -> Any:
    return Annotated[
        str,
        StringConstraints(strict=True, min_length=min_length, max_length=limits.name_max_length),
    ]


@lru_cache(maxsize=64)
def build_bot_shape(
    limits: ValidationSettings,
    bot_type: BotType | None,
    operation: Operation,
) -> type[BotShape]:
    """Build the shape schema for a bot role and operation.

    Role shapes pin ``botType`` to the role's tag; the base shape
    (``bot_type=None``) accepts any known tag.

    Args:
        limits: Length and range limits.
        bot_type: The role, or None for the base entity.
        operation: CREATE accepts any id; UPDATE requires a non-empty id.

    Returns:
        A pydantic model class validating the common bot field set.
    """
    discriminator: Any = Literal[bot_type.value] if bot_type is not None else BotType
    suffix = bot_type.value.title() if bot_type is not None else "Any"
    return create_model(
        f"{suffix}Bot{operation.value.title()}Shape",
        __base__=BotShape,
        id=_id_field(operation),
        user_id=(IdentifierStr | None, None),
        soul_chip_id=(IdentifierStr | None, None),
        skeleton_id=(IdentifierStr, ...),
        state_id=(IdentifierStr, ...),
        name=(_name_type(limits, min_length=1), ...),
        bot_type=(discriminator, ...),
        combat_role=(CombatRole | None, None),
        utility_spec=(UtilitySpecialization | None, None),
        government_type=(GovernmentType | None, None),
        description=(StrictStr | None, None),
        created_at=(datetime | None, None),
        updated_at=(datetime | None, None),
    )


@lru_cache(maxsize=8)
def build_state_shape(
    limits: ValidationSettings,
    operation: Operation,
) -> type[BotStateShape]:
    """Build the shape schema for bot-state payloads.

    Level bounds are business rules, so energy, maintenance and bond are
    only type-checked here.

    Args:
        limits: Length limits.
        operation: CREATE accepts any id; UPDATE requires a non-empty id.

    Returns:
        A pydantic model class validating bot-state payloads.
    """
    return create_model(
        f"BotState{operation.value.title()}Shape",
        __base__=BotStateShape,
        id=_id_field(operation),
        state_type=(StateType, ...),
        user_id=(IdentifierStr | None, None),
        bot_id=(IdentifierStr | None, None),
        name=(_name_type(limits, min_length=0) | None, None),
        energy_level=(float | None, None),
        maintenance_level=(float | None, None),
        experience=(NonNegativeFloat | None, None),
        current_location=(BotLocation | None, None),
        status_effects=(list[StrictStr | StatusEffectShape] | None, None),
        customizations=(dict[str, Any] | None, None),
        bond_level=(float | None, None),
        last_activity=(datetime | None, None),
        battles_won=(NonNegativeInt | None, None),
        battles_lost=(NonNegativeInt | None, None),
        total_battles=(NonNegativeInt | None, None),
    )


__all__ = [
    "IdentifierStr",
    "BotShape",
    "BotStateShape",
    "StatusEffectShape",
    "build_bot_shape",
    "build_state_shape",
]
