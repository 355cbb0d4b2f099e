"""Per-role field policies for bot records.

The five bot roles differ only in which optional attributes they must
carry, may carry, or may never carry. That table lives here once as data.
Constructor normalization and the business-rule validation phase are both
derived from it, so the two cannot drift apart.

Example:
    >>> from botking.models.enums import BotType
    >>> from botking.models.roles import policy_for, FieldPolicy
    >>> policy_for(BotType.GOVBOT)["user_id"] is FieldPolicy.FORBIDDEN
    True
"""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING

from botking.models.enums import BotType


if TYPE_CHECKING:
    from collections.abc import Mapping

    from botking.models.records import BotRecord


class FieldPolicy(StrEnum):
    """How a role treats one of the policy-controlled fields.

    FORBIDDEN fields are forced to None by the role's constructor and must
    be empty at validation time. REQUIRED fields must hold a non-empty value
    at validation time. OPTIONAL fields are unconstrained.
    """

    OPTIONAL = "optional"
    REQUIRED = "required"
    FORBIDDEN = "forbidden"


_O = FieldPolicy.OPTIONAL
_R = FieldPolicy.REQUIRED
_F = FieldPolicy.FORBIDDEN

POLICY_FIELDS: tuple[str, ...] = (
    "user_id",
    "soul_chip_id",
    "combat_role",
    "utility_spec",
    "government_type",
)
"""Record attributes whose presence depends on the bot role."""

ROLE_FIELD_POLICIES: Mapping[BotType, Mapping[str, FieldPolicy]] = MappingProxyType({
    BotType.WORKER: MappingProxyType({
        "user_id": _O,
        "soul_chip_id": _F,
        "combat_role": _F,
        "utility_spec": _R,
        "government_type": _F,
    }),
    BotType.GOVBOT: MappingProxyType({
        "user_id": _F,
        "soul_chip_id": _R,
        "combat_role": _R,
        "utility_spec": _F,
        "government_type": _R,
    }),
    BotType.KING: MappingProxyType({
        "user_id": _O,
        "soul_chip_id": _R,
        "combat_role": _R,
        "utility_spec": _F,
        "government_type": _O,
    }),
    BotType.PLAYABLE: MappingProxyType({
        "user_id": _R,
        "soul_chip_id": _R,
        "combat_role": _R,
        "utility_spec": _F,
        "government_type": _O,
    }),
    BotType.ROGUE: MappingProxyType({
        "user_id": _O,
        "soul_chip_id": _O,
        "combat_role": _R,
        "utility_spec": _F,
        "government_type": _O,
    }),
})


def policy_for(bot_type: BotType) -> Mapping[str, FieldPolicy]:
    """Get the field policies of a role.

    Args:
        bot_type: The bot role.

    Returns:
        Mapping of record attribute name to FieldPolicy.
    """
    return ROLE_FIELD_POLICIES[bot_type]


def fields_with_policy(bot_type: BotType, policy: FieldPolicy) -> tuple[str, ...]:
    """Get the record attributes a role treats with the given policy."""
    return tuple(
        name for name, field_policy in policy_for(bot_type).items()
        if field_policy is policy
    )


def normalize_bot_record(bot_type: BotType, record: BotRecord) -> BotRecord:
    """Apply a role's construction-time normalization to a record.

    Forbidden fields are overwritten with None and the discriminator is set
    to the role's tag, whatever the input held. Applying this twice gives
    the same record as applying it once.

    Args:
        bot_type: The role being constructed.
        record: The incoming record (left untouched).

    Returns:
        A normalized copy of the record.
    """
    forced = dict.fromkeys(fields_with_policy(bot_type, FieldPolicy.FORBIDDEN))
    return record.with_values(bot_type=bot_type, **forced)


__all__ = [
    "FieldPolicy",
    "POLICY_FIELDS",
    "ROLE_FIELD_POLICIES",
    "policy_for",
    "fields_with_policy",
    "normalize_bot_record",
]
