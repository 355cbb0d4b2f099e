"""Raw bot records as exchanged with storage and API callers.

A BotRecord holds the common bot field set exactly as it arrived. Values
are neither coerced nor rejected here; a missing key becomes None. Judging
the values is the job of the validation engine.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any

from pydantic.alias_generators import to_camel


@dataclass
class BotRecord:
    """Common bot fields, keyed by attribute name.

    Attributes:
        id: Bot identifier, possibly server-assigned.
        user_id: Owning user, if any.
        soul_chip_id: Soul chip (cognition module) reference.
        skeleton_id: Skeleton (chassis) reference.
        state_id: Reference to the bot's BotState record.
        name: Display name.
        bot_type: Role tag; may hold an unrecognized value.
        combat_role: Combat role, if any.
        utility_spec: Utility specialization, if any.
        government_type: Government branch, if any.
        description: Free-text description.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    id: Any = None
    user_id: Any = None
    soul_chip_id: Any = None
    skeleton_id: Any = None
    state_id: Any = None
    name: Any = None
    bot_type: Any = None
    combat_role: Any = None
    utility_spec: Any = None
    government_type: Any = None
    description: Any = None
    created_at: Any = None
    updated_at: Any = None

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Attribute names of every record field, in declaration order."""
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> BotRecord:
        """Create from a storage or API mapping.

        Keys may be camelCase (``soulChipId``) or snake_case
        (``soul_chip_id``); camelCase wins when both are present. Unknown
        keys are ignored.

        Args:
            data: The raw record.

        Returns:
            A record holding the values exactly as given.
        """
        values: dict[str, Any] = {}
        for name in cls.field_names():
            wire_name = to_camel(name)
            if wire_name in data:
                values[name] = data[wire_name]
            elif name in data:
                values[name] = data[name]
        return cls(**values)

    def to_mapping(self) -> dict[str, Any]:
        """Convert to a camelCase mapping.

        Enum members are emitted as their plain values so the mapping can
        be handed to storage or validation unchanged.

        Returns:
            Dictionary keyed by wire names.
        """
        return {
            to_camel(name): _plain(getattr(self, name))
            for name in self.field_names()
        }

    def with_values(self, **changes: Any) -> BotRecord:
        """Return a copy with the given attributes replaced."""
        return replace(self, **changes)


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


__all__ = ["BotRecord"]
