"""Rule provider handing shape schemas and business rules to the engine.

The engine never builds schemas or rules itself. Swapping the provider,
or the limits it is built from, changes bounds without touching the
engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from botking.core.config import ValidationSettings
from botking.validation.rules import bot_rules_for, state_rules_for
from botking.validation.schemas import build_bot_shape, build_state_shape


if TYPE_CHECKING:
    from botking.models.enums import BotType
    from botking.validation.result import Operation
    from botking.validation.rules import Rule
    from botking.validation.schemas import BotShape, BotStateShape


class RuleProvider:
    """Supplies validation schemas and rules for a set of limits.

    Attributes:
        limits: The limits shape schemas and range rules are built from.
    """

    def __init__(self, limits: ValidationSettings | None = None) -> None:
        """Initialize the provider.

        Args:
            limits: Validation limits; defaults to ValidationSettings().
        """
        self.limits = limits if limits is not None else ValidationSettings()

    def bot_shape(self, bot_type: BotType | None, operation: Operation) -> type[BotShape]:
        """Shape schema for a bot role (None for the base entity)."""
        return build_bot_shape(self.limits, bot_type, operation)

    def bot_rules(self, bot_type: BotType | None) -> tuple[Rule, ...]:
        """Business rules for a bot role (none for the base entity)."""
        return bot_rules_for(bot_type)

    def state_shape(self, operation: Operation) -> type[BotStateShape]:
        """Shape schema for bot-state payloads."""
        return build_state_shape(self.limits, operation)

    def state_rules(self) -> tuple[Rule, ...]:
        """Business rules for bot-state payloads."""
        return state_rules_for(self.limits)

    def __repr__(self) -> str:
        return f"RuleProvider(limits={self.limits!r})"


__all__ = ["RuleProvider"]
