"""Enumeration types for the Botking entity layer.

This module defines the role tags that discriminate bot variants, the
combat, utility and government specializations a bot may carry, and the
vocabulary of runtime bot state (locations, state types, status effects).
"""

from __future__ import annotations

from enum import StrEnum


class BotType(StrEnum):
    """Role tag discriminating the five bot variants."""

    WORKER = "WORKER"
    GOVBOT = "GOVBOT"
    KING = "KING"
    PLAYABLE = "PLAYABLE"
    ROGUE = "ROGUE"

    @property
    def is_worker(self) -> bool:
        """Whether this role uses the worker state variant."""
        return self is BotType.WORKER

    @classmethod
    def parse(cls, value: object) -> BotType | None:
        """Return the member matching a raw discriminator, or None.

        Only string values are looked up; anything else is unrecognized.

        Args:
            value: Raw discriminator taken from a record.

        Returns:
            The matching BotType, or None when the value is not a known tag.
        """
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


class CombatRole(StrEnum):
    """Battlefield role of combat-capable bots."""

    ASSAULT = "ASSAULT"
    TANK = "TANK"
    SNIPER = "SNIPER"
    SCOUT = "SCOUT"


class UtilitySpecialization(StrEnum):
    """Labor specialization of worker bots."""

    CONSTRUCTION = "CONSTRUCTION"
    MINING = "MINING"
    REPAIR = "REPAIR"
    TRANSPORT = "TRANSPORT"


class GovernmentType(StrEnum):
    """Branch of government a bot serves."""

    SECURITY = "SECURITY"
    ADMIN = "ADMIN"
    MAINTENANCE = "MAINTENANCE"


class BotLocation(StrEnum):
    """Where a bot currently is."""

    STORAGE = "STORAGE"
    TRAINING = "TRAINING"
    MISSION = "MISSION"
    MAINTENANCE = "MAINTENANCE"
    COMBAT = "COMBAT"


class StateType(StrEnum):
    """Bot state variant tag.

    Workers carry the reduced state; every other role carries the
    non-worker state with bond and battle tracking.
    """

    WORKER = "worker"
    NON_WORKER = "non-worker"

    @classmethod
    def for_bot_type(cls, bot_type: BotType) -> StateType:
        """Get the state variant a role uses.

        Args:
            bot_type: The bot role.

        Returns:
            WORKER for worker bots, NON_WORKER otherwise.
        """
        return cls.WORKER if bot_type is BotType.WORKER else cls.NON_WORKER


class StatusEffect(StrEnum):
    """Temporary effects that may be active on a bot."""

    OVERCHARGED = "overcharged"
    DAMAGED = "damaged"
    REPAIRING = "repairing"
    STEALTH = "stealth"
    SHIELDED = "shielded"
    BOOSTED = "boosted"
    MALFUNCTIONING = "malfunctioning"
    OFFLINE = "offline"

    ENERGY_BOOST = "energy_boost"
    ENERGY_DRAIN = "energy_drain"
    MORALE_BOOST = "morale_boost"
    MORALE_PENALTY = "morale_penalty"
    PRODUCTIVITY_BOOST = "productivity_boost"
    FATIGUE = "fatigue"
    MAINTENANCE_BONUS = "maintenance_bonus"
    SKILL_IMPROVEMENT = "skill_improvement"


__all__ = [
    "BotType",
    "CombatRole",
    "UtilitySpecialization",
    "GovernmentType",
    "BotLocation",
    "StateType",
    "StatusEffect",
]
