"""Domain models for the Botking entity layer.

Submodules:
    enums: Role tags, specializations, locations, state types, status effects.
    records: BotRecord, the raw bot field set.
    roles: Per-role field policies and constructor normalization.
    bot: Bot entities and the create_bot factory.
    state: Runtime bot state variants and the state factory.

Example:
    >>> from botking.models import create_bot, GovBot
    >>> bot = create_bot({"botType": "GOVBOT", "userId": "u-1"})
    >>> isinstance(bot, GovBot), bot.user_id
    (True, None)
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from botking.models.enums import (
    BotLocation,
    BotType,
    CombatRole,
    GovernmentType,
    StateType,
    StatusEffect,
    UtilitySpecialization,
)

# =============================================================================
# Records and Role Policies
# =============================================================================
from botking.models.records import BotRecord
from botking.models.roles import (
    POLICY_FIELDS,
    ROLE_FIELD_POLICIES,
    FieldPolicy,
    fields_with_policy,
    normalize_bot_record,
    policy_for,
)

# =============================================================================
# Entities
# =============================================================================
from botking.models.bot import (
    BOT_CLASSES,
    Bot,
    GovBot,
    KingBot,
    PlayableBot,
    RogueBot,
    WorkerBot,
    create_bot,
)

# =============================================================================
# Runtime State
# =============================================================================
from botking.models.state import (
    DEFAULT_STATE_VALUES,
    ActiveStatusEffect,
    BaseBotState,
    BattleStats,
    BotState,
    CombatReadiness,
    NonWorkerBotState,
    RestReport,
    SocialStatus,
    TrainingReport,
    WorkerBotState,
    WorkReport,
    WorkStatus,
    create_default_state,
    is_worker_type,
    state_from_record,
    validate_state_for_bot_type,
)


__all__ = [
    # Enumerations
    "BotType",
    "CombatRole",
    "UtilitySpecialization",
    "GovernmentType",
    "BotLocation",
    "StateType",
    "StatusEffect",
    # Records and role policies
    "BotRecord",
    "FieldPolicy",
    "POLICY_FIELDS",
    "ROLE_FIELD_POLICIES",
    "policy_for",
    "fields_with_policy",
    "normalize_bot_record",
    # Entities
    "Bot",
    "WorkerBot",
    "GovBot",
    "KingBot",
    "PlayableBot",
    "RogueBot",
    "BOT_CLASSES",
    "create_bot",
    # Runtime state
    "ActiveStatusEffect",
    "BaseBotState",
    "WorkerBotState",
    "NonWorkerBotState",
    "BattleStats",
    "WorkStatus",
    "WorkReport",
    "RestReport",
    "SocialStatus",
    "CombatReadiness",
    "TrainingReport",
    "BotState",
    "DEFAULT_STATE_VALUES",
    "is_worker_type",
    "state_from_record",
    "create_default_state",
    "validate_state_for_bot_type",
]
