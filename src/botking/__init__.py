"""Botking - bot entities, runtime state and two-phase validation.

The entity layer of the Botking game: five mutually exclusive bot roles
built from raw storage records, runtime bot state with worker and
non-worker variants, and a validation engine that checks shape first and
business rules second.

Example:
    >>> from botking import create_bot
    >>> bot = create_bot({
    ...     "botType": "PLAYABLE", "name": "Vex", "userId": "u-1",
    ...     "soulChipId": "sc-1", "skeletonId": "sk-1", "stateId": "st-1",
    ...     "combatRole": "SNIPER",
    ... })
    >>> bot.validate_creation()
    True

Modules:
    core: Configuration, logging, constants and exceptions.
    models: Enumerations, bot entities, role policies and runtime state.
    validation: Shape schemas, business rules and the validation engine.
"""

from __future__ import annotations

# Core
from botking.core.config import Settings, get_settings
from botking.core.exceptions import BotkingError, EntityValidationError
from botking.core.logging import configure_logging, get_logger

# Models
from botking.models import (
    Bot,
    BotType,
    GovBot,
    KingBot,
    NonWorkerBotState,
    PlayableBot,
    RogueBot,
    WorkerBot,
    WorkerBotState,
    create_bot,
    create_default_state,
    state_from_record,
    validate_state_for_bot_type,
)

# Validation
from botking.validation import (
    Operation,
    RuleProvider,
    ValidationEngine,
    ValidationResult,
    Violation,
)


__version__ = "0.1.0"
__all__ = [
    "__version__",
    # Core
    "BotkingError",
    "EntityValidationError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Bot",
    "BotType",
    "WorkerBot",
    "GovBot",
    "KingBot",
    "PlayableBot",
    "RogueBot",
    "WorkerBotState",
    "NonWorkerBotState",
    "create_bot",
    "create_default_state",
    "state_from_record",
    "validate_state_for_bot_type",
    # Validation
    "Operation",
    "RuleProvider",
    "ValidationEngine",
    "ValidationResult",
    "Violation",
]
