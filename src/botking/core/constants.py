"""Application-wide constants for the Botking entity layer.

This module defines the numeric bounds, runtime state thresholds and
battle outcome values shared by the models and validation rules.
"""

from __future__ import annotations

# =============================================================================
# Bounds
# =============================================================================

PERCENT_MIN = 0
"""Lower bound for energy, maintenance and bond levels."""

PERCENT_MAX = 100
"""Upper bound for maintenance and bond levels (and validated energy)."""

DEFAULT_NAME_MAX_LENGTH = 100
"""Maximum length of a bot or state display name."""

# =============================================================================
# Runtime State Thresholds
# =============================================================================

OPERATIONAL_MAINTENANCE_THRESHOLD = 20
"""A bot is operational only while maintenance stays above this level."""

NEEDS_MAINTENANCE_THRESHOLD = 30
"""Maintenance below this level flags the bot for servicing."""

EXPERIENCE_PER_LEVEL_UNIT = 100
"""Level is floor(sqrt(experience / EXPERIENCE_PER_LEVEL_UNIT)) + 1."""

EFFICIENCY_MAINTENANCE_THRESHOLD = 50
"""Worker efficiency scales down linearly below this maintenance level."""

EFFICIENCY_CAP = 2.0
"""Upper bound on worker efficiency after status effects."""

# =============================================================================
# Worker Activity
# =============================================================================

WORK_EXHAUSTED_ENERGY = 20
"""Workers below this energy are exhausted and not ready for work."""

WORK_LOW_ENERGY = 50
"""Workers below this energy are flagged as low on energy."""

WORK_HIGH_PERFORMANCE_EFFICIENCY = 1.2
"""Efficiency above which a worker reports high performance."""

WORK_ENERGY_PER_UNIT = 10
WORK_WEAR_PER_UNIT = 2
WORK_EXPERIENCE_PER_UNIT = 5
"""Per unit of intensity x duration of work."""

WORK_FATIGUE_INTENSITY = 1.5
"""Work above this intensity leaves a fatigue effect."""

WORK_FATIGUE_MAGNITUDE_PER_INTENSITY = 5
WORK_FATIGUE_DURATION = 3600

REST_ENERGY_PER_UNIT = 20
"""Energy restored per unit of rest duration."""

REST_FATIGUE_RECOVERY_CHANCE = 0.3
"""Chance that rest clears each active fatigue effect."""

# =============================================================================
# Training and Combat Readiness
# =============================================================================

TRAINING_ENERGY_PER_UNIT = 8
TRAINING_EXPERIENCE_PER_UNIT = 10
TRAINING_BOND_PER_UNIT = 1.5
TRAINING_EFFECT_MAGNITUDE_PER_INTENSITY = 5
TRAINING_EFFECT_DURATION = 7200
"""Seconds the skill improvement after training lasts."""

READINESS_WEIGHTS = {
    "energy": 0.3,
    "maintenance": 0.25,
    "bond": 0.2,
    "experience": 0.15,
    "morale": 0.1,
}
"""Weight of each factor in the combat readiness score."""

READINESS_EXPERIENCE_DIVISOR = 10
"""Experience is divided by this (and capped at 100) to become a factor."""

# Readiness scores at which a status is reached, best first
READINESS_STATUS_THRESHOLDS = (
    (85, "Battle Ready"),
    (70, "Combat Capable"),
    (50, "Needs Preparation"),
)

MORALE_HIGH_WIN_RATE = 70
MORALE_LOW_WIN_RATE = 30
MORALE_WIN_RATE_SWING = 15
"""Morale gained above the high win rate, or lost below the low one."""

# =============================================================================
# Battle Outcomes
# =============================================================================

BATTLE_WIN_EXPERIENCE = 50
BATTLE_LOSS_EXPERIENCE = 25
BATTLE_WIN_BOND = 2
BATTLE_LOSS_BOND = -1
BATTLE_ENERGY_COST = 15
BATTLE_MAINTENANCE_COST = 5

VICTORY_MORALE_MAGNITUDE = 10
VICTORY_MORALE_DURATION = 1800
"""Seconds the morale boost after a won battle lasts."""

DEFEAT_MORALE_MAGNITUDE = 5
DEFEAT_MORALE_DURATION = 3600
"""Seconds the morale penalty after a lost battle lasts."""

# Win-rate percentages at which a combat rating is reached, best first
COMBAT_RATING_THRESHOLDS = (
    (80, "Elite"),
    (65, "Veteran"),
    (50, "Competent"),
    (30, "Developing"),
)

# Hours since last activity below which an activity level applies
ACTIVITY_LEVEL_THRESHOLDS = (
    (1, "Very Active"),
    (6, "Active"),
    (24, "Moderate"),
    (72, "Inactive"),
)

# =============================================================================
# Bond Expectations
# =============================================================================

KING_MIN_EXPECTED_BOND = 80
"""Kings with a bond below this level produce a warning."""

ROGUE_MAX_EXPECTED_BOND = 20
"""Rogues with a bond above this level produce a warning."""
