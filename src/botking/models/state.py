"""Runtime bot state models.

Bot state is the per-bot mutable status: energy, maintenance, location,
experience, status effects and customizations. Worker bots carry the
reduced WorkerBotState; every other role carries NonWorkerBotState, which
adds bond level and battle tracking.

Construction clamps values into their runtime ranges:

- energy is floored at 0 and may exceed 100 (boosts);
- maintenance and bond are kept within [0, 100];
- experience and battle counters are floored at 0;
- total battles is raised to won + lost when lower.

Mutation methods never modify the instance; they return a new state for
the caller to persist.

Example:
    >>> state = create_default_state(BotType.PLAYABLE)
    >>> state = state.record_battle_result(won=True)
    >>> state.battles_won, state.bond_level
    (1, 22.0)
"""

from __future__ import annotations

import math
import random
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Annotated, Any, Literal, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from botking.core.constants import (
    ACTIVITY_LEVEL_THRESHOLDS,
    BATTLE_ENERGY_COST,
    BATTLE_LOSS_BOND,
    BATTLE_LOSS_EXPERIENCE,
    BATTLE_MAINTENANCE_COST,
    BATTLE_WIN_BOND,
    BATTLE_WIN_EXPERIENCE,
    COMBAT_RATING_THRESHOLDS,
    DEFEAT_MORALE_DURATION,
    DEFEAT_MORALE_MAGNITUDE,
    EFFICIENCY_CAP,
    EFFICIENCY_MAINTENANCE_THRESHOLD,
    EXPERIENCE_PER_LEVEL_UNIT,
    KING_MIN_EXPECTED_BOND,
    MORALE_HIGH_WIN_RATE,
    MORALE_LOW_WIN_RATE,
    MORALE_WIN_RATE_SWING,
    NEEDS_MAINTENANCE_THRESHOLD,
    OPERATIONAL_MAINTENANCE_THRESHOLD,
    PERCENT_MAX,
    PERCENT_MIN,
    READINESS_EXPERIENCE_DIVISOR,
    READINESS_STATUS_THRESHOLDS,
    READINESS_WEIGHTS,
    REST_ENERGY_PER_UNIT,
    REST_FATIGUE_RECOVERY_CHANCE,
    ROGUE_MAX_EXPECTED_BOND,
    TRAINING_BOND_PER_UNIT,
    TRAINING_EFFECT_DURATION,
    TRAINING_EFFECT_MAGNITUDE_PER_INTENSITY,
    TRAINING_ENERGY_PER_UNIT,
    TRAINING_EXPERIENCE_PER_UNIT,
    VICTORY_MORALE_DURATION,
    VICTORY_MORALE_MAGNITUDE,
    WORK_ENERGY_PER_UNIT,
    WORK_EXHAUSTED_ENERGY,
    WORK_EXPERIENCE_PER_UNIT,
    WORK_FATIGUE_DURATION,
    WORK_FATIGUE_INTENSITY,
    WORK_FATIGUE_MAGNITUDE_PER_INTENSITY,
    WORK_HIGH_PERFORMANCE_EFFICIENCY,
    WORK_LOW_ENERGY,
    WORK_WEAR_PER_UNIT,
)
from botking.core.exceptions import UnknownBotTypeError
from botking.core.logging import get_logger
from botking.models.enums import BotLocation, BotType, StateType, StatusEffect
from botking.validation.result import (
    ValidationPhase,
    ValidationResult,
    Violation,
    ViolationCode,
)


logger = get_logger(__name__)


def _clamp(value: float, low: float, high: float | None = None) -> float:
    value = max(low, value)
    return value if high is None else min(high, value)


def _round(value: float) -> int:
    """Round halves up."""
    return math.floor(value + 0.5)


def _as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC."""
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value


def _effect_id(prefix: str, at: datetime) -> str:
    return f"{prefix}_{int(at.timestamp() * 1000)}"


# =============================================================================
# Status Effects
# =============================================================================


class ActiveStatusEffect(BaseModel):
    """A status effect currently applied to a bot.

    Attributes:
        id: Identifier; adding an effect with an existing id replaces it.
        effect: Effect name, usually a StatusEffect value.
        magnitude: Strength of the effect.
        duration: Remaining duration in seconds.
        source: What applied the effect.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str
    effect: str
    magnitude: float = 0
    duration: float = 0
    source: str | None = None


# =============================================================================
# Base State
# =============================================================================


class BaseBotState(BaseModel):
    """State shared by every bot.

    Attributes:
        id: State identifier.
        bot_id: Owning bot.
        energy_level: Current energy (>= 0, may exceed 100).
        maintenance_level: Mechanical condition in [0, 100].
        experience: Accumulated experience (>= 0).
        current_location: Where the bot currently is.
        status_effects: Active effects, in application order.
        customizations: Free-form key/value customizations.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str | None = None
    bot_id: str | None = None
    energy_level: float = PERCENT_MAX
    maintenance_level: float = PERCENT_MAX
    experience: float = 0
    current_location: BotLocation = BotLocation.STORAGE
    status_effects: list[ActiveStatusEffect] = Field(default_factory=list)
    customizations: dict[str, Any] = Field(default_factory=dict)

    @field_validator("status_effects", mode="before")
    @classmethod
    def expand_effect_names(cls, value: Any) -> Any:
        """Accept bare effect names as effects keyed by their own name."""
        if isinstance(value, list):
            return [
                {"id": item, "effect": item} if isinstance(item, str) else item
                for item in value
            ]
        return value

    @field_validator("energy_level", "experience", mode="after")
    @classmethod
    def floor_at_zero(cls, value: float) -> float:
        """Floor unbounded levels at zero."""
        return _clamp(value, PERCENT_MIN)

    @field_validator("maintenance_level", mode="after")
    @classmethod
    def clamp_percentage(cls, value: float) -> float:
        """Keep maintenance within [0, 100]."""
        return _clamp(value, PERCENT_MIN, PERCENT_MAX)

    def _evolve(self, **changes: Any) -> Self:
        """Return a re-validated copy with the given attributes replaced."""
        return self.model_validate({**self.model_dump(), **changes})

    # -------------------------------------------------------------------------
    # Mutations (return new states)
    # -------------------------------------------------------------------------

    def update_energy(self, amount: float) -> Self:
        """Add (or subtract) energy; the result never drops below 0."""
        return self._evolve(energy_level=self.energy_level + amount)

    def update_maintenance(self, amount: float) -> Self:
        """Add (or subtract) maintenance, clamped to [0, 100]."""
        return self._evolve(maintenance_level=self.maintenance_level + amount)

    def add_experience(self, amount: float) -> Self:
        return self._evolve(experience=self.experience + amount)

    def update_location(self, location: BotLocation | str) -> Self:
        return self._evolve(current_location=BotLocation(location))

    def add_status_effect(self, effect: ActiveStatusEffect | Mapping[str, Any]) -> Self:
        """Apply an effect, replacing any active effect with the same id.

        Args:
            effect: The effect to apply.

        Returns:
            New state with the effect appended.
        """
        effect = ActiveStatusEffect.model_validate(effect)
        effects = [e for e in self.status_effects if e.id != effect.id]
        effects.append(effect)
        return self._evolve(status_effects=effects)

    def remove_status_effect(self, effect_id: str) -> Self:
        effects = [e for e in self.status_effects if e.id != effect_id]
        return self._evolve(status_effects=effects)

    def tick_status_effects(self, elapsed: float) -> Self:
        """Advance effect timers by ``elapsed`` seconds and drop expired effects."""
        effects = [
            effect.model_copy(update={"duration": effect.duration - elapsed})
            for effect in self.status_effects
            if effect.duration - elapsed > 0
        ]
        return self._evolve(status_effects=effects)

    def set_customization(self, key: str, value: Any) -> Self:
        return self._evolve(customizations={**self.customizations, key: value})

    def remove_customization(self, key: str) -> Self:
        customizations = {k: v for k, v in self.customizations.items() if k != key}
        return self._evolve(customizations=customizations)

    def get_customization(self, key: str, default: Any = None) -> Any:
        return self.customizations.get(key, default)

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    @property
    def level(self) -> int:
        """Level derived from experience: floor(sqrt(experience / 100)) + 1."""
        return math.floor(math.sqrt(self.experience / EXPERIENCE_PER_LEVEL_UNIT)) + 1

    @property
    def is_operational(self) -> bool:
        """Whether the bot has energy left and is not critically worn."""
        return self.energy_level > 0 and self.maintenance_level > OPERATIONAL_MAINTENANCE_THRESHOLD

    @property
    def needs_maintenance(self) -> bool:
        return self.maintenance_level < NEEDS_MAINTENANCE_THRESHOLD

    @property
    def effective_energy(self) -> float:
        """Energy after energy boost and drain effects, floored at 0."""
        energy = self.energy_level
        for effect in self.status_effects:
            if effect.effect == StatusEffect.ENERGY_DRAIN:
                energy -= effect.magnitude
            elif effect.effect == StatusEffect.ENERGY_BOOST:
                energy += effect.magnitude
        return _clamp(energy, PERCENT_MIN)

    def effects_of_type(self, effect: StatusEffect | str) -> list[ActiveStatusEffect]:
        """Get the active effects with the given effect name."""
        return [e for e in self.status_effects if e.effect == effect]

    def to_record(self) -> dict[str, Any]:
        """Convert to a camelCase record for storage."""
        return self.model_dump(by_alias=True, mode="json")


# =============================================================================
# Worker State
# =============================================================================


class WorkStatus(BaseModel):
    """Snapshot of a worker's readiness.

    Attributes:
        efficiency: Work efficiency as a rounded percentage.
        condition: "Exhausted", "Needs Maintenance", "Low Energy",
            "High Performance" or "Normal".
        ready_for_work: False when exhausted or in need of maintenance.
        recommended_action: What to do next.
    """

    model_config = ConfigDict(frozen=True)

    efficiency: int
    condition: str
    ready_for_work: bool
    recommended_action: str


class WorkReport(BaseModel):
    """Outcome of a work session."""

    model_config = ConfigDict(frozen=True)

    success: bool
    output_quality: int = 0
    energy_consumed: int = 0
    experience_gained: int = 0


class RestReport(BaseModel):
    """Outcome of a rest."""

    model_config = ConfigDict(frozen=True)

    energy_restored: int
    status_effects_removed: list[str] = Field(default_factory=list)


class WorkerBotState(BaseBotState):
    """State of a worker bot: base state only."""

    state_type: Literal[StateType.WORKER] = StateType.WORKER

    @property
    def work_efficiency(self) -> float:
        """Fraction of nominal work output, between 0 and 2.

        Starts at energy / 100, scales down linearly below 50 maintenance,
        then productivity boosts and maintenance bonuses raise it while
        fatigue lowers it.
        """
        efficiency = self.energy_level / PERCENT_MAX
        if self.maintenance_level < EFFICIENCY_MAINTENANCE_THRESHOLD:
            efficiency *= self.maintenance_level / EFFICIENCY_MAINTENANCE_THRESHOLD
        for effect in self.status_effects:
            if effect.effect == StatusEffect.PRODUCTIVITY_BOOST:
                efficiency += effect.magnitude / 100
            elif effect.effect == StatusEffect.FATIGUE:
                efficiency -= effect.magnitude / 100
            elif effect.effect == StatusEffect.MAINTENANCE_BONUS:
                efficiency += effect.magnitude / 200
        return _clamp(efficiency, 0, EFFICIENCY_CAP)

    @property
    def work_status(self) -> WorkStatus:
        """Condition of the worker and the recommended next step."""
        efficiency = self.work_efficiency
        ready = True
        action = "Ready for assignment"
        if self.energy_level < WORK_EXHAUSTED_ENERGY:
            condition, ready, action = "Exhausted", False, "Requires energy restoration"
        elif self.maintenance_level < NEEDS_MAINTENANCE_THRESHOLD:
            condition, ready, action = "Needs Maintenance", False, "Schedule maintenance"
        elif self.energy_level < WORK_LOW_ENERGY:
            condition, action = "Low Energy", "Consider energy boost"
        elif efficiency > WORK_HIGH_PERFORMANCE_EFFICIENCY:
            condition, action = "High Performance", "Optimal work conditions"
        else:
            condition = "Normal"
        return WorkStatus(
            efficiency=_round(efficiency * 100),
            condition=condition,
            ready_for_work=ready,
            recommended_action=action,
        )

    def perform_work(
        self,
        intensity: float = 1.0,
        duration: float = 1,
        *,
        at: datetime | None = None,
    ) -> tuple[Self, WorkReport]:
        """Spend energy and maintenance on work in exchange for experience.

        Work above 1.5 intensity leaves a fatigue effect for an hour. A bot
        that is not operational does no work and is returned unchanged.

        Args:
            intensity: Work intensity, 1.0 being nominal.
            duration: Length of the session in hours.
            at: When the work happened (default: now, UTC).

        Returns:
            The new state and the work report.
        """
        if not self.is_operational:
            return self, WorkReport(success=False)

        load = intensity * duration
        energy_consumed = min(self.energy_level, load * WORK_ENERGY_PER_UNIT)
        output_quality = self.work_efficiency * (self.energy_level / PERCENT_MAX)
        experience_gained = _round(load * WORK_EXPERIENCE_PER_UNIT)

        state = self._evolve(
            energy_level=self.energy_level - energy_consumed,
            maintenance_level=self.maintenance_level - load * WORK_WEAR_PER_UNIT,
            experience=self.experience + experience_gained,
        )
        if intensity > WORK_FATIGUE_INTENSITY:
            at = _as_utc(at) if at is not None else datetime.now(UTC)
            state = state.add_status_effect(
                ActiveStatusEffect(
                    id=_effect_id("fatigue", at),
                    effect=StatusEffect.FATIGUE,
                    magnitude=intensity * WORK_FATIGUE_MAGNITUDE_PER_INTENSITY,
                    duration=WORK_FATIGUE_DURATION,
                    source="intensive_work",
                )
            )

        return state, WorkReport(
            success=True,
            output_quality=_round(output_quality * 100),
            energy_consumed=_round(energy_consumed),
            experience_gained=experience_gained,
        )

    def rest(
        self,
        duration: float = 1,
        *,
        rng: random.Random | None = None,
    ) -> tuple[Self, RestReport]:
        """Recharge energy up to 100 and possibly shake off fatigue.

        Each active fatigue effect clears with a 30% chance.

        Args:
            duration: Length of the rest in hours.
            rng: Random source deciding which fatigue effects clear.

        Returns:
            The new state and the rest report.
        """
        rng = rng or random.Random()
        energy_restored = _clamp(min(PERCENT_MAX - self.energy_level, duration * REST_ENERGY_PER_UNIT), 0)

        removed: list[str] = []
        effects = []
        for effect in self.status_effects:
            if effect.effect == StatusEffect.FATIGUE and rng.random() < REST_FATIGUE_RECOVERY_CHANCE:
                removed.append(effect.id)
            else:
                effects.append(effect)

        state = self._evolve(
            energy_level=self.energy_level + energy_restored,
            status_effects=effects,
        )
        return state, RestReport(energy_restored=_round(energy_restored), status_effects_removed=removed)


# =============================================================================
# Non-Worker State
# =============================================================================


class BattleStats(BaseModel):
    """Battle record summary.

    Attributes:
        won: Battles won.
        lost: Battles lost.
        total: Battles fought.
        win_rate: Percentage of battles won, rounded to 2 decimals.
    """

    model_config = ConfigDict(frozen=True)

    won: int
    lost: int
    total: int
    win_rate: float


class SocialStatus(BaseModel):
    """Bond, activity and combat standing of a bot."""

    model_config = ConfigDict(frozen=True)

    bond_level: float
    activity_level: str
    combat_rating: str


class CombatReadiness(BaseModel):
    """How prepared a bot is for battle.

    Attributes:
        readiness: Weighted score of the factors, 0 to 100.
        factors: Energy, maintenance, bond, scaled experience and morale.
        status: "Battle Ready", "Combat Capable", "Needs Preparation" or
            "Not Combat Ready".
        recommendations: Suggested fixes when not combat capable.
    """

    model_config = ConfigDict(frozen=True)

    readiness: int
    factors: dict[str, float]
    status: str
    recommendations: list[str] = Field(default_factory=list)


class TrainingReport(BaseModel):
    """Outcome of a training session."""

    model_config = ConfigDict(frozen=True)

    success: bool
    experience_gained: int = 0
    bond_increase: int = 0
    energy_consumed: int = 0


class NonWorkerBotState(BaseBotState):
    """State of a king, government, playable or rogue bot.

    Attributes:
        bond_level: Bond with the owner in [0, 100].
        last_activity: When the bot last did something.
        battles_won: Battles won.
        battles_lost: Battles lost.
        total_battles: Battles fought, never below won + lost.
    """

    state_type: Literal[StateType.NON_WORKER] = StateType.NON_WORKER
    bond_level: float = 0
    last_activity: datetime | None = None
    battles_won: int = 0
    battles_lost: int = 0
    total_battles: int = 0

    @field_validator("bond_level", mode="after")
    @classmethod
    def clamp_bond(cls, value: float) -> float:
        return _clamp(value, PERCENT_MIN, PERCENT_MAX)

    @field_validator("battles_won", "battles_lost", "total_battles", mode="after")
    @classmethod
    def floor_counters(cls, value: int) -> int:
        return max(0, value)

    @field_validator("last_activity", mode="after")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        """Stored timestamps without an offset are UTC."""
        return _as_utc(value) if value is not None else None

    @model_validator(mode="after")
    def reconcile_total_battles(self) -> "NonWorkerBotState":
        """Raise total battles to won + lost when it is lower."""
        self.total_battles = max(self.total_battles, self.battles_won + self.battles_lost)
        return self

    def update_bond_level(self, amount: float) -> Self:
        """Add (or subtract) bond, clamped to [0, 100]."""
        return self._evolve(bond_level=self.bond_level + amount)

    def touch(self, at: datetime | None = None) -> Self:
        """Mark the bot as active at ``at`` (default: now, UTC)."""
        return self._evolve(last_activity=at or datetime.now(UTC))

    def record_battle_result(self, won: bool, *, at: datetime | None = None) -> Self:
        """Record the outcome of a battle.

        A win grants 50 experience, +2 bond and a morale boost; a loss grants
        25 experience, -1 bond and a morale penalty. Either way the battle
        costs 15 energy and 5 maintenance.

        Args:
            won: Whether the battle was won.
            at: When the battle ended (default: now, UTC).

        Returns:
            New state with the result applied.
        """
        at = _as_utc(at) if at is not None else datetime.now(UTC)
        if won:
            morale = ActiveStatusEffect(
                id=_effect_id("victory_high", at),
                effect=StatusEffect.MORALE_BOOST,
                magnitude=VICTORY_MORALE_MAGNITUDE,
                duration=VICTORY_MORALE_DURATION,
                source="battle_victory",
            )
        else:
            morale = ActiveStatusEffect(
                id=_effect_id("defeat_fatigue", at),
                effect=StatusEffect.MORALE_PENALTY,
                magnitude=DEFEAT_MORALE_MAGNITUDE,
                duration=DEFEAT_MORALE_DURATION,
                source="battle_defeat",
            )
        effects = [e for e in self.status_effects if e.id != morale.id]
        effects.append(morale)

        return self._evolve(
            battles_won=self.battles_won + (1 if won else 0),
            battles_lost=self.battles_lost + (0 if won else 1),
            total_battles=self.total_battles + 1,
            last_activity=at,
            experience=self.experience + (BATTLE_WIN_EXPERIENCE if won else BATTLE_LOSS_EXPERIENCE),
            bond_level=self.bond_level + (BATTLE_WIN_BOND if won else BATTLE_LOSS_BOND),
            energy_level=self.energy_level - BATTLE_ENERGY_COST,
            maintenance_level=self.maintenance_level - BATTLE_MAINTENANCE_COST,
            status_effects=effects,
        )

    @property
    def battle_stats(self) -> BattleStats:
        win_rate = self.battles_won / self.total_battles * 100 if self.total_battles else 0.0
        return BattleStats(
            won=self.battles_won,
            lost=self.battles_lost,
            total=self.total_battles,
            win_rate=round(win_rate, 2),
        )

    @property
    def combat_rating(self) -> str:
        """Rating from the win rate; "Untested" before the first battle."""
        stats = self.battle_stats
        if stats.total == 0:
            return "Untested"
        for threshold, rating in COMBAT_RATING_THRESHOLDS:
            if stats.win_rate >= threshold:
                return rating
        return "Struggling"

    def activity_level(self, now: datetime | None = None) -> str:
        """Describe how recently the bot was active.

        Args:
            now: Reference time (default: now, UTC).

        Returns:
            "Very Active", "Active", "Moderate", "Inactive" or "Dormant".
        """
        if self.last_activity is None:
            return "Dormant"
        now = _as_utc(now) if now is not None else datetime.now(UTC)
        hours = (now - self.last_activity).total_seconds() / 3600
        for limit, label in ACTIVITY_LEVEL_THRESHOLDS:
            if hours < limit:
                return label
        return "Dormant"

    def social_status(self, now: datetime | None = None) -> SocialStatus:
        """Bond level, activity level and combat rating together."""
        return SocialStatus(
            bond_level=self.bond_level,
            activity_level=self.activity_level(now),
            combat_rating=self.combat_rating,
        )

    @property
    def morale(self) -> float:
        """Morale in [0, 100].

        Starts from the bond level, swings by 15 with a win rate above 70%
        or below 30%, then morale boost and penalty effects apply.
        """
        morale = self.bond_level
        if self.total_battles > 0:
            win_rate = self.battle_stats.win_rate
            if win_rate > MORALE_HIGH_WIN_RATE:
                morale += MORALE_WIN_RATE_SWING
            elif win_rate < MORALE_LOW_WIN_RATE:
                morale -= MORALE_WIN_RATE_SWING
        for effect in self.status_effects:
            if effect.effect == StatusEffect.MORALE_BOOST:
                morale += effect.magnitude
            elif effect.effect == StatusEffect.MORALE_PENALTY:
                morale -= effect.magnitude
        return _clamp(morale, PERCENT_MIN, PERCENT_MAX)

    @property
    def combat_readiness(self) -> CombatReadiness:
        """Weighted readiness score with a status and recommendations."""
        factors = {
            "energy": self.energy_level,
            "maintenance": self.maintenance_level,
            "bond": self.bond_level,
            "experience": min(PERCENT_MAX, self.experience / READINESS_EXPERIENCE_DIVISOR),
            "morale": self.morale,
        }
        readiness = _round(sum(factors[name] * weight for name, weight in READINESS_WEIGHTS.items()))

        recommendations: list[str] = []
        for threshold, status in READINESS_STATUS_THRESHOLDS:
            if readiness >= threshold:
                break
        else:
            status = "Not Combat Ready"
            if factors["energy"] < 40:
                recommendations.append("Critical: Restore energy")
            if factors["maintenance"] < 40:
                recommendations.append("Critical: Repair required")
            if factors["bond"] < 30:
                recommendations.append("Build trust with owner")
            if factors["morale"] < 30:
                recommendations.append("Address morale issues")

        if status == "Needs Preparation":
            if factors["energy"] < 60:
                recommendations.append("Restore energy")
            if factors["maintenance"] < 60:
                recommendations.append("Perform maintenance")
            if factors["bond"] < 50:
                recommendations.append("Improve bond level")

        return CombatReadiness(
            readiness=readiness,
            factors=factors,
            status=status,
            recommendations=recommendations,
        )

    def train(
        self,
        intensity: float = 1.0,
        duration: float = 1,
        *,
        at: datetime | None = None,
    ) -> tuple[Self, TrainingReport]:
        """Trade energy for experience and bond, leaving a skill improvement.

        A bot that is not operational does not train and is returned
        unchanged.

        Args:
            intensity: Training intensity, 1.0 being nominal.
            duration: Length of the session in hours.
            at: When the training happened (default: now, UTC).

        Returns:
            The new state and the training report.
        """
        if not self.is_operational:
            return self, TrainingReport(success=False)

        at = _as_utc(at) if at is not None else datetime.now(UTC)
        load = intensity * duration
        energy_consumed = min(self.energy_level, load * TRAINING_ENERGY_PER_UNIT)
        experience_gained = _round(load * TRAINING_EXPERIENCE_PER_UNIT)
        bond_increase = _round(load * TRAINING_BOND_PER_UNIT)

        state = self._evolve(
            energy_level=self.energy_level - energy_consumed,
            experience=self.experience + experience_gained,
            bond_level=self.bond_level + bond_increase,
            last_activity=at,
        ).add_status_effect(
            ActiveStatusEffect(
                id=_effect_id("training_boost", at),
                effect=StatusEffect.SKILL_IMPROVEMENT,
                magnitude=intensity * TRAINING_EFFECT_MAGNITUDE_PER_INTENSITY,
                duration=TRAINING_EFFECT_DURATION,
                source="training_session",
            )
        )

        return state, TrainingReport(
            success=True,
            experience_gained=experience_gained,
            bond_increase=bond_increase,
            energy_consumed=_round(energy_consumed),
        )


BotState = Annotated[WorkerBotState | NonWorkerBotState, Field(discriminator="state_type")]
"""Either state variant, discriminated by ``stateType``."""

_bot_state_adapter: TypeAdapter[WorkerBotState | NonWorkerBotState] = TypeAdapter(BotState)


# =============================================================================
# State Factory
# =============================================================================

DEFAULT_STATE_VALUES: Mapping[BotType, Mapping[str, Any]] = {
    BotType.WORKER: {
        "current_location": BotLocation.STORAGE,
    },
    BotType.PLAYABLE: {
        "bond_level": 20,
        "current_location": BotLocation.TRAINING,
    },
    BotType.KING: {
        "bond_level": 100,
        "battles_won": 10,
        "battles_lost": 1,
        "total_battles": 11,
        "experience": 5000,
        "current_location": BotLocation.TRAINING,
    },
    BotType.ROGUE: {
        "bond_level": 0,
        "battles_won": 15,
        "battles_lost": 5,
        "total_battles": 20,
        "experience": 3000,
        "current_location": BotLocation.MISSION,
    },
    BotType.GOVBOT: {
        "bond_level": 50,
        "battles_won": 5,
        "battles_lost": 1,
        "total_battles": 6,
        "experience": 2000,
        "current_location": BotLocation.MAINTENANCE,
    },
}
"""Starting state values per bot role."""


def is_worker_type(bot_type: BotType | str) -> bool:
    """Whether a role uses the worker state variant."""
    return bot_type == BotType.WORKER


def state_from_record(record: Mapping[str, Any]) -> WorkerBotState | NonWorkerBotState:
    """Build a runtime state from a stored record, selected by ``stateType``.

    Args:
        record: State record with camelCase (or snake_case) keys.

    Returns:
        The state variant matching the record's state type.

    Raises:
        pydantic.ValidationError: If stateType is missing or unknown, or a
            value has the wrong type.
    """
    # The discriminator is looked up by wire name
    if "state_type" in record and "stateType" not in record:
        record = {**record, "stateType": record["state_type"]}
    return _bot_state_adapter.validate_python(record)


def create_default_state(
    bot_type: BotType | str,
    **overrides: Any,
) -> WorkerBotState | NonWorkerBotState:
    """Create the starting state for a bot role.

    Args:
        bot_type: The bot role.
        **overrides: Attribute values replacing the role defaults.

    Returns:
        A worker state for workers, a non-worker state otherwise.

    Raises:
        UnknownBotTypeError: If the role is not recognized.
    """
    role = BotType.parse(bot_type)
    if role is None:
        raise UnknownBotTypeError(f"Unknown bot type: {bot_type!r}", bot_type=bot_type)

    values = {**DEFAULT_STATE_VALUES[role], **overrides}
    if role is BotType.WORKER:
        return WorkerBotState.model_validate(values)
    return NonWorkerBotState.model_validate(values)


def validate_state_for_bot_type(
    state: BaseBotState,
    bot_type: BotType | str,
) -> ValidationResult:
    """Check that a runtime state suits a bot role.

    A state of the wrong variant is an error. Kings with a bond below 80
    and rogues with a bond above 20 only produce warnings.

    Args:
        state: The runtime state.
        bot_type: The bot role.

    Returns:
        The validation result.

    Raises:
        UnknownBotTypeError: If the role is not recognized.
    """
    role = BotType.parse(bot_type)
    if role is None:
        raise UnknownBotTypeError(f"Unknown bot type: {bot_type!r}", bot_type=bot_type)

    expected = StateType.for_bot_type(role)
    actual = getattr(state, "state_type", None)
    if actual != expected:
        logger.warning(
            "State variant does not match bot type",
            bot_type=role.value,
            expected=expected.value,
            actual=actual,
        )
        return ValidationResult.failed(
            ValidationPhase.BUSINESS,
            [
                Violation(
                    field="stateType",
                    message=f"{role.value} bots require a {expected.value} state",
                    code=ViolationCode.STATE_TYPE_MISMATCH,
                )
            ],
        )

    warnings: list[str] = []
    bond = getattr(state, "bond_level", None)
    if role is BotType.KING and bond is not None and bond < KING_MIN_EXPECTED_BOND:
        warnings.append(f"King bots typically have a bond level of at least {KING_MIN_EXPECTED_BOND}")
    if role is BotType.ROGUE and bond is not None and bond > ROGUE_MAX_EXPECTED_BOND:
        warnings.append(f"Rogue bots typically have a bond level of at most {ROGUE_MAX_EXPECTED_BOND}")

    return ValidationResult.ok(state.to_record(), warnings=warnings)


__all__ = [
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
