"""Tests for runtime bot state models and the state factory."""

from __future__ import annotations

import random
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from pydantic import ValidationError as PydanticValidationError

from botking.core.exceptions import UnknownBotTypeError
from botking.models import (
    ActiveStatusEffect,
    BotLocation,
    BotType,
    NonWorkerBotState,
    StateType,
    StatusEffect,
    WorkerBotState,
    create_default_state,
    is_worker_type,
    state_from_record,
    validate_state_for_bot_type,
)


class TestClamping:
    """Tests for construction-time clamping."""

    def test_energy_floored_not_capped(self) -> None:
        """Test energy may exceed 100 but not drop below 0."""
        assert WorkerBotState(energy_level=150).energy_level == 150
        assert WorkerBotState(energy_level=-10).energy_level == 0

    def test_maintenance_clamped(self) -> None:
        """Test maintenance stays within [0, 100]."""
        assert WorkerBotState(maintenance_level=120).maintenance_level == 100
        assert WorkerBotState(maintenance_level=-5).maintenance_level == 0

    def test_bond_clamped(self) -> None:
        """Test bond stays within [0, 100]."""
        assert NonWorkerBotState(bond_level=130).bond_level == 100
        assert NonWorkerBotState(bond_level=-1).bond_level == 0

    def test_total_battles_raised(self) -> None:
        """Test total battles is never below won + lost."""
        state = NonWorkerBotState(battles_won=10, battles_lost=5, total_battles=12)
        assert state.total_battles == 15

    def test_counters_floored(self) -> None:
        """Test negative battle counters become zero."""
        state = NonWorkerBotState(battles_won=-3)
        assert state.battles_won == 0

    def test_camel_case_input(self) -> None:
        """Test wire names are accepted."""
        state = NonWorkerBotState.model_validate({"bondLevel": 40, "currentLocation": "MISSION"})
        assert state.bond_level == 40
        assert state.current_location is BotLocation.MISSION

    def test_effect_names_expanded(self) -> None:
        """Test bare effect names become effect records."""
        state = WorkerBotState(status_effects=["fatigue"])
        assert state.status_effects == [ActiveStatusEffect(id="fatigue", effect="fatigue")]


class TestBaseStateMutations:
    """Tests for state methods shared by both variants."""

    def test_update_energy_returns_new_state(self) -> None:
        """Test the original state is unchanged."""
        state = WorkerBotState(energy_level=50)
        updated = state.update_energy(-80)

        assert updated.energy_level == 0
        assert state.energy_level == 50

    def test_update_maintenance_clamps(self) -> None:
        """Test maintenance updates stay in range."""
        assert WorkerBotState(maintenance_level=95).update_maintenance(20).maintenance_level == 100

    def test_add_experience_and_level(self) -> None:
        """Test level follows floor(sqrt(experience / 100)) + 1."""
        state = WorkerBotState()
        assert state.level == 1
        assert state.add_experience(400).level == 3
        assert state.add_experience(399).level == 2

    def test_update_location(self) -> None:
        """Test location changes accept strings."""
        assert WorkerBotState().update_location("COMBAT").current_location is BotLocation.COMBAT

    def test_unknown_location_rejected(self) -> None:
        """Test unknown locations raise."""
        with pytest.raises(ValueError):
            WorkerBotState().update_location("MOON")

    def test_status_effect_replaced_by_id(self) -> None:
        """Test adding an effect with an existing id replaces it."""
        state = WorkerBotState().add_status_effect(
            {"id": "e1", "effect": "fatigue", "magnitude": 10}
        )
        state = state.add_status_effect({"id": "e1", "effect": "fatigue", "magnitude": 30})

        assert len(state.status_effects) == 1
        assert state.status_effects[0].magnitude == 30

    def test_remove_status_effect(self) -> None:
        """Test effects are removed by id."""
        state = WorkerBotState(status_effects=["fatigue", "boosted"])
        assert [e.id for e in state.remove_status_effect("fatigue").status_effects] == ["boosted"]

    def test_tick_status_effects(self) -> None:
        """Test timers run down and expired effects are dropped."""
        state = WorkerBotState(status_effects=[
            {"id": "short", "effect": "fatigue", "duration": 10},
            {"id": "long", "effect": "fatigue", "duration": 100},
        ])

        ticked = state.tick_status_effects(30)

        assert [e.id for e in ticked.status_effects] == ["long"]
        assert ticked.status_effects[0].duration == 70

    def test_customizations(self) -> None:
        """Test customizations are set, read and removed."""
        state = WorkerBotState().set_customization("paint", "red")
        assert state.get_customization("paint") == "red"
        assert state.remove_customization("paint").get_customization("paint") is None
        assert state.get_customization("missing", "none") == "none"

    @pytest.mark.parametrize(
        "energy,maintenance,operational,needs_maintenance",
        [
            (50, 50, True, False),
            (0, 50, False, False),
            (50, 20, False, True),
            (50, 25, True, True),
        ],
    )
    def test_operational_flags(
        self,
        energy: float,
        maintenance: float,
        operational: bool,
        needs_maintenance: bool,
    ) -> None:
        """Test the operational and maintenance thresholds."""
        state = WorkerBotState(energy_level=energy, maintenance_level=maintenance)
        assert state.is_operational is operational
        assert state.needs_maintenance is needs_maintenance

    def test_effective_energy(self) -> None:
        """Test boosts add, drains subtract, and the result is floored."""
        state = WorkerBotState(energy_level=50, status_effects=[
            {"id": "b", "effect": StatusEffect.ENERGY_BOOST, "magnitude": 70},
            {"id": "d", "effect": StatusEffect.ENERGY_DRAIN, "magnitude": 10},
        ])
        assert state.effective_energy == 110
        assert WorkerBotState(energy_level=5, status_effects=[
            {"id": "d", "effect": "energy_drain", "magnitude": 10},
        ]).effective_energy == 0

    def test_effects_of_type(self) -> None:
        """Test effects are filtered by effect name."""
        state = WorkerBotState(status_effects=[
            {"id": "a", "effect": "fatigue"},
            {"id": "b", "effect": "boosted"},
        ])
        assert [e.id for e in state.effects_of_type(StatusEffect.FATIGUE)] == ["a"]

    def test_to_record_uses_wire_names(self) -> None:
        """Test records are camelCase and JSON-friendly."""
        record = NonWorkerBotState(bond_level=10).to_record()
        assert record["stateType"] == "non-worker"
        assert record["bondLevel"] == 10
        assert record["currentLocation"] == "STORAGE"


class TestWorkerBotState:
    """Tests for worker-only behaviour."""

    def test_state_type(self) -> None:
        """Test the worker state tag."""
        assert WorkerBotState().state_type == StateType.WORKER

    def test_work_efficiency(self) -> None:
        """Test efficiency scaling and effects."""
        assert WorkerBotState(energy_level=80).work_efficiency == pytest.approx(0.8)
        assert WorkerBotState(energy_level=100, maintenance_level=25).work_efficiency == pytest.approx(0.5)

        boosted = WorkerBotState(energy_level=100, status_effects=[
            {"id": "p", "effect": "productivity_boost", "magnitude": 50},
            {"id": "m", "effect": "maintenance_bonus", "magnitude": 20},
        ])
        assert boosted.work_efficiency == pytest.approx(1.6)

    def test_work_efficiency_capped(self) -> None:
        """Test efficiency stays within [0, 2]."""
        state = WorkerBotState(energy_level=300)
        assert state.work_efficiency == 2.0
        tired = WorkerBotState(energy_level=10, status_effects=[
            {"id": "f", "effect": "fatigue", "magnitude": 90},
        ])
        assert tired.work_efficiency == 0


class TestNonWorkerBotState:
    """Tests for bond and battle tracking."""

    def test_update_bond_level(self) -> None:
        """Test bond updates are clamped."""
        assert NonWorkerBotState(bond_level=99).update_bond_level(5).bond_level == 100

    def test_record_win(self) -> None:
        """Test the effects of a won battle."""
        at = datetime(2026, 1, 1, tzinfo=UTC)
        state = NonWorkerBotState(bond_level=20, energy_level=100, maintenance_level=100)

        after = state.record_battle_result(True, at=at)

        assert (after.battles_won, after.battles_lost, after.total_battles) == (1, 0, 1)
        assert after.experience == 50
        assert after.bond_level == 22
        assert after.energy_level == 85
        assert after.maintenance_level == 95
        assert after.last_activity == at
        assert after.effects_of_type(StatusEffect.MORALE_BOOST)

    def test_record_loss(self) -> None:
        """Test the effects of a lost battle."""
        state = NonWorkerBotState(bond_level=0)

        after = state.record_battle_result(False)

        assert (after.battles_won, after.battles_lost, after.total_battles) == (0, 1, 1)
        assert after.experience == 25
        assert after.bond_level == 0
        assert after.effects_of_type(StatusEffect.MORALE_PENALTY)
        assert state.total_battles == 0

    def test_battle_stats(self) -> None:
        """Test win rate as a percentage rounded to 2 decimals."""
        stats = NonWorkerBotState(battles_won=2, battles_lost=1, total_battles=3).battle_stats
        assert (stats.won, stats.lost, stats.total) == (2, 1, 3)
        assert stats.win_rate == 66.67
        assert NonWorkerBotState().battle_stats.win_rate == 0

    @pytest.mark.parametrize(
        "won,lost,rating",
        [(0, 0, "Untested"), (9, 1, "Elite"), (7, 3, "Veteran"), (5, 5, "Competent"),
         (3, 7, "Developing"), (1, 9, "Struggling")],
    )
    def test_combat_rating(self, won: int, lost: int, rating: str) -> None:
        """Test combat ratings by win rate."""
        assert NonWorkerBotState(battles_won=won, battles_lost=lost).combat_rating == rating

    def test_activity_level(self) -> None:
        """Test activity level by hours since last activity."""
        now = datetime(2026, 1, 2, tzinfo=UTC)
        state = NonWorkerBotState().touch(now - timedelta(hours=3))
        assert state.activity_level(now) == "Active"
        assert NonWorkerBotState().activity_level(now) == "Dormant"


class TestStateFactory:
    """Tests for default states and record loading."""

    def test_worker_default(self) -> None:
        """Test workers start in storage with a worker state."""
        state = create_default_state(BotType.WORKER)
        assert isinstance(state, WorkerBotState)
        assert state.current_location is BotLocation.STORAGE

    @pytest.mark.parametrize(
        "bot_type,bond,battles,experience,location",
        [
            ("PLAYABLE", 20, (0, 0, 0), 0, BotLocation.TRAINING),
            ("KING", 100, (10, 1, 11), 5000, BotLocation.TRAINING),
            ("ROGUE", 0, (15, 5, 20), 3000, BotLocation.MISSION),
            ("GOVBOT", 50, (5, 1, 6), 2000, BotLocation.MAINTENANCE),
        ],
    )
    def test_non_worker_defaults(
        self,
        bot_type: str,
        bond: int,
        battles: tuple[int, int, int],
        experience: int,
        location: BotLocation,
    ) -> None:
        """Test the starting values of non-worker roles."""
        state = create_default_state(bot_type)

        assert isinstance(state, NonWorkerBotState)
        assert state.bond_level == bond
        assert (state.battles_won, state.battles_lost, state.total_battles) == battles
        assert state.experience == experience
        assert state.current_location is location

    def test_overrides(self) -> None:
        """Test overrides replace defaults."""
        state = create_default_state(BotType.KING, bond_level=90, id="state-7")
        assert state.bond_level == 90
        assert state.id == "state-7"

    def test_unknown_type_raises(self) -> None:
        """Test unknown roles are rejected."""
        with pytest.raises(UnknownBotTypeError):
            create_default_state("DRONE")

    def test_is_worker_type(self) -> None:
        """Test worker detection."""
        assert is_worker_type(BotType.WORKER) is True
        assert is_worker_type("WORKER") is True
        assert is_worker_type(BotType.KING) is False

    def test_state_from_record(
        self,
        worker_state_payload: dict[str, Any],
        non_worker_state_payload: dict[str, Any],
    ) -> None:
        """Test records load into the matching variant."""
        assert isinstance(state_from_record(worker_state_payload), WorkerBotState)
        loaded = state_from_record(non_worker_state_payload)
        assert isinstance(loaded, NonWorkerBotState)
        assert loaded.total_battles == 15

    def test_state_from_record_snake_case_tag(self) -> None:
        """Test the attribute name of the tag is accepted."""
        assert isinstance(state_from_record({"state_type": "non-worker"}), NonWorkerBotState)

    def test_state_from_record_requires_tag(self) -> None:
        """Test records without a state type are rejected."""
        with pytest.raises(PydanticValidationError):
            state_from_record({"energyLevel": 50})

    def test_round_trip(self) -> None:
        """Test a state survives to_record and back."""
        state = create_default_state(BotType.ROGUE).record_battle_result(
            True, at=datetime(2026, 1, 1, tzinfo=UTC)
        )
        assert state_from_record(state.to_record()) == state


class TestValidateStateForBotType:
    """Tests for validate_state_for_bot_type."""

    def test_matching_state_passes(self) -> None:
        """Test a default state suits its role."""
        result = validate_state_for_bot_type(create_default_state("KING"), "KING")
        assert result.success is True
        assert result.warnings == []

    def test_variant_mismatch_fails(self) -> None:
        """Test a worker state on a king is an error."""
        result = validate_state_for_bot_type(create_default_state("WORKER"), BotType.KING)
        assert result.success is False
        assert result.error_fields == ["stateType"]

    def test_low_bond_king_warns(self) -> None:
        """Test kings with weak bonds produce a warning."""
        result = validate_state_for_bot_type(create_default_state("KING", bond_level=50), "KING")
        assert result.success is True
        assert len(result.warnings) == 1

    def test_high_bond_rogue_warns(self) -> None:
        """Test rogues with strong bonds produce a warning."""
        result = validate_state_for_bot_type(create_default_state("ROGUE", bond_level=60), "ROGUE")
        assert len(result.warnings) == 1


class FixedRandom(random.Random):
    """Random source that always draws the same value."""

    def __init__(self, value: float) -> None:
        super().__init__()
        self.value = value

    def random(self) -> float:
        return self.value


class TestNaiveTimestamps:
    """Tests for stored timestamps without an offset."""

    def test_naive_last_activity_treated_as_utc(self) -> None:
        """Test a naive ISO timestamp loads as UTC."""
        state = state_from_record({"stateType": "non-worker", "lastActivity": "2024-01-01T00:00:00"})
        assert state.last_activity == datetime(2024, 1, 1, tzinfo=UTC)

    def test_activity_level_with_naive_values(self) -> None:
        """Test naive last activity and naive now can be compared."""
        state = state_from_record({"stateType": "non-worker", "lastActivity": "2024-01-01T00:00:00"})

        assert state.activity_level(datetime(2024, 1, 1, 2)) == "Active"
        assert state.activity_level() == "Dormant"

    def test_touch_with_naive_time(self) -> None:
        """Test touching with a naive time stores an aware one."""
        state = NonWorkerBotState().touch(datetime(2024, 1, 1))
        assert state.last_activity is not None
        assert state.last_activity.tzinfo is not None


class TestWorkerActivity:
    """Tests for work status, work sessions and rest."""

    @pytest.mark.parametrize(
        "values,condition,ready",
        [
            ({"energy_level": 10}, "Exhausted", False),
            ({"energy_level": 80, "maintenance_level": 25}, "Needs Maintenance", False),
            ({"energy_level": 40}, "Low Energy", True),
            ({"energy_level": 80}, "Normal", True),
        ],
    )
    def test_work_status(self, values: dict[str, Any], condition: str, ready: bool) -> None:
        """Test the worker condition bands."""
        status = WorkerBotState(**values).work_status
        assert status.condition == condition
        assert status.ready_for_work is ready

    def test_work_status_high_performance(self) -> None:
        """Test boosted workers report high performance."""
        state = WorkerBotState(status_effects=[
            {"id": "p", "effect": "productivity_boost", "magnitude": 50},
        ])

        status = state.work_status

        assert status.condition == "High Performance"
        assert status.efficiency == 150
        assert status.recommended_action == "Optimal work conditions"

    def test_perform_work(self) -> None:
        """Test work spends energy and maintenance for experience."""
        state = WorkerBotState()

        after, report = state.perform_work(1.0, 2)

        assert report.success is True
        assert (report.output_quality, report.energy_consumed, report.experience_gained) == (100, 20, 10)
        assert after.energy_level == 80
        assert after.maintenance_level == 96
        assert after.experience == 10
        assert after.status_effects == []
        assert state.energy_level == 100

    def test_intensive_work_causes_fatigue(self) -> None:
        """Test work above 1.5 intensity leaves a fatigue effect."""
        at = datetime(2026, 1, 1, tzinfo=UTC)

        after, _ = WorkerBotState().perform_work(2.0, 1, at=at)

        [fatigue] = after.effects_of_type(StatusEffect.FATIGUE)
        assert fatigue.id == f"fatigue_{int(at.timestamp() * 1000)}"
        assert fatigue.magnitude == 10
        assert fatigue.duration == 3600

    def test_energy_consumed_limited_to_available(self) -> None:
        """Test work cannot spend more energy than the bot has."""
        after, report = WorkerBotState(energy_level=15).perform_work(1.0, 3)
        assert report.energy_consumed == 15
        assert after.energy_level == 0

    def test_no_work_when_not_operational(self) -> None:
        """Test a worn out bot does no work."""
        state = WorkerBotState(maintenance_level=20)

        after, report = state.perform_work()

        assert report.success is False
        assert report.energy_consumed == 0
        assert after is state

    @pytest.mark.parametrize("energy,restored", [(50, 20), (90, 10), (150, 0)])
    def test_rest_restores_energy(self, energy: float, restored: int) -> None:
        """Test rest recharges up to 100 and never drains."""
        after, report = WorkerBotState(energy_level=energy).rest(1, rng=FixedRandom(0.9))
        assert report.energy_restored == restored
        assert after.energy_level == max(energy, min(100, energy + restored))

    def test_rest_clears_fatigue_on_lucky_draw(self) -> None:
        """Test fatigue clears when the draw is below the recovery chance."""
        state = WorkerBotState(status_effects=[
            {"id": "f1", "effect": "fatigue", "magnitude": 10},
            {"id": "b1", "effect": "energy_boost", "magnitude": 5},
        ])

        cleared, report = state.rest(rng=FixedRandom(0.1))
        kept, kept_report = state.rest(rng=FixedRandom(0.5))

        assert report.status_effects_removed == ["f1"]
        assert [e.id for e in cleared.status_effects] == ["b1"]
        assert kept_report.status_effects_removed == []
        assert len(kept.status_effects) == 2


class TestNonWorkerActivity:
    """Tests for morale, combat readiness, social status and training."""

    @pytest.mark.parametrize(
        "values,morale",
        [
            ({"bond_level": 50}, 50),
            ({"bond_level": 50, "battles_won": 8, "battles_lost": 2}, 65),
            ({"bond_level": 50, "battles_won": 2, "battles_lost": 8}, 35),
            ({"bond_level": 95, "battles_won": 8, "battles_lost": 2}, 100),
        ],
    )
    def test_morale_from_bond_and_win_rate(self, values: dict[str, Any], morale: float) -> None:
        """Test morale follows bond and recent results."""
        assert NonWorkerBotState(**values).morale == morale

    def test_morale_effects(self) -> None:
        """Test morale boosts and penalties apply."""
        state = NonWorkerBotState(bond_level=50, status_effects=[
            {"id": "b", "effect": "morale_boost", "magnitude": 10},
            {"id": "p", "effect": "morale_penalty", "magnitude": 25},
        ])
        assert state.morale == 35

    def test_battle_ready(self) -> None:
        """Test a fresh, bonded veteran is battle ready."""
        readiness = NonWorkerBotState(bond_level=100, experience=1000).combat_readiness

        assert readiness.readiness == 100
        assert readiness.status == "Battle Ready"
        assert readiness.recommendations == []
        assert set(readiness.factors) == {"energy", "maintenance", "bond", "experience", "morale"}

    def test_combat_capable(self) -> None:
        """Test the weighted score between 70 and 85."""
        state = NonWorkerBotState(
            energy_level=80, maintenance_level=80, bond_level=60, experience=600,
        )
        readiness = state.combat_readiness

        assert readiness.readiness == 71
        assert readiness.status == "Combat Capable"

    def test_needs_preparation(self) -> None:
        """Test recommendations for a half-ready bot."""
        state = NonWorkerBotState(
            energy_level=50, maintenance_level=50, bond_level=50, experience=500,
        )
        readiness = state.combat_readiness

        assert readiness.readiness == 50
        assert readiness.status == "Needs Preparation"
        assert readiness.recommendations == ["Restore energy", "Perform maintenance"]

    def test_not_combat_ready(self) -> None:
        """Test critical recommendations for a depleted bot."""
        readiness = NonWorkerBotState(energy_level=0, maintenance_level=0).combat_readiness

        assert readiness.status == "Not Combat Ready"
        assert readiness.recommendations == [
            "Critical: Restore energy",
            "Critical: Repair required",
            "Build trust with owner",
            "Address morale issues",
        ]

    def test_social_status(self) -> None:
        """Test bond, activity and rating are reported together."""
        now = datetime(2026, 1, 2, tzinfo=UTC)
        state = NonWorkerBotState(bond_level=40).touch(now - timedelta(hours=3))

        status = state.social_status(now)

        assert status.bond_level == 40
        assert status.activity_level == "Active"
        assert status.combat_rating == "Untested"

    def test_train(self) -> None:
        """Test training spends energy for experience, bond and a skill boost."""
        at = datetime(2026, 1, 1, tzinfo=UTC)
        state = NonWorkerBotState(bond_level=40)

        after, report = state.train(1.0, 2, at=at)

        assert report.success is True
        assert (report.experience_gained, report.bond_increase, report.energy_consumed) == (20, 3, 16)
        assert after.energy_level == 84
        assert after.experience == 20
        assert after.bond_level == 43
        assert after.last_activity == at
        [boost] = after.effects_of_type(StatusEffect.SKILL_IMPROVEMENT)
        assert boost.id == f"training_boost_{int(at.timestamp() * 1000)}"
        assert boost.magnitude == 5
        assert boost.duration == 7200

    def test_no_training_when_not_operational(self) -> None:
        """Test a bot without energy does not train."""
        state = NonWorkerBotState(energy_level=0)

        after, report = state.train()

        assert report.success is False
        assert after is state
