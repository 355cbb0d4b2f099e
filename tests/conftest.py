"""Pytest configuration and shared fixtures.

This module provides common fixtures for the Botking test suite: settings
cache isolation, a validation engine, and sample bot and state records for
every role.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Callable, Generator

    from botking.validation.engine import ValidationEngine


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from botking.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "BOTKING_DEBUG": "true",
        "BOTKING_LOG_LEVEL": "DEBUG",
        "BOTKING_VALIDATION_NAME_MAX_LENGTH": "20",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def engine() -> ValidationEngine:
    """Provide a validation engine with default limits."""
    from botking.core.config import ValidationSettings
    from botking.validation import RuleProvider, ValidationEngine

    return ValidationEngine(RuleProvider(ValidationSettings()))


# =============================================================================
# Bot Record Fixtures
# =============================================================================


@pytest.fixture
def base_bot_record() -> dict[str, Any]:
    """Provide the fields every bot record carries.

    Returns:
        camelCase bot record without role-specific fields.
    """
    return {
        "id": "bot-1",
        "userId": None,
        "soulChipId": None,
        "skeletonId": "skeleton-1",
        "stateId": "state-1",
        "name": "Test Bot",
        "botType": None,
        "combatRole": None,
        "utilitySpec": None,
        "governmentType": None,
        "description": "A bot used in tests",
    }


@pytest.fixture
def worker_record(base_bot_record: dict[str, Any]) -> dict[str, Any]:
    """Provide a valid worker bot record."""
    return {
        **base_bot_record,
        "name": "Digger",
        "botType": "WORKER",
        "utilitySpec": "MINING",
    }


@pytest.fixture
def govbot_record(base_bot_record: dict[str, Any]) -> dict[str, Any]:
    """Provide a valid government bot record."""
    return {
        **base_bot_record,
        "name": "Warden",
        "botType": "GOVBOT",
        "soulChipId": "soul-1",
        "combatRole": "TANK",
        "governmentType": "SECURITY",
    }


@pytest.fixture
def king_record(base_bot_record: dict[str, Any]) -> dict[str, Any]:
    """Provide a valid king bot record."""
    return {
        **base_bot_record,
        "name": "Sovereign",
        "botType": "KING",
        "soulChipId": "soul-2",
        "combatRole": "ASSAULT",
    }


@pytest.fixture
def playable_record(base_bot_record: dict[str, Any]) -> dict[str, Any]:
    """Provide a valid playable bot record."""
    return {
        **base_bot_record,
        "name": "Vex",
        "botType": "PLAYABLE",
        "userId": "user-1",
        "soulChipId": "soul-3",
        "combatRole": "SNIPER",
    }


@pytest.fixture
def rogue_record(base_bot_record: dict[str, Any]) -> dict[str, Any]:
    """Provide a valid rogue bot record (no soul chip)."""
    return {
        **base_bot_record,
        "name": "Scrap",
        "botType": "ROGUE",
        "combatRole": "SCOUT",
    }


@pytest.fixture
def role_records(
    worker_record: dict[str, Any],
    govbot_record: dict[str, Any],
    king_record: dict[str, Any],
    playable_record: dict[str, Any],
    rogue_record: dict[str, Any],
) -> dict[str, dict[str, Any]]:
    """Provide a valid record for every role, keyed by role tag."""
    return {
        "WORKER": worker_record,
        "GOVBOT": govbot_record,
        "KING": king_record,
        "PLAYABLE": playable_record,
        "ROGUE": rogue_record,
    }


# =============================================================================
# Bot State Fixtures
# =============================================================================


@pytest.fixture
def worker_state_payload() -> dict[str, Any]:
    """Provide a valid worker state payload."""
    return {
        "id": "state-1",
        "stateType": "worker",
        "energyLevel": 80,
        "maintenanceLevel": 90,
        "experience": 120,
        "currentLocation": "STORAGE",
        "statusEffects": [],
        "customizations": {"paint": "yellow"},
    }


@pytest.fixture
def non_worker_state_payload() -> dict[str, Any]:
    """Provide a valid non-worker state payload."""
    return {
        "id": "state-2",
        "stateType": "non-worker",
        "energyLevel": 75,
        "maintenanceLevel": 60,
        "experience": 2500,
        "currentLocation": "TRAINING",
        "bondLevel": 40,
        "battlesWon": 10,
        "battlesLost": 5,
        "totalBattles": 15,
    }


@pytest.fixture
def make_state_payload(
    non_worker_state_payload: dict[str, Any],
) -> Callable[..., dict[str, Any]]:
    """Provide a builder for non-worker payloads with overrides."""

    def _make(**overrides: Any) -> dict[str, Any]:
        return {**non_worker_state_payload, **overrides}

    return _make
