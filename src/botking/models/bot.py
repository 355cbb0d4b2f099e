"""Bot entities and the factory that selects a role variant from a record.

A bot is one of five mutually exclusive roles (worker, government bot,
king, playable, rogue) or, when its role tag is not recognized, the base
entity. Each role constructor normalizes the incoming record by clearing
the fields that role may never carry and stamping its own role tag.

Construction never raises. Whether the record is acceptable is decided by
validation, which every bot exposes in three forms:

- ``check(...)`` returns a structured ValidationResult.
- ``validate()``, ``validate_creation()``, ``validate_update()`` return bool.
- ``ensure_valid_creation()``, ``ensure_valid_update()`` raise
  EntityValidationError.

Example:
    >>> bot = create_bot({"botType": "WORKER", "name": "Digger",
    ...                   "skeletonId": "sk-1", "stateId": "st-1",
    ...                   "utilitySpec": "MINING", "combatRole": "TANK"})
    >>> isinstance(bot, WorkerBot), bot.combat_role
    (True, None)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from botking.core.logging import get_logger
from botking.models.enums import BotType
from botking.models.records import BotRecord
from botking.models.roles import normalize_bot_record


if TYPE_CHECKING:
    from typing import TypeAlias

    from botking.validation.engine import ValidationEngine
    from botking.validation.result import Operation, ValidationResult

    BotSource: TypeAlias = Mapping[str, Any] | BotRecord | Bot


logger = get_logger(__name__)


def _record_from(source: BotSource) -> BotRecord:
    if isinstance(source, Bot):
        return source.record
    if isinstance(source, BotRecord):
        return source
    return BotRecord.from_mapping(source)


def _resolve_engine(engine: ValidationEngine | None) -> ValidationEngine:
    # Imported lazily: the validation package depends on the models package.
    from botking.validation.engine import get_default_engine

    return engine if engine is not None else get_default_engine()


# =============================================================================
# Base Entity
# =============================================================================


class Bot:
    """Base bot entity.

    The base entity applies no normalization and carries the record as
    given. The factory returns it for records whose role tag is not one of
    the five known roles; validation then rejects the tag.

    Attributes:
        role: Role handled by this class, or None for the base entity.
    """

    role: ClassVar[BotType | None] = None

    def __init__(self, source: BotSource) -> None:
        """Initialize from a raw record, a BotRecord or another bot.

        Args:
            source: The record to construct from. It is never mutated.
        """
        record = _record_from(source)
        if self.role is not None:
            record = normalize_bot_record(self.role, record)
        self._record = record

    # -------------------------------------------------------------------------
    # Field access
    # -------------------------------------------------------------------------

    @property
    def record(self) -> BotRecord:
        """Copy of the underlying record."""
        return self._record.with_values()

    @property
    def id(self) -> Any:
        """Unique bot identifier."""
        return self._record.id

    @property
    def user_id(self) -> Any:
        """Owning user; always None for GovBots."""
        return self._record.user_id

    @property
    def soul_chip_id(self) -> Any:
        """Soul chip reference; always None for Workers."""
        return self._record.soul_chip_id

    @property
    def skeleton_id(self) -> Any:
        """Skeleton part reference."""
        return self._record.skeleton_id

    @property
    def state_id(self) -> Any:
        """Runtime state reference."""
        return self._record.state_id

    @property
    def name(self) -> Any:
        """Display name."""
        return self._record.name

    @property
    def bot_type(self) -> Any:
        """Role tag as stored; the base entity may hold an unknown value."""
        return self._record.bot_type

    @property
    def combat_role(self) -> Any:
        """Combat role; always None for Workers."""
        return self._record.combat_role

    @property
    def utility_spec(self) -> Any:
        """Utility specialization; required for Workers."""
        return self._record.utility_spec

    @property
    def government_type(self) -> Any:
        """Government type; required for GovBots and always None for Workers."""
        return self._record.government_type

    @property
    def description(self) -> Any:
        """Free-text description."""
        return self._record.description

    @property
    def created_at(self) -> Any:
        """Creation timestamp."""
        return self._record.created_at

    @property
    def updated_at(self) -> Any:
        """Last update timestamp."""
        return self._record.updated_at

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def to_record(self) -> dict[str, Any]:
        """Convert to a camelCase record for storage or validation."""
        return self._record.to_mapping()

    def clone(self) -> Bot:
        """Create an independent copy of this bot with the same class."""
        return type(self)(self)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def check(
        self,
        operation: Operation | str = "create",
        *,
        engine: ValidationEngine | None = None,
    ) -> ValidationResult:
        """Validate this bot and return the structured result.

        Args:
            operation: "create" or "update"; update also requires an id.
            engine: Engine to use; defaults to one built from settings.

        Returns:
            The validation result. Never raises for invalid data.
        """
        return _resolve_engine(engine).validate_bot(
            self.to_record(),
            bot_type=self.role,
            operation=operation,
        )

    def validate(self, *, engine: ValidationEngine | None = None) -> bool:
        """Check the bot against the creation rules."""
        return self.check("create", engine=engine).success

    def validate_creation(self, *, engine: ValidationEngine | None = None) -> bool:
        """Check that the bot may be created."""
        return self.check("create", engine=engine).success

    def validate_update(self, *, engine: ValidationEngine | None = None) -> bool:
        """Check that the bot may be updated; requires a non-empty id."""
        return self.check("update", engine=engine).success

    def ensure_valid_creation(self, *, engine: ValidationEngine | None = None) -> None:
        """Raise EntityValidationError unless the bot may be created."""
        self.check("create", engine=engine).raise_for_errors(entity=self._label)

    def ensure_valid_update(self, *, engine: ValidationEngine | None = None) -> None:
        """Raise EntityValidationError unless the bot may be updated."""
        self.check("update", engine=engine).raise_for_errors(entity=self._label)

    @property
    def _label(self) -> str:
        return f"{self.role} bot" if self.role is not None else "bot"

    # -------------------------------------------------------------------------
    # Dunder methods
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bot):
            return NotImplemented
        return type(self) is type(other) and self._record == other._record

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self.id!r}, name={self.name!r}, "
            f"bot_type={self.bot_type!r})"
        )


# =============================================================================
# Role Variants
# =============================================================================


class WorkerBot(Bot):
    """Labor bot: carries a utility specialization, never a soul chip or combat role."""

    role = BotType.WORKER


class GovBot(Bot):
    """Government bot: never user-owned, always assigned a government branch."""

    role = BotType.GOVBOT


class KingBot(Bot):
    """Royal bot: requires a soul chip and a combat role."""

    role = BotType.KING


class PlayableBot(Bot):
    """Player-controlled bot: requires an owning user, a soul chip and a combat role."""

    role = BotType.PLAYABLE


class RogueBot(Bot):
    """Unaffiliated combat bot; the soul chip is optional."""

    role = BotType.ROGUE


BOT_CLASSES: Mapping[BotType, type[Bot]] = {
    cls.role: cls
    for cls in (WorkerBot, GovBot, KingBot, PlayableBot, RogueBot)
}
"""Role tag to entity class."""


# =============================================================================
# Factory Functions
# =============================================================================


def create_bot(source: BotSource) -> Bot:
    """Create the bot variant matching a record's role tag.

    Unrecognized tags (unknown strings, None, non-string values) produce
    the base entity with every field preserved. Passing an existing bot
    behaves exactly like passing its record, so
    ``create_bot(create_bot(x)) == create_bot(x)``.

    Args:
        source: Raw mapping, BotRecord or bot entity.

    Returns:
        The constructed bot.

    Example:
        >>> create_bot({"botType": "GOVBOT", "userId": "u-1"}).user_id is None
        True
    """
    record = _record_from(source)
    bot_type = BotType.parse(record.bot_type)
    if bot_type is None:
        logger.debug("Unrecognized bot type, using base entity", bot_type=record.bot_type)
        return Bot(record)
    return BOT_CLASSES[bot_type](record)


__all__ = [
    "Bot",
    "WorkerBot",
    "GovBot",
    "KingBot",
    "PlayableBot",
    "RogueBot",
    "BOT_CLASSES",
    "create_bot",
]
