"""Structured logging for the Botking entity layer.

Every log line is a structlog event carrying the application name, the log
level and an ISO timestamp. Development output is rendered for the console;
``json_format=True`` switches to one JSON object per line.

Validation and factory code log through ``get_logger(__name__)``. Context
bound with ``bind_context`` or the ``entity_context`` block is merged into
every event emitted while it is active.

Example:
    >>> from botking.core.logging import entity_context, get_logger
    >>> logger = get_logger(__name__)
    >>> with entity_context(entity="KING bot"):
    ...     logger.debug("Shape validation failed", violations=2)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger


APP_NAME = "botking"
"""Value of the ``app`` key on every event."""


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Stamp the application name on an event unless it already has one."""
    event_dict.setdefault("app", APP_NAME)
    return event_dict


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def build_processors(*, json_format: bool) -> list[Processor]:
    """Build the structlog processor chain.

    Args:
        json_format: Render JSON lines instead of console output.

    Returns:
        The processors, renderer last.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        structlog.processors.StackInfoRenderer(),
    ]
    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(exception_formatter=structlog.dev.plain_traceback)
        )
    return processors


def configure_logging(
    *,
    level: str | int = "INFO",
    json_format: bool = False,
) -> None:
    """Configure structlog and the standard library root logger.

    Unknown level names fall back to INFO.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL) or number.
        json_format: Emit JSON lines for log collectors.
    """
    log_level = _resolve_level(level)

    structlog.configure(
        processors=build_processors(json_format=json_format),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Storage drivers and other collaborators log through the stdlib
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=log_level,
        stream=sys.stdout,
        force=True,
    )


def configure_logging_from_settings() -> None:
    """Configure logging from ``Settings.log_level`` and ``Settings.log_json``."""
    from botking.core.config import get_settings

    settings = get_settings()
    configure_logging(level=settings.log_level, json_format=settings.log_json)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, typically with ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind values onto every subsequent event of the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop every bound context value."""
    structlog.contextvars.clear_contextvars()


@contextmanager
def entity_context(**kwargs: Any) -> Iterator[None]:
    """Bind values for the duration of a block, restoring the previous ones after.

    Args:
        **kwargs: Values such as ``entity`` or ``bot_id``.
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield


__all__ = [
    "APP_NAME",
    "add_app_context",
    "build_processors",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
    "entity_context",
]
