"""Logging configuration and the event logger used by the skill core."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Protocol


def configure_logging(level: str | None = None) -> None:
    """Configure Python logging for the process.

    Logs are internal diagnostics only; nothing logged here is ever spoken back to the user.
    """

    log_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@dataclass(frozen=True)
class SkillEvent:
    """A structured log event emitted by the dispatch core."""

    name: str
    level: int = logging.INFO
    fields: dict[str, Any] = field(default_factory=dict)
    exc_info: BaseException | None = None


class EventLogger(Protocol):
    """Sink for skill events."""

    def log(self, event: SkillEvent) -> None: ...


class LoggingEventLogger:
    """Write skill events to a stdlib logger as `name key=value ...` lines."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("src.skill.events")

    def log(self, event: SkillEvent) -> None:
        parts = [event.name, *(f"{key}={value}" for key, value in event.fields.items())]
        self._logger.log(event.level, " ".join(parts), exc_info=event.exc_info)
