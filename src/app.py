"""Application composition root.

This module wires together configuration, the event logger, and the skill's handlers and
interceptors.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.config.logging import EventLogger, LoggingEventLogger
from src.config.settings import Settings
from src.skill.dispatch import Skill
from src.skill.handlers import CatchAllErrorHandler, FallbackIntentHandler, default_handlers
from src.skill.interceptors import (
    LocalizationInterceptor,
    LoggingRequestInterceptor,
    LoggingResponseInterceptor,
)


@dataclass(frozen=True)
class App:
    """Shared application dependencies."""

    settings: Settings
    skill: Skill


def create_skill(settings: Settings, events: EventLogger | None = None) -> Skill:
    """Build the unit converter skill.

    The localization interceptor runs before request logging so every handler can translate.
    """

    events = events or LoggingEventLogger()
    return Skill(
        handlers=default_handlers(events),
        fallback_handler=FallbackIntentHandler(),
        error_handler=CatchAllErrorHandler(),
        request_interceptors=(
            LocalizationInterceptor(default_language=settings.default_language, events=events),
            LoggingRequestInterceptor(events),
        ),
        response_interceptors=(LoggingResponseInterceptor(events),),
        events=events,
    )


def create_app(settings: Settings, events: EventLogger | None = None) -> App:
    """Create the application container."""

    return App(settings=settings, skill=create_skill(settings, events))
