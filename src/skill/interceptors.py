"""Request and response interceptors."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from src.config.logging import EventLogger, LoggingEventLogger, SkillEvent
from src.i18n.resources import DEFAULT_LANGUAGE, LANGUAGE_STRINGS
from src.i18n.translator import resolve_language, resolve_translator
from src.skill.context import HandlerContext
from src.skill.schema import SkillResponse


class LocalizationInterceptor:
    """Resolve the request locale and attach a translator to the context.

    A locale whose language has no message table falls back to the default language. The fallback
    is logged as a `locale_fallback` event and recorded on `context.resolution`.
    """

    def __init__(
            self,
            *,
            default_language: str = DEFAULT_LANGUAGE,
            resources: Mapping[str, Mapping[str, str]] = LANGUAGE_STRINGS,
            events: EventLogger | None = None,
    ) -> None:
        self._default_language = default_language
        self._resources = resources
        self._events = events or LoggingEventLogger()

    def process(self, context: HandlerContext) -> None:
        resolution = resolve_language(
            context.request.locale,
            self._resources,
            default=self._default_language,
        )
        if resolution.fell_back:
            self._events.log(
                SkillEvent(
                    name="locale_fallback",
                    level=logging.WARNING,
                    fields={
                        "locale": resolution.locale,
                        "requested": resolution.requested,
                        "resolved": resolution.language,
                    },
                )
            )

        context.resolution = resolution
        context.language = resolution.language
        context.translator = resolve_translator(
            resolution.language,
            self._resources,
            default=self._default_language,
        )


class LoggingRequestInterceptor:
    """Log every incoming request."""

    def __init__(self, events: EventLogger | None = None) -> None:
        self._events = events or LoggingEventLogger()

    def process(self, context: HandlerContext) -> None:
        self._events.log(
            SkillEvent(
                name="incoming_request",
                fields={"request": context.request.model_dump_json(exclude_none=True)},
            )
        )


class LoggingResponseInterceptor:
    """Log every outgoing response."""

    def __init__(self, events: EventLogger | None = None) -> None:
        self._events = events or LoggingEventLogger()

    def process(self, context: HandlerContext, response: SkillResponse) -> None:
        self._events.log(
            SkillEvent(
                name="outgoing_response",
                fields={"response": response.model_dump_json(exclude_none=True)},
            )
        )
