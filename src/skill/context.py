"""Per-request handler context."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ask_sdk_core.response_helper import ResponseFactory

from src.i18n.translator import LanguageResolution, Translator
from src.skill.response import new_response_builder
from src.skill.schema import RequestType, SkillRequest


class TranslatorUnavailableError(RuntimeError):
    """Raised when a handler translates before the localization interceptor ran."""


@dataclass
class HandlerContext:
    """Scratch space for one request.

    Created fresh by the skill for every invocation and dropped afterwards. The localization
    interceptor fills `language`, `resolution` and `translator`.
    """

    request: SkillRequest
    language: str | None = None
    resolution: LanguageResolution | None = None
    translator: Translator | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    @property
    def response_builder(self) -> ResponseFactory:
        """A new builder; handlers build exactly one response each."""

        return new_response_builder()

    @property
    def requested_language(self) -> str | None:
        """The language the request asked for, before any locale fallback."""

        if self.resolution is not None:
            return self.resolution.requested
        return self.language

    def t(self, key: str, *args: object) -> str:
        """Translate `key` with the request's translator."""

        if self.translator is None:
            raise TranslatorUnavailableError("no translator attached to the request context")
        return self.translator(key, *args)

    def is_request_type(self, request_type: RequestType) -> bool:
        return self.request.request_type == request_type

    def is_intent_name(self, *names: str) -> bool:
        return (
                self.request.request_type == RequestType.IntentRequest
                and self.request.intent_name in names
        )
