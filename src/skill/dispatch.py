"""Handler registry and dispatcher.

Hard contract: every request produces exactly one response. The first handler (in registration
order) whose `can_handle` is true handles the request; unmatched requests go to the fallback
handler; any exception is handed once to the error handler, never retried.

Registration order precondition: specific intent handlers must be registered before catch-all
handlers (such as a handler for any IntentRequest). Nothing reorders handlers; a specific handler
registered after a catch-all is never reached.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Protocol

from src.config.logging import EventLogger, LoggingEventLogger, SkillEvent
from src.skill.context import HandlerContext
from src.skill.schema import SkillRequest, SkillResponse


class RequestHandler(Protocol):
    """A predicate/action pair."""

    def can_handle(self, context: HandlerContext) -> bool: ...

    def handle(self, context: HandlerContext) -> SkillResponse: ...


class ErrorHandler(Protocol):
    """Turns an exception raised during handling into a response."""

    def handle(self, context: HandlerContext, error: Exception) -> SkillResponse: ...


class RequestInterceptor(Protocol):
    """A hook run before dispatch; may fill the context."""

    def process(self, context: HandlerContext) -> None: ...


class ResponseInterceptor(Protocol):
    """A hook run on the final response; must not replace it."""

    def process(self, context: HandlerContext, response: SkillResponse) -> None: ...


class HandlerRegistry:
    """An immutable, ordered collection of request handlers."""

    def __init__(self, handlers: Iterable[RequestHandler]) -> None:
        self._handlers: tuple[RequestHandler, ...] = tuple(handlers)

    def __iter__(self) -> Iterator[RequestHandler]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def find(self, context: HandlerContext) -> RequestHandler | None:
        """Return the first handler whose predicate matches, or `None`."""

        for handler in self._handlers:
            if handler.can_handle(context):
                return handler
        return None


def _handler_name(handler: object) -> str:
    return type(handler).__name__


def dispatch(
        request: SkillRequest,
        context: HandlerContext,
        registry: HandlerRegistry,
        fallback_handler: RequestHandler,
        error_handler: ErrorHandler,
        *,
        events: EventLogger | None = None,
) -> SkillResponse:
    """Dispatch `request` to the first matching handler in `registry`.

    Requests no handler matches are answered by `fallback_handler`. Any exception raised by a
    predicate or an action is caught here and answered by `error_handler`.
    """

    events = events or LoggingEventLogger()

    # Dispatch boundary: any error must still produce a spoken response.
    try:
        handler = registry.find(context)
        if handler is None:
            events.log(
                SkillEvent(
                    name="unmatched_request",
                    level=logging.WARNING,
                    fields={
                        "request_type": request.request_type,
                        "intent": request.intent_name,
                        "fallback": _handler_name(fallback_handler),
                    },
                )
            )
            handler = fallback_handler

        response = handler.handle(context)
        events.log(
            SkillEvent(
                name="handled",
                fields={"request_type": request.request_type, "handler": _handler_name(handler)},
            )
        )
        return response
    except Exception as exc:
        events.log(
            SkillEvent(
                name="handler_failed",
                level=logging.ERROR,
                fields={"request_type": request.request_type, "error": type(exc).__name__},
                exc_info=exc,
            )
        )
        return error_handler.handle(context, exc)


class Skill:
    """A configured skill: handlers, fallback, error handler, and interceptors."""

    def __init__(
            self,
            *,
            handlers: Sequence[RequestHandler],
            fallback_handler: RequestHandler,
            error_handler: ErrorHandler,
            request_interceptors: Sequence[RequestInterceptor] = (),
            response_interceptors: Sequence[ResponseInterceptor] = (),
            events: EventLogger | None = None,
    ) -> None:
        self.registry = HandlerRegistry(handlers)
        self.fallback_handler = fallback_handler
        self.error_handler = error_handler
        self.request_interceptors = tuple(request_interceptors)
        self.response_interceptors = tuple(response_interceptors)
        self.events = events or LoggingEventLogger()

    def invoke(self, request: SkillRequest) -> SkillResponse:
        """Handle one request end to end and return its single response.

        Request interceptors run before dispatch; an error raised by one of them goes to the error
        handler and skips dispatch. Response interceptors always run on the final response; one that
        raises is logged and the response is still returned.
        """

        context = HandlerContext(request=request)

        try:
            for interceptor in self.request_interceptors:
                interceptor.process(context)
        except Exception as exc:
            self.events.log(
                SkillEvent(
                    name="request_interceptor_failed",
                    level=logging.ERROR,
                    fields={"interceptor": _handler_name(interceptor), "error": type(exc).__name__},
                    exc_info=exc,
                )
            )
            response = self.error_handler.handle(context, exc)
        else:
            response = dispatch(
                request,
                context,
                self.registry,
                self.fallback_handler,
                self.error_handler,
                events=self.events,
            )

        for response_interceptor in self.response_interceptors:
            # Response interceptors observe the response; a failing one is logged and skipped.
            try:
                response_interceptor.process(context, response)
            except Exception as exc:
                self.events.log(
                    SkillEvent(
                        name="response_interceptor_failed",
                        level=logging.ERROR,
                        fields={
                            "interceptor": _handler_name(response_interceptor),
                            "error": type(exc).__name__,
                        },
                        exc_info=exc,
                    )
                )
        return response
