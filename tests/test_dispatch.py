"""Tests for the handler registry, dispatcher, and skill invocation order."""

from __future__ import annotations

import logging

from src.i18n.translator import resolve_translator
from src.skill.context import HandlerContext
from src.skill.dispatch import HandlerRegistry, Skill, dispatch
from src.skill.handlers import (
    GENERIC_ERROR_SPEECH,
    CatchAllErrorHandler,
    ConvertUnitsIntentHandler,
    FallbackIntentHandler,
    IntentReflectorHandler,
)
from src.skill.response import build_response, new_response_builder
from src.skill.schema import RequestType, SkillRequest, SkillResponse


class _StaticHandler:
    def __init__(self, name: str, *, matches: bool = True) -> None:
        self.name = name
        self.matches = matches
        self.calls = 0

    def can_handle(self, context: HandlerContext) -> bool:
        return self.matches

    def handle(self, context: HandlerContext) -> SkillResponse:
        self.calls += 1
        return build_response(new_response_builder().speak(self.name))


class _RaisingHandler:
    def __init__(self, *, in_predicate: bool = False) -> None:
        self.in_predicate = in_predicate

    def can_handle(self, context: HandlerContext) -> bool:
        if self.in_predicate:
            raise RuntimeError("predicate boom")
        return True

    def handle(self, context: HandlerContext) -> SkillResponse:
        raise RuntimeError("action boom")


def _convert_request() -> SkillRequest:
    return SkillRequest(
        request_type=RequestType.IntentRequest,
        intent_name="ConvertUnitsIntent",
        locale="en-US",
        slots={"cantidad": "10", "unidadOrigen": "yards", "unidadDestino": "feet"},
    )


def _context(request: SkillRequest) -> HandlerContext:
    return HandlerContext(request=request, language="en", translator=resolve_translator("en"))


def test_registry_returns_first_match_in_order() -> None:
    first = _StaticHandler("first")
    second = _StaticHandler("second")
    registry = HandlerRegistry([_StaticHandler("skip", matches=False), first, second])

    assert len(registry) == 3
    assert registry.find(_context(_convert_request())) is first


def test_dispatch_invokes_only_first_matching_handler(events) -> None:
    first = _StaticHandler("first")
    second = _StaticHandler("second")
    request = _convert_request()

    response = dispatch(
        request,
        _context(request),
        HandlerRegistry([first, second]),
        FallbackIntentHandler(),
        CatchAllErrorHandler(),
        events=events,
    )

    assert response.speech_text == "first"
    assert (first.calls, second.calls) == (1, 0)
    assert events.names() == ["handled"]


def test_specific_handler_registered_after_reflector_is_unreachable(events) -> None:
    request = _convert_request()

    in_order = dispatch(
        request,
        _context(request),
        HandlerRegistry([ConvertUnitsIntentHandler(), IntentReflectorHandler()]),
        FallbackIntentHandler(),
        CatchAllErrorHandler(),
        events=events,
    )
    reversed_order = dispatch(
        request,
        _context(request),
        HandlerRegistry([IntentReflectorHandler(), ConvertUnitsIntentHandler()]),
        FallbackIntentHandler(),
        CatchAllErrorHandler(),
        events=events,
    )

    assert in_order.speech_text == "The conversion from 10 yards to feet is 30.00 feet."
    assert reversed_order.speech_text == "You just triggered ConvertUnitsIntent."


def test_unmatched_request_goes_to_fallback_handler(events) -> None:
    request = SkillRequest(request_type=RequestType.LaunchRequest, locale="en-US")

    response = dispatch(
        request,
        _context(request),
        HandlerRegistry([_StaticHandler("never", matches=False)]),
        FallbackIntentHandler(),
        CatchAllErrorHandler(),
        events=events,
    )

    assert response.speech_text.startswith("Sorry, I didn't understand that.")
    assert response.should_end_session is False
    assert events.names() == ["unmatched_request", "handled"]
    assert events.events[0].level == logging.WARNING


def test_error_in_action_goes_to_error_handler(events) -> None:
    request = _convert_request()

    response = dispatch(
        request,
        _context(request),
        HandlerRegistry([_RaisingHandler(), _StaticHandler("later")]),
        FallbackIntentHandler(),
        CatchAllErrorHandler(),
        events=events,
    )

    assert response.speech_text == GENERIC_ERROR_SPEECH
    assert response.reprompt_text == GENERIC_ERROR_SPEECH
    assert response.should_end_session is False
    assert events.names() == ["handler_failed"]
    assert isinstance(events.events[0].exc_info, RuntimeError)


def test_error_in_predicate_goes_to_error_handler(events) -> None:
    later = _StaticHandler("later")
    request = _convert_request()

    response = dispatch(
        request,
        _context(request),
        HandlerRegistry([_RaisingHandler(in_predicate=True), later]),
        FallbackIntentHandler(),
        CatchAllErrorHandler(),
        events=events,
    )

    assert response.speech_text == GENERIC_ERROR_SPEECH
    assert later.calls == 0


def test_error_in_fallback_handler_goes_to_error_handler(events) -> None:
    request = _convert_request()

    response = dispatch(
        request,
        _context(request),
        HandlerRegistry([]),
        _RaisingHandler(),
        CatchAllErrorHandler(),
        events=events,
    )

    assert response.speech_text == GENERIC_ERROR_SPEECH


class _RecordingInterceptor:
    def __init__(self, log: list[str], name: str) -> None:
        self.log = log
        self.name = name

    def process(self, context: HandlerContext, response: SkillResponse | None = None) -> None:
        self.log.append(self.name)


class _FailingInterceptor:
    def process(self, context: HandlerContext) -> None:
        raise RuntimeError("interceptor boom")


def test_skill_runs_interceptors_around_dispatch(events) -> None:
    calls: list[str] = []
    handler = _StaticHandler("handled")
    skill = Skill(
        handlers=[handler],
        fallback_handler=FallbackIntentHandler(),
        error_handler=CatchAllErrorHandler(),
        request_interceptors=[_RecordingInterceptor(calls, "before")],
        response_interceptors=[_RecordingInterceptor(calls, "after")],
        events=events,
    )

    response = skill.invoke(SkillRequest(request_type=RequestType.LaunchRequest, locale="en-US"))

    assert response.speech_text == "handled"
    assert calls == ["before", "after"]


def test_request_interceptor_failure_skips_dispatch(events) -> None:
    calls: list[str] = []
    handler = _StaticHandler("handled")
    skill = Skill(
        handlers=[handler],
        fallback_handler=FallbackIntentHandler(),
        error_handler=CatchAllErrorHandler(),
        request_interceptors=[_FailingInterceptor()],
        response_interceptors=[_RecordingInterceptor(calls, "after")],
        events=events,
    )

    response = skill.invoke(SkillRequest(request_type=RequestType.LaunchRequest))

    assert response.speech_text == GENERIC_ERROR_SPEECH
    assert handler.calls == 0
    assert calls == ["after"]
    assert events.names() == ["request_interceptor_failed"]


def test_each_invocation_gets_a_fresh_context(events) -> None:
    seen: list[HandlerContext] = []

    class _CapturingHandler(_StaticHandler):
        def handle(self, context: HandlerContext) -> SkillResponse:
            context.attributes["touched"] = True
            seen.append(context)
            return super().handle(context)

    skill = Skill(
        handlers=[_CapturingHandler("x")],
        fallback_handler=FallbackIntentHandler(),
        error_handler=CatchAllErrorHandler(),
        events=events,
    )
    request = SkillRequest(request_type=RequestType.LaunchRequest)

    skill.invoke(request)
    skill.invoke(request)

    assert len(seen) == 2
    assert seen[0] is not seen[1]


class _FailingResponseInterceptor:
    def process(self, context: HandlerContext, response: SkillResponse) -> None:
        raise RuntimeError("response interceptor boom")


def test_response_interceptor_failure_keeps_response(events) -> None:
    calls: list[str] = []
    skill = Skill(
        handlers=[_StaticHandler("handled")],
        fallback_handler=FallbackIntentHandler(),
        error_handler=CatchAllErrorHandler(),
        response_interceptors=[_FailingResponseInterceptor(), _RecordingInterceptor(calls, "after")],
        events=events,
    )

    response = skill.invoke(SkillRequest(request_type=RequestType.LaunchRequest))

    assert response.speech_text == "handled"
    assert calls == ["after"]
    assert events.names() == ["handled", "response_interceptor_failed"]
