"""Request handlers for the unit converter skill.

`default_handlers()` returns the handlers in registration order: specific intents first, the
`IntentReflectorHandler` catch-all last.
"""

from __future__ import annotations

import logging

from src.config.logging import EventLogger, LoggingEventLogger, SkillEvent
from src.conversion.convert import ConversionError, convert, parse_amount
from src.i18n.resources import MessageKey
from src.skill.context import HandlerContext
from src.skill.dispatch import RequestHandler
from src.skill.response import build_response, new_response_builder
from src.skill.schema import RequestType, SkillResponse

CONVERT_UNITS_INTENT = "ConvertUnitsIntent"
HELLO_WORLD_INTENT = "HelloWorldIntent"
HELP_INTENT = "AMAZON.HelpIntent"
CANCEL_INTENT = "AMAZON.CancelIntent"
STOP_INTENT = "AMAZON.StopIntent"
FALLBACK_INTENT = "AMAZON.FallbackIntent"

AMOUNT_SLOT = "cantidad"
SOURCE_UNIT_SLOT = "unidadOrigen"
TARGET_UNIT_SLOT = "unidadDestino"

GENERIC_ERROR_SPEECH = "Sorry, I had trouble doing what you asked. Please try again."

logger = logging.getLogger(__name__)


class LaunchRequestHandler:
    """Welcome the user and keep the session open."""

    def can_handle(self, context: HandlerContext) -> bool:
        return context.is_request_type(RequestType.LaunchRequest)

    def handle(self, context: HandlerContext) -> SkillResponse:
        speech = context.t(MessageKey.WELCOME_MESSAGE)
        return build_response(context.response_builder.speak(speech).ask(speech))


class ConvertUnitsIntentHandler:
    """Convert an amount between two units of the request's language.

    The rate is looked up with the language the locale asked for, not the fallback language used
    for messages, so a locale without a table (`fr-FR`) converts nothing. Unknown units, unknown
    pairs, and a missing, non-numeric or out-of-range amount all answer with the localized
    ERROR_MESSAGE.
    """

    def can_handle(self, context: HandlerContext) -> bool:
        return context.is_intent_name(CONVERT_UNITS_INTENT)

    def handle(self, context: HandlerContext) -> SkillResponse:
        request = context.request
        amount_text = request.slot_value(AMOUNT_SLOT)
        source_unit = request.slot_value(SOURCE_UNIT_SLOT)
        target_unit = request.slot_value(TARGET_UNIT_SLOT)

        try:
            if source_unit is None or target_unit is None:
                raise ConversionError("source or target unit slot is missing")
            amount = parse_amount(amount_text)
            result = convert(
                amount,
                source_unit,
                target_unit,
                language=context.requested_language or "",
            )
        except ConversionError as exc:
            logger.info("conversion unsupported reason=%s", exc)
            speech = context.t(MessageKey.ERROR_MESSAGE)
            return build_response(context.response_builder.speak(speech))

        speech = context.t(
            MessageKey.CONVERT_MESSAGE,
            (amount_text or "").strip(),
            result.source_unit,
            result.target_unit,
            result.converted_text,
            result.target_unit,
        )
        return build_response(context.response_builder.speak(speech))


class HelloWorldIntentHandler:
    """Say hello."""

    def can_handle(self, context: HandlerContext) -> bool:
        return context.is_intent_name(HELLO_WORLD_INTENT)

    def handle(self, context: HandlerContext) -> SkillResponse:
        return build_response(context.response_builder.speak(context.t(MessageKey.HELLO_MESSAGE)))


class HelpIntentHandler:
    """Explain which units can be converted and keep the session open."""

    def can_handle(self, context: HandlerContext) -> bool:
        return context.is_intent_name(HELP_INTENT)

    def handle(self, context: HandlerContext) -> SkillResponse:
        speech = context.t(MessageKey.HELP_MESSAGE)
        return build_response(context.response_builder.speak(speech).ask(speech))


class CancelAndStopIntentHandler:
    """Say goodbye and end the session."""

    def can_handle(self, context: HandlerContext) -> bool:
        return context.is_intent_name(CANCEL_INTENT, STOP_INTENT)

    def handle(self, context: HandlerContext) -> SkillResponse:
        return build_response(context.response_builder.speak(context.t(MessageKey.GOODBYE_MESSAGE)))


class FallbackIntentHandler:
    """Answer the platform's fallback intent; also answers requests no handler matched."""

    def can_handle(self, context: HandlerContext) -> bool:
        return context.is_intent_name(FALLBACK_INTENT)

    def handle(self, context: HandlerContext) -> SkillResponse:
        speech = context.t(MessageKey.FALLBACK_MESSAGE)
        return build_response(context.response_builder.speak(speech).ask(speech))


class SessionEndedRequestHandler:
    """Log why the session ended and answer with an empty response."""

    def __init__(self, events: EventLogger | None = None) -> None:
        self._events = events or LoggingEventLogger()

    def can_handle(self, context: HandlerContext) -> bool:
        return context.is_request_type(RequestType.SessionEndedRequest)

    def handle(self, context: HandlerContext) -> SkillResponse:
        self._events.log(
            SkillEvent(
                name="session_ended",
                fields={"reason": context.request.reason, "locale": context.request.locale},
            )
        )
        # Nothing to clean up; an empty response ends the session.
        return build_response(context.response_builder)


class IntentReflectorHandler:
    """Echo back the name of any intent. Must be registered after every specific intent handler."""

    def can_handle(self, context: HandlerContext) -> bool:
        return context.is_request_type(RequestType.IntentRequest)

    def handle(self, context: HandlerContext) -> SkillResponse:
        speech = context.t(MessageKey.REFLECTOR_MESSAGE, context.request.intent_name)
        return build_response(context.response_builder.speak(speech))


def generic_error_response() -> SkillResponse:
    """The apology spoken for any error; it reprompts, so the session stays open."""

    return build_response(
        new_response_builder().speak(GENERIC_ERROR_SPEECH).ask(GENERIC_ERROR_SPEECH)
    )


class CatchAllErrorHandler:
    """Turn any error into a generic apology that keeps the session open."""

    def handle(self, context: HandlerContext, error: Exception) -> SkillResponse:
        logger.info("error handled type=%s error=%s", type(error).__name__, error)
        return generic_error_response()


def default_handlers(events: EventLogger | None = None) -> tuple[RequestHandler, ...]:
    """The skill's request handlers in registration order."""

    return (
        LaunchRequestHandler(),
        ConvertUnitsIntentHandler(),
        HelloWorldIntentHandler(),
        HelpIntentHandler(),
        CancelAndStopIntentHandler(),
        FallbackIntentHandler(),
        SessionEndedRequestHandler(events),
        IntentReflectorHandler(),
    )
