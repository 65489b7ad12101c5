"""Bridge between the ASK SDK response builder and `SkillResponse`.

Handlers build responses with `ask_sdk_core`'s `ResponseFactory` (`speak`/`ask`); `to_skill_response`
is the single place that maps the SDK's `Response` onto the skill's own response model.
"""

from __future__ import annotations

from ask_sdk_core.response_helper import ResponseFactory
from ask_sdk_model import Response
from ask_sdk_model.ui import OutputSpeech, PlainTextOutputSpeech, SsmlOutputSpeech

from src.skill.schema import SkillResponse

_SPEAK_OPEN = "<speak>"
_SPEAK_CLOSE = "</speak>"


def new_response_builder() -> ResponseFactory:
    """A fresh SDK response builder for one response."""

    return ResponseFactory()


def _speech_text(speech: OutputSpeech | None) -> str | None:
    if speech is None:
        return None
    if isinstance(speech, PlainTextOutputSpeech):
        return speech.text or ""
    if isinstance(speech, SsmlOutputSpeech):
        ssml = (speech.ssml or "").strip()
        if ssml.startswith(_SPEAK_OPEN) and ssml.endswith(_SPEAK_CLOSE):
            ssml = ssml[len(_SPEAK_OPEN):-len(_SPEAK_CLOSE)].strip()
        return ssml
    raise TypeError(f"unsupported output speech type: {type(speech).__name__}")


def to_skill_response(response: Response) -> SkillResponse:
    """Map an SDK `Response` onto `SkillResponse`.

    A response without an explicit session flag ends the session, matching the voice platform's
    default; `ask()` sets the flag to false whenever a reprompt is given.
    """

    reprompt_text = None
    if response.reprompt is not None:
        reprompt_text = _speech_text(response.reprompt.output_speech)

    should_end_session = response.should_end_session
    if should_end_session is None:
        should_end_session = reprompt_text is None

    return SkillResponse(
        speech_text=_speech_text(response.output_speech) or "",
        reprompt_text=reprompt_text,
        should_end_session=should_end_session,
    )


def build_response(builder: ResponseFactory) -> SkillResponse:
    """Finish a `ResponseFactory` chain as a `SkillResponse`."""

    return to_skill_response(builder.response)
