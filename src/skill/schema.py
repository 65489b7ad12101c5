"""Request/response models (Pydantic).

These models are the contract between the hosting voice platform adapter and the skill. Inbound
objects that do not validate are rejected before dispatch.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator


class InvalidRequestError(ValueError):
    """Raised when an inbound object is not a valid skill request."""


class RequestType(StrEnum):
    """Supported inbound request kinds."""

    LaunchRequest = "LaunchRequest"
    IntentRequest = "IntentRequest"
    SessionEndedRequest = "SessionEndedRequest"


class SkillRequest(BaseModel):
    """A single inbound request.

    Only `IntentRequest` carries an intent name and slots. Slot values are optional: the platform
    may send a slot with no value when the user did not say it.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    request_type: RequestType = Field(alias="requestType")
    locale: str | None = None
    intent_name: str | None = Field(default=None, alias="intentName")
    slots: dict[str, str | None] = Field(default_factory=dict)
    reason: str | None = None

    @model_validator(mode="after")
    def validate_shape(self) -> SkillRequest:
        """Enforce which fields each request type may carry."""

        if self.request_type == RequestType.IntentRequest:
            if not self.intent_name:
                raise ValueError("intent_name is required for IntentRequest")
        else:
            if self.intent_name is not None:
                raise ValueError(f"intent_name is only allowed for IntentRequest, got {self.request_type}")
            if self.slots:
                raise ValueError(f"slots are only allowed for IntentRequest, got {self.request_type}")

        if self.reason is not None and self.request_type != RequestType.SessionEndedRequest:
            raise ValueError("reason is only allowed for SessionEndedRequest")
        return self

    def slot_value(self, name: str) -> str | None:
        """Return a slot's value, or `None` if the slot is absent or empty."""

        value = self.slots.get(name)
        if value is None or not value.strip():
            return None
        return value


class SkillResponse(BaseModel):
    """A spoken response.

    A reprompt keeps the session open; without one the session ends.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    speech_text: str = ""
    reprompt_text: str | None = None
    should_end_session: bool = True

    @model_validator(mode="after")
    def validate_session(self) -> SkillResponse:
        """A response that reprompts must keep the session open."""

        if self.reprompt_text is not None and self.should_end_session:
            raise ValueError("should_end_session must be false when reprompt_text is set")
        return self


def request_from_obj(obj: Any) -> SkillRequest:
    """Validate and parse a SkillRequest from an arbitrary decoded JSON object.

    Raises:
        InvalidRequestError: If the object does not describe a valid request.
    """

    try:
        return SkillRequest.model_validate(obj)
    except ValidationError as exc:
        raise InvalidRequestError(f"invalid skill request: {exc}") from exc
