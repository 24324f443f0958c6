"""Shared Pydantic data models for mention-responder."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

# --- Enums ---


class FailureKind(str, Enum):
    MALFORMED_REQUEST = "malformed_request"
    UPSTREAM_FAILURE = "upstream_failure"
    DECODE_FAILURE = "decode_failure"


class TriggerKind(str, Enum):
    JOKE_REQUEST = "joke_request"
    NO_MATCH = "no_match"


# --- Errors ---


class ResponderError(Exception):
    """Base for failures mapped to a terminal webhook response."""

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        status_code: int | None = None,
    ) -> None:
        self.kind = kind
        self.status_code = status_code
        super().__init__(message)


# --- Event Models ---


class MentionEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    reply_target_id: str
    author_handle: str


class TriggerDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: TriggerKind
    rule: str | None = None


# --- Reply Models ---


class ReplyContent(BaseModel):
    """Joke payload returned by the content API."""

    model_config = ConfigDict(frozen=True)

    id: str
    joke: str
    status: int


class ReplyOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    status_code: int
    reply_id: str | None = None
