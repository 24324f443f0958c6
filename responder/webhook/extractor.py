"""Account-activity envelope parsing.

Only the ``tweet_create_events`` category is acted upon; every other
category (favorites, follows, DMs, ...) is acknowledged and ignored.
"""

from __future__ import annotations

import json
import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, ValidationError

from responder.models import FailureKind, MentionEvent, ResponderError

logger = logging.getLogger(__name__)

CREATE_EVENTS_KEY = "tweet_create_events"


class ParseErrorReason(str, Enum):
    MALFORMED_JSON = "malformed-json"
    SCHEMA_MISMATCH = "schema-mismatch"
    EMPTY_EVENT_LIST = "empty-event-list"


class ParseError(ResponderError):
    """Raised when an inbound envelope cannot be turned into a mention event."""

    def __init__(self, reason: ParseErrorReason) -> None:
        self.reason = reason
        super().__init__(
            FailureKind.MALFORMED_REQUEST,
            f"Cannot parse webhook envelope: {reason.value}",
        )


# Only the fields the trigger logic reads; the provider sends many more.


class _EventUser(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    screen_name: str


class _CreateEvent(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    id_str: str
    text: str
    user: _EventUser


class MentionHook(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    tweet_create_events: list[_CreateEvent]


def extract_mention(raw_body: bytes) -> MentionEvent | None:
    """Extract the first create event of an envelope.

    Returns None when the envelope carries no create events. Later events in
    the list are ignored.
    """
    try:
        data = json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise ParseError(ParseErrorReason.MALFORMED_JSON) from exc
    if not isinstance(data, dict):
        raise ParseError(ParseErrorReason.MALFORMED_JSON)

    if CREATE_EVENTS_KEY not in data:
        return None

    try:
        hook = MentionHook.model_validate_json(raw_body)
    except ValidationError as exc:
        logger.debug("Envelope schema mismatch: %s", exc.errors(include_input=False))
        raise ParseError(ParseErrorReason.SCHEMA_MISMATCH) from exc

    if not hook.tweet_create_events:
        raise ParseError(ParseErrorReason.EMPTY_EVENT_LIST)

    first = hook.tweet_create_events[0]
    return MentionEvent(
        text=first.text,
        reply_target_id=first.id_str,
        author_handle=first.user.screen_name,
    )
