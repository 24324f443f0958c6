"""Shared test fixtures for mention-responder."""

from __future__ import annotations

import json
from typing import Any

import pytest

from responder.config import Settings

TEST_ENV: dict[str, str] = {
    "TWITTER_CONSUMER_KEY": "ck",
    "TWITTER_CONSUMER_SECRET": "abc",
    "TWITTER_ACCESS_TOKEN": "at",
    "TWITTER_ACCESS_TOKEN_SECRET": "ats",
    "TWITTER_BASE_URL": "https://api.twitter.test/1.1",
    "DADJOKE_API_URL": "https://jokes.test/",
}


@pytest.fixture
def settings() -> Settings:
    return Settings.from_env(TEST_ENV)


# --- Factory functions for test data ---


def make_create_event(
    text: str = "hello @bot",
    id_str: str = "1234567890",
    screen_name: str = "alice",
    **kwargs: Any,
) -> dict[str, Any]:
    """Factory for a tweet_create_events entry with the usual provider noise."""
    event: dict[str, Any] = {
        "created_at": "Mon Oct 19 10:00:00 +0000 2026",
        "id": int(id_str),
        "id_str": id_str,
        "text": text,
        "truncated": False,
        "in_reply_to_status_id": None,
        "user": {
            "id": 42,
            "id_str": "42",
            "name": screen_name.title(),
            "screen_name": screen_name,
            "location": None,
        },
        "entities": {"hashtags": [], "user_mentions": []},
        "lang": "en",
    }
    event.update(kwargs)
    return event


def make_envelope(*events: dict[str, Any]) -> bytes:
    return json.dumps({
        "for_user_id": "999",
        "tweet_create_events": list(events),
    }).encode()
