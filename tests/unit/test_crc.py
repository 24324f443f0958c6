"""Tests for CRC challenge-response signing."""

from __future__ import annotations

import base64
import hashlib
import hmac as hmac_mod
import re

from responder.webhook.crc import sign_challenge

_TOKEN_RE = re.compile(r"^sha256=[A-Za-z0-9+/]+={0,2}$")


def _expected(challenge: str, secret: bytes) -> str:
    digest = hmac_mod.new(secret, challenge.encode(), hashlib.sha256).digest()
    return "sha256=" + base64.b64encode(digest).decode()


def test_known_secret_and_challenge() -> None:
    assert sign_challenge("hello", b"abc") == "sha256=8xZqOkBFmdIEbtKq5HmzfVS1HS6FJZyeMUBCdTvn2BM="


def test_matches_hmac_sha256() -> None:
    assert sign_challenge("hello", b"abc") == _expected("hello", b"abc")


def test_deterministic() -> None:
    assert sign_challenge("challenge", b"s3cret") == sign_challenge("challenge", b"s3cret")


def test_output_format() -> None:
    for challenge in ("hello", "", "ünïcode ✓", "x" * 1000):
        assert _TOKEN_RE.match(sign_challenge(challenge, b"key"))


def test_digest_is_32_bytes() -> None:
    token = sign_challenge("hello", b"abc")
    assert len(base64.b64decode(token.removeprefix("sha256="))) == 32


def test_empty_challenge_still_signed() -> None:
    assert sign_challenge("", b"abc") == _expected("", b"abc")


def test_secret_changes_token() -> None:
    assert sign_challenge("hello", b"abc") != sign_challenge("hello", b"abd")


def test_challenge_encoded_as_utf8() -> None:
    assert sign_challenge("café", b"k") == _expected("café", b"k")
