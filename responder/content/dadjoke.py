"""Dad joke content provider (icanhazdadjoke.com)."""

from __future__ import annotations

import json
import logging

import httpx
from pydantic import ValidationError

from responder.models import FailureKind, ReplyContent, ResponderError

logger = logging.getLogger(__name__)

_USER_AGENT = "mention-responder"


class FetchError(ResponderError):
    """Raised when reply content cannot be obtained from the content API."""


class DadJokeProvider:
    """Fetches a random joke; one request per call, nothing cached."""

    def __init__(
        self,
        api_url: str,
        timeout: float = 15.0,
    ) -> None:
        self._api_url = api_url
        self._timeout = timeout

    async def fetch(self) -> ReplyContent:
        headers = {
            "Accept": "application/json",
            "User-Agent": _USER_AGENT,
        }
        try:
            async with httpx.AsyncClient(verify=True) as client:
                resp = await client.get(
                    self._api_url, headers=headers, timeout=self._timeout,
                )
        except httpx.TransportError as exc:
            raise FetchError(
                FailureKind.UPSTREAM_FAILURE,
                f"Joke API unreachable: {type(exc).__name__}",
            ) from exc

        if resp.status_code >= 400:
            raise FetchError(
                FailureKind.UPSTREAM_FAILURE,
                f"Joke API returned status code {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            content = ReplyContent.model_validate(resp.json())
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as exc:
            raise FetchError(
                FailureKind.DECODE_FAILURE,
                "Joke API returned an unexpected body",
                status_code=resp.status_code,
            ) from exc

        logger.debug("Fetched joke %s", content.id)
        return content
