"""Reply delivery through the Twitter v1.1 write API.

Requests are OAuth1 signed (HMAC-SHA1, Authorization header) with the
consumer and access credentials; the form body is part of the signature.
A single attempt is made per reply.
"""

from __future__ import annotations

import json
import logging

import httpx
from authlib.integrations.httpx_client import OAuth1Auth

from responder.config import OAuthCredentials
from responder.models import FailureKind, ReplyOutcome, ResponderError

logger = logging.getLogger(__name__)


class DispatchError(ResponderError):
    """Raised when the write API does not accept a reply."""


class TwitterReplyDispatcher:
    """Posts replies to ``<base_url>/statuses/update.json``."""

    def __init__(
        self,
        credentials: OAuthCredentials,
        base_url: str,
        timeout: float = 15.0,
    ) -> None:
        self._auth = OAuth1Auth(
            client_id=credentials.consumer_key,
            client_secret=credentials.consumer_secret.get_secret_value(),
            token=credentials.access_token,
            token_secret=credentials.access_token_secret.get_secret_value(),
        )
        self._url = f"{base_url.rstrip('/')}/statuses/update.json"
        self._timeout = timeout

    async def reply(self, text: str, reply_target_id: str) -> ReplyOutcome:
        form = {"status": text, "in_reply_to_status_id": reply_target_id}
        try:
            async with httpx.AsyncClient(verify=True) as client:
                resp = await client.post(
                    self._url, data=form, auth=self._auth, timeout=self._timeout,
                )
        except httpx.TransportError as exc:
            raise DispatchError(
                FailureKind.UPSTREAM_FAILURE,
                f"Write API unreachable: {type(exc).__name__}",
            ) from exc

        # The body is decoded before the status is checked: a non-JSON error
        # page is reported as a decode failure, not an upstream failure.
        try:
            data = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise DispatchError(
                FailureKind.DECODE_FAILURE,
                "Write API returned a non-JSON body",
                status_code=resp.status_code,
            ) from exc

        if resp.status_code >= 400:
            raise DispatchError(
                FailureKind.UPSTREAM_FAILURE,
                f"Write API returned status code {resp.status_code}",
                status_code=resp.status_code,
            )

        reply_id = data.get("id_str") if isinstance(data, dict) else None
        logger.info("Reply posted in response to %s", reply_target_id)
        return ReplyOutcome(
            status_code=resp.status_code,
            reply_id=reply_id if isinstance(reply_id, str) else None,
        )
