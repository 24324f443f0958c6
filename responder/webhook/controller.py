"""Webhook controller: CRC handshake and event dispatch.

Event path:
1. Extract the first create event (no event → acknowledge)
2. Match triggers (no match → acknowledge)
3. Handler phase 1: fetch reply content
4. Handler phase 2: dispatch the reply

Any failure ends the request with a 400; nothing is retried and a failed
phase 1 never reaches phase 2.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from responder.content.dadjoke import DadJokeProvider, FetchError
from responder.models import TriggerKind
from responder.reply.twitter import DispatchError, TwitterReplyDispatcher
from responder.webhook.crc import sign_challenge
from responder.webhook.extractor import ParseError, extract_mention
from responder.webhook.handlers import JokeReplyHandler, TriggerHandler
from responder.webhook.models import WebhookResponse
from responder.webhook.triggers import TriggerMatcher

if TYPE_CHECKING:
    from responder.config import Settings

logger = logging.getLogger(__name__)

ACK_TEXT = "ok"


class WebhookController:
    """Maps webhook requests to terminal responses."""

    def __init__(
        self,
        crc_secret: bytes,
        matcher: TriggerMatcher,
        handlers: Iterable[TriggerHandler],
    ) -> None:
        self._crc_secret = crc_secret
        self._matcher = matcher
        self._handlers: dict[TriggerKind, TriggerHandler] = {
            h.kind: h for h in handlers
        }
        missing = {r.kind for r in matcher.rules} - self._handlers.keys()
        if missing:
            names = sorted(k.value for k in missing)
            raise ValueError(f"No handler registered for trigger kinds: {names}")

    @classmethod
    def from_settings(cls, settings: Settings) -> WebhookController:
        provider = DadJokeProvider(
            api_url=settings.joke_api_url, timeout=settings.http_timeout,
        )
        dispatcher = TwitterReplyDispatcher(
            settings.oauth_credentials(),
            base_url=settings.twitter_base_url,
            timeout=settings.http_timeout,
        )
        return cls(
            crc_secret=settings.crc_secret,
            matcher=TriggerMatcher(),
            handlers=[JokeReplyHandler(provider, dispatcher)],
        )

    def handle_crc(self, crc_token: str | None) -> WebhookResponse:
        """Answer the provider's CRC challenge."""
        if not crc_token:
            return WebhookResponse(status_code=400, text="no crc token given")
        return WebhookResponse(
            status_code=200,
            payload={"response_token": sign_challenge(crc_token, self._crc_secret)},
        )

    async def handle_event(self, raw_body: bytes) -> WebhookResponse:
        """Run the event pipeline for one push delivery."""
        try:
            event = extract_mention(raw_body)
        except ParseError as exc:
            logger.warning("Rejected webhook body: %s", exc.reason.value)
            return WebhookResponse(
                status_code=400, text="invalid parsing body response",
            )

        if event is None:
            return WebhookResponse(status_code=200, text=ACK_TEXT)

        decision = self._matcher.match(event)
        if decision.kind == TriggerKind.NO_MATCH:
            return WebhookResponse(status_code=200, text=ACK_TEXT)

        logger.info("received #%s request", decision.rule)
        logger.debug("Triggering body: %s", raw_body.decode(errors="replace"))
        handler = self._handlers[decision.kind]

        try:
            content = await handler.fetch(event)
        except FetchError as exc:
            logger.warning(
                "Content fetch failed (%s, status=%s): %s",
                exc.kind.value, exc.status_code, exc,
            )
            return WebhookResponse(status_code=400, text=handler.fetch_failure_text)

        try:
            await handler.dispatch(event, content)
        except DispatchError as exc:
            logger.warning(
                "Reply dispatch failed (%s, status=%s): %s",
                exc.kind.value, exc.status_code, exc,
            )
            return WebhookResponse(status_code=400, text=handler.dispatch_failure_text)

        return WebhookResponse(status_code=200, text=ACK_TEXT)
