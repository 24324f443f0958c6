"""Two-phase reply handlers, one per trigger kind.

Phase 1 (``fetch``) gathers reply content and raises ``FetchError`` on
failure. Phase 2 (``dispatch``) posts the reply and raises ``DispatchError``.
Phase 2 only runs after phase 1 succeeded.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from responder.models import MentionEvent, ReplyContent, ReplyOutcome, TriggerKind

if TYPE_CHECKING:
    from responder.content.dadjoke import DadJokeProvider
    from responder.reply.twitter import TwitterReplyDispatcher


class TriggerHandler(ABC):
    kind: TriggerKind
    fetch_failure_text = "failed to fetch reply content"
    dispatch_failure_text = "failed to reply tweet"

    @abstractmethod
    async def fetch(self, event: MentionEvent) -> ReplyContent:
        """Phase 1: obtain the content to reply with."""
        ...

    @abstractmethod
    async def dispatch(
        self, event: MentionEvent, content: ReplyContent,
    ) -> ReplyOutcome:
        """Phase 2: post the reply for ``event``."""
        ...


def compose_reply(author_handle: str, body: str) -> str:
    return f"@{author_handle} {body}"


class JokeReplyHandler(TriggerHandler):
    """Replies to ``#dadjoke`` mentions with a random joke."""

    kind = TriggerKind.JOKE_REQUEST
    fetch_failure_text = "failed get dadjoke"

    def __init__(
        self,
        provider: DadJokeProvider,
        dispatcher: TwitterReplyDispatcher,
    ) -> None:
        self._provider = provider
        self._dispatcher = dispatcher

    async def fetch(self, event: MentionEvent) -> ReplyContent:
        return await self._provider.fetch()

    async def dispatch(
        self, event: MentionEvent, content: ReplyContent,
    ) -> ReplyOutcome:
        # TODO: check the composed length against the write API's status limit
        # once the limit for this account tier is known.
        status = compose_reply(event.author_handle, content.joke)
        return await self._dispatcher.reply(status, event.reply_target_id)
