"""Trigger matching over mention text with an ordered rule table."""

from __future__ import annotations

import re
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from responder.models import MentionEvent, TriggerDecision, TriggerKind


class TriggerRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    kind: TriggerKind
    pattern: str  # case-sensitive, ASCII word boundaries


DEFAULT_RULES: tuple[TriggerRule, ...] = (
    TriggerRule(name="dadjoke", kind=TriggerKind.JOKE_REQUEST, pattern=r"#dadjoke\b"),
)

NO_MATCH = TriggerDecision(kind=TriggerKind.NO_MATCH)


class TriggerMatcher:
    """Evaluates rules in order; the first rule found in the text wins."""

    def __init__(self, rules: Iterable[TriggerRule] = DEFAULT_RULES) -> None:
        self._rules = tuple(rules)
        for rule in self._rules:
            if rule.kind == TriggerKind.NO_MATCH:
                raise ValueError(f"Rule '{rule.name}' cannot use kind no_match")
        self._compiled: list[tuple[TriggerRule, re.Pattern[str]]] = [
            (rule, re.compile(rule.pattern, re.ASCII)) for rule in self._rules
        ]

    @property
    def rules(self) -> tuple[TriggerRule, ...]:
        return self._rules

    def match(self, event: MentionEvent) -> TriggerDecision:
        for rule, pattern in self._compiled:
            if pattern.search(event.text):
                return TriggerDecision(kind=rule.kind, rule=rule.name)
        return NO_MATCH
