"""Data models for the webhook request pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class WebhookResponse:
    """Terminal response returned to the webhook provider."""

    status_code: int
    text: str = ""
    payload: dict[str, Any] | None = None  # JSON body, takes precedence over text
