"""CRC challenge-response signing for webhook subscription checks.

The provider sends a ``crc_token`` and expects back
``sha256=<base64(HMAC-SHA256(crc_token, consumer_secret))>``. A wrong value
silently disables the subscription, so the encoding is fixed: UTF-8 input,
raw digest, standard base64 with padding.
"""

from __future__ import annotations

import base64
import hashlib
import hmac

RESPONSE_TOKEN_PREFIX = "sha256="


def sign_challenge(challenge: str, secret: bytes) -> str:
    """Return the response token for ``challenge`` keyed by ``secret``."""
    digest = hmac.new(secret, challenge.encode("utf-8"), hashlib.sha256).digest()
    return RESPONSE_TOKEN_PREFIX + base64.b64encode(digest).decode("ascii")
