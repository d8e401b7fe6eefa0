"""HMAC-SHA256 signing of token content."""

from __future__ import annotations

import hashlib
import hmac

from tokensmith.errors import SigningError


def sign(message: str, secret: str) -> bytes:
    """Compute the raw HMAC-SHA256 tag of ``message`` keyed with ``secret``.

    Both are encoded as UTF-8. The result is deterministic for a given
    (message, secret) pair and always 32 bytes long.

    Raises:
        SigningError: if the secret is empty or not text.
    """
    if not isinstance(secret, str) or not secret:
        raise SigningError("Signing secret must be a non-empty string")
    return hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).digest()


def signature_matches(expected: str, actual: str) -> bool:
    """Constant-time comparison of two encoded signatures."""
    return hmac.compare_digest(expected.encode("utf-8"), actual.encode("utf-8"))
