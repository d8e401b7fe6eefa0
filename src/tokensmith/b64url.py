"""Unpadded URL-safe base64, as used for every token segment."""

from __future__ import annotations

import base64
import binascii
import re

from tokensmith.errors import TokenDecodeError

_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def encode(data: bytes) -> str:
    """Encode bytes as URL-safe base64 text with the ``=`` padding stripped."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def decode(text: str) -> bytes:
    """Decode unpadded URL-safe base64 text.

    Only the alphabet produced by :func:`encode` is accepted; padding
    characters, standard-alphabet ``+``/``/`` and whitespace are rejected
    rather than silently discarded.

    Raises:
        TokenDecodeError: if the text is not valid unpadded base64url.
    """
    if not _ALPHABET.fullmatch(text):
        raise TokenDecodeError("Segment contains characters outside the base64url alphabet")
    if len(text) % 4 == 1:
        raise TokenDecodeError("Segment has an impossible base64 length")
    padded = text + "=" * (-len(text) % 4)
    try:
        return base64.urlsafe_b64decode(padded.encode("ascii"))
    except (binascii.Error, ValueError) as exc:
        raise TokenDecodeError("Segment is not valid base64url") from exc


def is_encoded(text: str) -> bool:
    """True when ``text`` uses only the unpadded base64url alphabet."""
    return isinstance(text, str) and _ALPHABET.fullmatch(text) is not None
