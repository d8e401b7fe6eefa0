"""Compact JSON encoding of headers and claim sets."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from tokensmith.errors import ClaimsSerializationError, TokenDecodeError


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-finite number {name} is not allowed")


def serialize(data: Mapping[str, Any]) -> str:
    """Serialize a mapping to compact JSON, preserving key order.

    Raises:
        ClaimsSerializationError: on non-string keys, unsupported value
            types, circular references or non-finite floats.
    """
    for key in data:
        if not isinstance(key, str):
            raise ClaimsSerializationError(f"Claim names must be strings, got {type(key).__name__}")
    try:
        return json.dumps(
            dict(data),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError, RecursionError) as exc:
        raise ClaimsSerializationError(f"Claims are not JSON serializable: {exc}") from exc


def deserialize(text: str | bytes) -> dict[str, Any]:
    """Parse JSON text that must hold an object.

    Raises:
        TokenDecodeError: on malformed JSON, invalid UTF-8, ``NaN``/``Infinity``
            literals, or a top-level value that is not an object.
    """
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise TokenDecodeError(f"Payload is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise TokenDecodeError(f"Payload must be a JSON object, got {type(data).__name__}")
    return data
