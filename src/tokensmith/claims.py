"""Claim set types and the reserved time claims.

A claim set is a plain ordered ``dict`` from claim name to a JSON value.
Only two names are interpreted here: ``iat`` (issued-at) and ``exp``
(expiration), both integer seconds since the Unix epoch.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Union

from tokensmith.errors import ClaimTypeError

ISSUED_AT = "iat"
EXPIRATION = "exp"

DEFAULT_TTL_SECONDS = 3600

ClaimValue = Union[
    str, int, float, bool, None, Mapping[str, "ClaimValue"], list["ClaimValue"], tuple["ClaimValue", ...]
]
Claims = dict[str, ClaimValue]


def stamp_claims(
    claims: Mapping[str, ClaimValue],
    issued_at: int,
    ttl_seconds: int = DEFAULT_TTL_SECONDS,
) -> Claims:
    """Return a copy of ``claims`` with ``iat`` set and ``exp`` defaulted.

    ``iat`` always overwrites a caller-supplied value. ``exp`` is only added
    when the caller did not set one, as ``issued_at + ttl_seconds``.
    The input mapping is left untouched.
    """
    if not isinstance(claims, Mapping):
        raise TypeError(f"Claims must be a mapping, got {type(claims).__name__}")
    stamped = dict(claims)
    stamped[ISSUED_AT] = issued_at
    if EXPIRATION not in stamped:
        stamped[EXPIRATION] = issued_at + ttl_seconds
    return stamped


def read_timestamp(value: Any) -> int:
    """Coerce a decoded timestamp claim to whole Unix seconds.

    JSON numbers may decode as floats; those are floored so that a
    fractional ``exp`` never extends a token's life.

    Raises:
        ClaimTypeError: for booleans, non-finite floats and non-numbers.
    """
    if isinstance(value, bool):
        raise ClaimTypeError("Timestamp claim must be a number, got a boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ClaimTypeError("Timestamp claim must be finite")
        return math.floor(value)
    raise ClaimTypeError(f"Timestamp claim must be a number, got {type(value).__name__}")


def expiration_of(claims: Mapping[str, ClaimValue]) -> int | None:
    """Return the ``exp`` claim in whole seconds, or None when absent."""
    if EXPIRATION not in claims:
        return None
    return read_timestamp(claims[EXPIRATION])
