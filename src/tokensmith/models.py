"""Pydantic v2 models for token headers and verification results."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, model_validator


class TokenHeader(BaseModel):
    """The fixed JOSE header carried in the first token segment."""

    model_config = ConfigDict(frozen=True)

    alg: Literal["HS256"] = "HS256"
    typ: Literal["JWT"] = "JWT"

    def to_json(self) -> str:
        """Compact JSON text, always ``{"alg":"HS256","typ":"JWT"}``."""
        return self.model_dump_json()


class VerificationOutcome(str, Enum):
    VALID = "valid"
    MALFORMED = "malformed"  # not three base64url segments
    BAD_SIGNATURE = "bad_signature"
    BAD_PAYLOAD = "bad_payload"  # signed, but claims undecodable or exp unusable
    EXPIRED = "expired"


class Verification(BaseModel):
    """Result of checking a token.

    ``claims`` is populated whenever the signature was authentic and the
    payload decoded, which includes expired tokens.
    """

    model_config = ConfigDict(frozen=True)

    outcome: VerificationOutcome
    claims: Optional[dict[str, Any]] = None
    reason: str = ""

    @property
    def valid(self) -> bool:
        return self.outcome is VerificationOutcome.VALID


class ExpirationKind(str, Enum):
    INVALID = "invalid"
    NO_EXPIRATION = "no_expiration"
    SECONDS_REMAINING = "seconds_remaining"


class ExpirationStatus(BaseModel):
    """Tagged time-to-expiry of a token.

    ``seconds`` is only meaningful for ``SECONDS_REMAINING`` and may be
    negative when the token has already expired.
    """

    model_config = ConfigDict(frozen=True)

    kind: ExpirationKind
    seconds: int = 0

    @model_validator(mode="after")
    def _validate_seconds(self) -> ExpirationStatus:
        if self.kind is not ExpirationKind.SECONDS_REMAINING and self.seconds != 0:
            raise ValueError(f"{self.kind.value} status cannot carry seconds")
        return self

    @classmethod
    def invalid(cls) -> ExpirationStatus:
        return cls(kind=ExpirationKind.INVALID)

    @classmethod
    def no_expiration(cls) -> ExpirationStatus:
        return cls(kind=ExpirationKind.NO_EXPIRATION)

    @classmethod
    def remaining(cls, seconds: int) -> ExpirationStatus:
        return cls(kind=ExpirationKind.SECONDS_REMAINING, seconds=seconds)
