"""Exception hierarchy for token issuance and verification."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tokensmith.models import VerificationOutcome


class TokenError(ValueError):
    """Base class for token errors."""


class ClaimsSerializationError(TokenError):
    """The claim set could not be serialized to JSON."""


class TokenDecodeError(TokenError):
    """A token segment is not valid base64url or not a JSON object."""


class ClaimTypeError(TokenError):
    """A timestamp claim does not hold a usable number."""


class InvalidTokenError(TokenError):
    """Raised by ``TokenCodec.decode`` when a token fails verification."""

    def __init__(self, outcome: VerificationOutcome, reason: str = "") -> None:
        self.outcome = outcome
        self.reason = reason
        super().__init__(reason or outcome.value)


class ExpiredTokenError(InvalidTokenError):
    """Signature is valid but the token is past its ``exp``."""


class SigningError(RuntimeError):
    """HMAC signing could not be performed (bad key or missing primitive)."""


class ConfigError(ValueError):
    """Missing or invalid token configuration."""
