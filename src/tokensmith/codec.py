"""Compact HS256 token generation and verification.

Tokens have the form ``<header>.<claims>.<signature>`` where each segment
is unpadded base64url. The header is always ``{"alg":"HS256","typ":"JWT"}``
and is never read back: verification recomputes the HMAC over the first two
segments with the configured secret and compares it with the third before
anything in the payload is trusted.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from typing import Optional

from tokensmith import b64url
from tokensmith.claims import Claims, ClaimValue, expiration_of, stamp_claims
from tokensmith.config import TokenConfig
from tokensmith.errors import ExpiredTokenError, InvalidTokenError, TokenError
from tokensmith.models import (
    ExpirationStatus,
    TokenHeader,
    Verification,
    VerificationOutcome,
)
from tokensmith.serialization import deserialize, serialize
from tokensmith.signer import sign, signature_matches

logger = logging.getLogger(__name__)

SEGMENT_COUNT = 3


class TokenCodec:
    """Issues and checks tokens for a single :class:`TokenConfig`.

    Args:
        config: Secret and default lifetime used for every token.
        clock: Returns the current Unix time in seconds (testing hook).
    """

    def __init__(self, config: TokenConfig, clock: Callable[[], float] = time.time) -> None:
        self._config = config
        self._clock = clock
        header = TokenHeader(alg=config.algorithm)
        self._header_segment = b64url.encode(header.to_json().encode("utf-8"))

    @property
    def config(self) -> TokenConfig:
        return self._config

    def now(self) -> int:
        """Current Unix time in whole seconds."""
        return int(self._clock())

    def _signature(self, signing_input: str) -> str:
        return b64url.encode(sign(signing_input, self._config.secret))

    def generate(self, claims: Mapping[str, ClaimValue]) -> str:
        """Issue a signed token for ``claims``.

        ``iat`` is set to the current time and ``exp`` defaults to
        ``iat + default_ttl_seconds`` when the caller did not supply one.
        The caller's mapping is not modified.

        Raises:
            ClaimsSerializationError: if a claim value cannot be encoded as JSON.
        """
        stamped = stamp_claims(claims, self.now(), self._config.default_ttl_seconds)
        payload_segment = b64url.encode(serialize(stamped).encode("utf-8"))
        signing_input = f"{self._header_segment}.{payload_segment}"
        return f"{signing_input}.{self._signature(signing_input)}"

    def _reject(
        self,
        outcome: VerificationOutcome,
        reason: str,
        claims: Optional[Claims] = None,
    ) -> Verification:
        logger.debug("Token rejected: %s (%s)", outcome.value, reason)
        return Verification(outcome=outcome, claims=claims, reason=reason)

    def _check(self, token: str, now: int) -> Verification:
        parts = token.split(".") if isinstance(token, str) else []
        if len(parts) != SEGMENT_COUNT or not all(b64url.is_encoded(p) for p in parts):
            return self._reject(
                VerificationOutcome.MALFORMED,
                f"expected {SEGMENT_COUNT} base64url segments",
            )

        header_segment, payload_segment, signature_segment = parts
        expected = self._signature(f"{header_segment}.{payload_segment}")
        if not signature_matches(expected, signature_segment):
            return self._reject(VerificationOutcome.BAD_SIGNATURE, "signature mismatch")

        # Authentic from here on; the payload may still be unusable
        try:
            claims = deserialize(b64url.decode(payload_segment))
            exp = expiration_of(claims)
        except TokenError as exc:
            return self._reject(VerificationOutcome.BAD_PAYLOAD, str(exc))

        if exp is not None and now > exp:
            return self._reject(
                VerificationOutcome.EXPIRED,
                f"expired {now - exp}s ago",
                claims=claims,
            )
        return Verification(outcome=VerificationOutcome.VALID, claims=claims)

    def inspect(self, token: str) -> Verification:
        """Verify ``token`` and report the outcome with the decoded claims."""
        return self._check(token, self.now())

    def verify(self, token: str) -> bool:
        """True only for a well-formed, authentic, unexpired token.

        Never raises for bad input: malformed structure, a wrong signature,
        an undecodable payload and expiry all give False.
        """
        return self.inspect(token).valid

    def expiration_status(self, token: str) -> ExpirationStatus:
        """Seconds until ``exp`` for an authentic token, as a tagged result.

        Expired tokens report a negative remainder rather than ``INVALID``.
        """
        now = self.now()
        result = self._check(token, now)
        if result.claims is None:
            return ExpirationStatus.invalid()
        exp = expiration_of(result.claims)
        if exp is None:
            return ExpirationStatus.no_expiration()
        return ExpirationStatus.remaining(exp - now)

    def time_until_expiration(self, token: str) -> int:
        """Seconds until ``exp``; negative once expired.

        Returns 0 both for invalid tokens and for valid tokens without an
        ``exp`` claim. Use :meth:`expiration_status` to tell them apart.
        """
        return self.expiration_status(token).seconds

    def decode(self, token: str) -> Claims:
        """Return the verified claims of ``token``.

        Raises:
            ExpiredTokenError: if the token is authentic but expired.
            InvalidTokenError: for any other verification failure.
        """
        result = self.inspect(token)
        if result.outcome is VerificationOutcome.EXPIRED:
            raise ExpiredTokenError(result.outcome, result.reason)
        if not result.valid:
            raise InvalidTokenError(result.outcome, result.reason)
        return dict(result.claims)
