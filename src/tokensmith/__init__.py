"""Compact HS256 tokens with issued-at and expiration enforcement."""

from tokensmith.codec import TokenCodec
from tokensmith.config import TokenConfig, default_codec, load_config, load_config_file
from tokensmith.errors import (
    ClaimsSerializationError,
    ConfigError,
    ExpiredTokenError,
    InvalidTokenError,
    SigningError,
    TokenError,
)
from tokensmith.models import (
    ExpirationKind,
    ExpirationStatus,
    Verification,
    VerificationOutcome,
)

__all__ = [
    "ClaimsSerializationError",
    "ConfigError",
    "ExpirationKind",
    "ExpirationStatus",
    "ExpiredTokenError",
    "InvalidTokenError",
    "SigningError",
    "TokenCodec",
    "TokenConfig",
    "TokenError",
    "Verification",
    "VerificationOutcome",
    "default_codec",
    "load_config",
    "load_config_file",
]
