"""Signing configuration: secret, algorithm and default token lifetime."""

from __future__ import annotations

import functools
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tokensmith.claims import DEFAULT_TTL_SECONDS
from tokensmith.errors import ConfigError

if TYPE_CHECKING:
    from tokensmith.codec import TokenCodec

logger = logging.getLogger(__name__)

SECRET_ENV = "TOKENSMITH_SECRET"
TTL_ENV = "TOKENSMITH_DEFAULT_TTL"

# Insecure default for local dev only; production MUST set TOKENSMITH_SECRET
_DEV_SECRET = "dev-insecure-token-secret-do-not-use-in-production"


class TokenConfig(BaseModel):
    """Immutable signing configuration shared by every codec operation.

    ``algorithm`` is written into every token header; HS256 is the only
    accepted value.
    """

    model_config = ConfigDict(frozen=True)

    secret: str = Field(min_length=1, repr=False)
    algorithm: Literal["HS256"] = "HS256"
    default_ttl_seconds: int = Field(default=DEFAULT_TTL_SECONDS, gt=0)

    @field_validator("secret")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("secret must not be blank")
        return value


def is_dev_mode() -> bool:
    return os.environ.get("ENVIRONMENT", "development") != "production"


def get_secret() -> str:
    """Resolve the signing secret from the environment.

    Falls back to a fixed development secret outside production.
    """
    secret = os.environ.get(SECRET_ENV)
    if secret:
        return secret
    if is_dev_mode():
        logger.warning("%s is not set, using the insecure development secret", SECRET_ENV)
        return _DEV_SECRET
    raise ConfigError(f"{SECRET_ENV} environment variable must be set in production")


def _ttl_from_env() -> int:
    raw = os.environ.get(TTL_ENV)
    if not raw:
        return DEFAULT_TTL_SECONDS
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{TTL_ENV} must be an integer number of seconds, got {raw!r}")


def load_config() -> TokenConfig:
    """Build a TokenConfig from environment variables."""
    try:
        return TokenConfig(secret=get_secret(), default_ttl_seconds=_ttl_from_env())
    except ValidationError as exc:
        raise ConfigError(f"Invalid token configuration: {exc}") from exc


def load_config_file(path: Path | str) -> TokenConfig:
    """Load a TokenConfig from the ``token:`` section of a YAML file.

    A missing ``secret`` key is resolved from the environment the same way
    :func:`load_config` does.

    Args:
        path: YAML file, e.g.::

            token:
              secret: change-me
              default_ttl_seconds: 900
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    section = data.get("token") if isinstance(data, dict) else None
    if not isinstance(section, dict):
        raise ConfigError(f"{path} has no 'token' section")

    section = dict(section)
    if not section.get("secret"):
        section["secret"] = get_secret()
    try:
        return TokenConfig.model_validate(section)
    except ValidationError as exc:
        raise ConfigError(f"Invalid token configuration in {path}: {exc}") from exc


@functools.lru_cache(maxsize=1)
def default_codec() -> TokenCodec:
    """Process-wide codec built once from the environment."""
    from tokensmith.codec import TokenCodec

    return TokenCodec(load_config())


def reset_default_codec() -> None:
    default_codec.cache_clear()
