"""Shared test fixtures."""

from __future__ import annotations

import pytest

from tokensmith.codec import TokenCodec
from tokensmith.config import TokenConfig, reset_default_codec

from helpers import FIXED_NOW, TEST_SECRET


class FakeClock:
    """Settable stand-in for ``time.time``."""

    def __init__(self, now: float = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def config():
    return TokenConfig(secret=TEST_SECRET)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def codec(config, clock):
    """Codec with a frozen clock at FIXED_NOW."""
    return TokenCodec(config, clock=clock)


@pytest.fixture
def live_codec(config):
    """Codec on the real wall clock."""
    return TokenCodec(config)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Isolate every test from the developer's token environment."""
    for name in ("TOKENSMITH_SECRET", "TOKENSMITH_DEFAULT_TTL", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)
    reset_default_codec()
    yield
    reset_default_codec()
