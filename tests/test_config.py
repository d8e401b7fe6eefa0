"""Tests for signing configuration loading."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from tokensmith.codec import TokenCodec
from tokensmith.config import (
    TokenConfig,
    default_codec,
    get_secret,
    is_dev_mode,
    load_config,
    load_config_file,
    reset_default_codec,
)
from tokensmith.errors import ConfigError


class TestTokenConfig:
    def test_defaults(self):
        config = TokenConfig(secret="s")
        assert config.algorithm == "HS256"
        assert config.default_ttl_seconds == 3600

    def test_secret_hidden_from_repr(self):
        assert "top-secret" not in repr(TokenConfig(secret="top-secret"))

    @pytest.mark.parametrize("secret", ["", "   "])
    def test_blank_secret_rejected(self, secret):
        with pytest.raises(ValidationError):
            TokenConfig(secret=secret)

    def test_only_hs256(self):
        with pytest.raises(ValidationError):
            TokenConfig(secret="s", algorithm="RS256")

    @pytest.mark.parametrize("ttl", [0, -5])
    def test_ttl_must_be_positive(self, ttl):
        with pytest.raises(ValidationError):
            TokenConfig(secret="s", default_ttl_seconds=ttl)

    def test_frozen(self):
        config = TokenConfig(secret="s")
        with pytest.raises(ValidationError):
            config.secret = "other"


class TestEnvironment:
    def test_dev_mode_default(self):
        assert is_dev_mode()

    def test_secret_from_env(self, monkeypatch):
        monkeypatch.setenv("TOKENSMITH_SECRET", "env-secret")
        assert get_secret() == "env-secret"

    def test_dev_fallback_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="tokensmith.config"):
            secret = get_secret()
        assert secret
        assert "TOKENSMITH_SECRET is not set" in caplog.text

    def test_production_requires_secret(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        with pytest.raises(ConfigError, match="must be set in production"):
            get_secret()

    def test_load_config(self, monkeypatch):
        monkeypatch.setenv("TOKENSMITH_SECRET", "env-secret")
        monkeypatch.setenv("TOKENSMITH_DEFAULT_TTL", "900")
        config = load_config()
        assert config.secret == "env-secret"
        assert config.default_ttl_seconds == 900

    @pytest.mark.parametrize("ttl", ["soon", "0", "-1"])
    def test_load_config_bad_ttl(self, monkeypatch, ttl):
        monkeypatch.setenv("TOKENSMITH_DEFAULT_TTL", ttl)
        with pytest.raises(ConfigError):
            load_config()


class TestConfigFile:
    def test_load(self, tmp_path):
        path = tmp_path / "tokens.yaml"
        path.write_text("token:\n  secret: file-secret\n  default_ttl_seconds: 120\n")
        config = load_config_file(path)
        assert config.secret == "file-secret"
        assert config.default_ttl_seconds == 120

    def test_secret_from_env_when_omitted(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TOKENSMITH_SECRET", "env-secret")
        path = tmp_path / "tokens.yaml"
        path.write_text("token:\n  default_ttl_seconds: 120\n")
        assert load_config_file(path).secret == "env-secret"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config_file(tmp_path / "absent.yaml")

    def test_missing_section(self, tmp_path):
        path = tmp_path / "tokens.yaml"
        path.write_text("other: {}\n")
        with pytest.raises(ConfigError, match="'token' section"):
            load_config_file(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "tokens.yaml"
        path.write_text("token: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config_file(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "tokens.yaml"
        path.write_text("token:\n  secret: s\n  algorithm: none\n")
        with pytest.raises(ConfigError, match="Invalid token configuration"):
            load_config_file(path)


class TestDefaultCodec:
    def test_cached(self, monkeypatch):
        monkeypatch.setenv("TOKENSMITH_SECRET", "env-secret")
        codec = default_codec()
        assert isinstance(codec, TokenCodec)
        assert default_codec() is codec
        assert codec.config.secret == "env-secret"

    def test_reset(self, monkeypatch):
        monkeypatch.setenv("TOKENSMITH_SECRET", "first")
        first = default_codec()
        monkeypatch.setenv("TOKENSMITH_SECRET", "second")
        reset_default_codec()
        second = default_codec()
        assert second is not first
        assert not second.verify(first.generate({}))
