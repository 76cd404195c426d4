"""Tests for configuration parsing and runtime updates."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

import coin_forge_mcp.config as cfg_mod
from coin_forge_mcp.config import ServerConfig, get_config, update_config

_ENV = (
    "GEMINI_MODEL",
    "GEMINI_THINKING_LEVEL",
    "GEMINI_TEMPERATURE",
    "FORGE_PROJECT_DB",
    "FORGE_AUDIO_SUMMARY",
    "FORGE_MAX_CHAT_SESSIONS",
    "MLFLOW_TRACKING_URI",
    "GEMINI_TRACING_ENABLED",
)


@pytest.fixture()
def bare_env(monkeypatch, clean_config):
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestFromEnv:
    def test_defaults(self, bare_env):
        cfg = ServerConfig.from_env()
        assert cfg.default_model == "gemini-3.1-pro-preview"
        assert cfg.default_thinking_level == "medium"
        assert cfg.audio_summary_enabled is False
        assert cfg.max_chat_sessions == 50
        assert cfg.project_db_path.endswith("projects.db")
        assert cfg.tracing_enabled is False

    def test_overrides(self, bare_env):
        bare_env.setenv("GEMINI_MODEL", "gemini-x")
        bare_env.setenv("GEMINI_THINKING_LEVEL", "HIGH")
        bare_env.setenv("FORGE_PROJECT_DB", "/tmp/forge.db")
        bare_env.setenv("FORGE_AUDIO_SUMMARY", "yes")
        bare_env.setenv("FORGE_MAX_CHAT_SESSIONS", "5")

        cfg = ServerConfig.from_env()

        assert cfg.default_model == "gemini-x"
        assert cfg.default_thinking_level == "high"
        assert cfg.project_db_path == "/tmp/forge.db"
        assert cfg.audio_summary_enabled is True
        assert cfg.max_chat_sessions == 5

    @pytest.mark.parametrize(
        ("flag", "uri", "expected"),
        [
            ("", "", False),
            ("", "http://127.0.0.1:5001", True),
            ("false", "http://127.0.0.1:5001", False),
            ("true", "", False),
        ],
    )
    def test_tracing_resolution(self, bare_env, flag, uri, expected):
        bare_env.setenv("GEMINI_TRACING_ENABLED", flag)
        bare_env.setenv("MLFLOW_TRACKING_URI", uri)
        assert ServerConfig.from_env().tracing_enabled is expected


class TestValidators:
    def test_rejects_unknown_thinking_level(self):
        with pytest.raises(ValidationError, match="Invalid thinking level"):
            ServerConfig(default_thinking_level="ultra")

    @pytest.mark.parametrize("field", ["max_chat_sessions", "chat_timeout_hours", "chat_max_turns"])
    def test_rejects_non_positive_limits(self, field):
        with pytest.raises(ValidationError):
            ServerConfig(**{field: 0})

    def test_rejects_out_of_range_temperature(self):
        with pytest.raises(ValidationError):
            ServerConfig(default_temperature=2.5)

    def test_rejects_zero_retry_delay(self):
        with pytest.raises(ValidationError):
            ServerConfig(retry_base_delay=0)


class TestSingleton:
    def test_get_config_is_cached(self, clean_config):
        assert get_config() is get_config()

    def test_update_config_ignores_none(self, clean_config):
        before = get_config().default_model
        cfg = update_config(default_model=None, default_temperature=0.3)
        assert cfg.default_model == before
        assert cfg.default_temperature == 0.3
        assert cfg_mod._config is cfg

    def test_update_config_validates(self, clean_config):
        with pytest.raises(ValidationError):
            update_config(chat_max_turns=0)
