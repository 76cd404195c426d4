"""Tests for the optional MLflow tracing integration."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

import coin_forge_mcp.tracing as mod


def _make_config(**overrides):
    """Build a mock ServerConfig with tracing-enabled defaults."""
    defaults = {
        "tracing_enabled": True,
        "mlflow_tracking_uri": "http://127.0.0.1:5001",
        "mlflow_experiment_name": "coin-forge-mcp",
    }
    defaults.update(overrides)
    cfg = MagicMock()
    for k, v in defaults.items():
        setattr(cfg, k, v)
    return cfg


@pytest.fixture()
def fake_mlflow(monkeypatch):
    """Pretend mlflow is installed and hand back the mock module."""
    mock_mlflow = MagicMock()
    monkeypatch.setattr(mod, "_HAS_MLFLOW", True)
    monkeypatch.setattr(mod, "mlflow", mock_mlflow, raising=False)
    return mock_mlflow


class TestIsEnabled:
    def test_true_when_installed_and_enabled(self, fake_mlflow):
        with patch("coin_forge_mcp.config.get_config", return_value=_make_config()):
            assert mod.is_enabled() is True

    def test_false_when_not_installed(self, monkeypatch):
        monkeypatch.setattr(mod, "_HAS_MLFLOW", False)
        assert mod.is_enabled() is False

    def test_false_when_config_disabled(self, fake_mlflow):
        cfg = _make_config(tracing_enabled=False)
        with patch("coin_forge_mcp.config.get_config", return_value=cfg):
            assert mod.is_enabled() is False


class TestTraceDecorator:
    def test_identity_when_disabled(self, monkeypatch):
        monkeypatch.setattr(mod, "_HAS_MLFLOW", False)

        async def tool():
            return 1

        assert mod.trace(name="tool", span_type="TOOL")(tool) is tool
        assert mod.trace(tool) is tool

    def test_delegates_to_mlflow_when_enabled(self, fake_mlflow):
        async def tool():
            return 1

        with patch("coin_forge_mcp.config.get_config", return_value=_make_config()):
            mod.trace(tool, name="forge_generate", span_type="TOOL")

        fake_mlflow.trace.assert_called_once_with(
            tool, name="forge_generate", span_type="TOOL", attributes=None,
        )


class TestSetupAndShutdown:
    def test_setup_calls_autolog(self, fake_mlflow):
        with patch("coin_forge_mcp.config.get_config", return_value=_make_config()):
            mod.setup()

        fake_mlflow.set_tracking_uri.assert_called_once_with("http://127.0.0.1:5001")
        fake_mlflow.set_experiment.assert_called_once_with("coin-forge-mcp")
        fake_mlflow.gemini.autolog.assert_called_once()

    def test_setup_noop_when_disabled(self, monkeypatch):
        mock_mlflow = MagicMock()
        monkeypatch.setattr(mod, "_HAS_MLFLOW", False)
        monkeypatch.setattr(mod, "mlflow", mock_mlflow, raising=False)

        mod.setup()

        mock_mlflow.set_tracking_uri.assert_not_called()

    def test_setup_swallows_exceptions(self, fake_mlflow):
        fake_mlflow.set_experiment.side_effect = Exception("connection refused")

        with patch("coin_forge_mcp.config.get_config", return_value=_make_config()):
            mod.setup()

        fake_mlflow.gemini.autolog.assert_not_called()

    def test_shutdown_flushes(self, fake_mlflow):
        with patch("coin_forge_mcp.config.get_config", return_value=_make_config()):
            mod.shutdown()

        fake_mlflow.flush_trace_async_logging.assert_called_once()
