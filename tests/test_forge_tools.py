"""Tests for the forge_generate / forge_task_graph tools."""

from __future__ import annotations

import sqlite3
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

import coin_forge_mcp.tools.forge as forge_mod
from coin_forge_mcp.errors import GenerationFailure
from coin_forge_mcp.projects_db import get_project_db
from tests.conftest import NOVACOIN, StubBackend, unwrap_tool

forge_generate = unwrap_tool(forge_mod.forge_generate)
forge_task_graph = unwrap_tool(forge_mod.forge_task_graph)


@pytest.fixture()
def stub(monkeypatch):
    """Swap the Gemini backend for the deterministic stub."""
    backend = StubBackend()
    monkeypatch.setattr(forge_mod, "GeminiBackend", lambda: backend)
    return backend


class TestForgeGenerate:
    async def test_success(self, stub):
        out = await forge_generate(NOVACOIN)

        assert "error" not in out
        assert len(out["run_id"]) == 12
        assert out["artifacts"]["whitepaper_content"] == "[whitepaper:whitepaper_content]"
        assert out["tasks"]["node_setup"]["status"] == "success"
        assert "project_id" not in out
        assert out["events"][0] == {"task": "pitch_deck", "status": "pending", "error": None}

    async def test_json_string_params(self, stub):
        import json

        out = await forge_generate(json.dumps(NOVACOIN))
        assert "node_setup_instructions" in out["artifacts"]

    async def test_validation_error_lists_fields(self, stub):
        out = await forge_generate({**NOVACOIN, "coinAbbreviation": "TOOLONG", "blockReward": 0})

        assert out["category"] == "VALIDATION_FAILED"
        assert out["retryable"] is False
        fields = {e["field"] for e in out["field_errors"]}
        assert fields == {"coinAbbreviation", "blockReward"}
        assert stub.calls == []

    async def test_run_failure_reports_partial_results(self, stub):
        stub.failures["genesis_block"] = GenerationFailure("genesis_block", "quota exhausted")

        out = await forge_generate(NOVACOIN)

        assert out["category"] == "RUN_FAILED"
        assert out["retryable"] is True
        assert out["failed_task"] == "genesis_block"
        assert out["failed_tasks"] == ["genesis_block"]
        assert out["tasks"]["genesis_block"]["status"] == "error"
        assert out["tasks"]["node_setup"]["status"] == "pending"
        assert "whitepaper_content" in out["partial_artifacts"]
        assert "Failed at step: genesis_block" in out["error"]

    async def test_save_for_user(self, stub):
        out = await forge_generate(NOVACOIN, save_for_user="alice")

        project = get_project_db().get("alice", out["project_id"])
        assert project is not None
        assert project.artifacts == out["artifacts"]
        assert project.params["coin_name"] == "NovaCoin"

    async def test_save_failure_keeps_artifacts(self, stub, monkeypatch):
        broken = MagicMock()
        broken.save.side_effect = sqlite3.OperationalError("database is locked")
        monkeypatch.setattr(forge_mod, "get_project_db", lambda: broken)

        out = await forge_generate(NOVACOIN, save_for_user="alice")

        assert "project_id" not in out
        assert out["artifacts"]["whitepaper_content"] == "[whitepaper:whitepaper_content]"
        assert out["save_error"]["category"] == "UNKNOWN"
        assert "database is locked" in out["save_error"]["error"]

    async def test_failed_run_is_not_saved(self, stub):
        stub.failures["logo"] = GenerationFailure("logo", "empty")

        out = await forge_generate(NOVACOIN, save_for_user="alice")

        assert out["category"] == "RUN_FAILED"
        assert get_project_db().list_for_user("alice") == []

    async def test_audio_defaults_to_config(self, stub, monkeypatch):
        monkeypatch.setenv("FORGE_AUDIO_SUMMARY", "true")

        out = await forge_generate(NOVACOIN)

        assert out["artifacts"]["audio_data_uri"].startswith("data:audio/wav;base64,")

    async def test_audio_explicit_off(self, stub, monkeypatch):
        monkeypatch.setenv("FORGE_AUDIO_SUMMARY", "true")
        out = await forge_generate(NOVACOIN, include_audio=False)
        assert "audio_data_uri" not in out["artifacts"]

    async def test_reports_mcp_progress(self, stub):
        ctx = MagicMock()
        ctx.report_progress = AsyncMock()

        with patch.object(forge_mod, "get_context", return_value=ctx):
            out = await forge_generate(NOVACOIN)

        assert "error" not in out
        calls = ctx.report_progress.await_args_list
        # running + success per task; pending events are not sent
        assert len(calls) == len(out["tasks"]) * 2
        last = calls[-1].args
        assert last[0] == last[1] == len(out["tasks"])

    async def test_uses_gemini_by_default(self, mock_gemini_client):
        mock_gemini_client["generate_structured"].side_effect = RuntimeError("403 PERMISSION_DENIED")
        mock_gemini_client["generate_image"].return_value = (b"", "")

        out = await forge_generate(NOVACOIN)

        assert out["category"] == "RUN_FAILED"
        assert out["tasks"]["logo"]["error"] == "logo: Image generation failed to produce a result."


class TestForgeTaskGraph:
    async def test_describes_dag(self):
        out = await forge_task_graph()
        assert out["count"] == 13
        assert "node_setup" not in out["roots"]
        node = next(t for t in out["tasks"] if t["name"] == "node_setup")
        assert node["depends_on"] == ["genesis_block", "network_config", "compilation"]

    async def test_with_audio(self):
        out = await forge_task_graph(include_audio=True)
        assert out["count"] == 14
        assert "audio_summary" in out["roots"]
