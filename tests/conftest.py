"""Shared test fixtures for coin-forge-mcp."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import BaseModel

from coin_forge_mcp.models.params import ProjectParameters

NOVACOIN = {
    "coinName": "NovaCoin",
    "coinAbbreviation": "NVC",
    "blockReward": 50,
    "coinSupply": 21_000_000,
    "consensusMechanism": "SHA-256 - Proof of Work",
    "targetSpacingInMinutes": 10,
}


def unwrap_tool(tool: Any) -> Any:
    """Extract the raw coroutine from a FastMCP FunctionTool, if wrapped.

    FastMCP 2.x wraps @server.tool functions in FunctionTool (not callable).
    FastMCP 3.x preserves the original function. This helper works with both.
    """
    return getattr(tool, "fn", tool)


class StubBackend:
    """Deterministic backend: echoes ``[template:field]`` for every output field.

    Media fields get a minimal data URI, and node setup echoes its upstream
    inputs so tests can prove data flowed through the DAG. ``delays`` holds
    per-template sleeps; ``failures`` maps templates to exceptions to raise.
    """

    def __init__(
        self,
        delays: dict[str, float] | None = None,
        failures: dict[str, Exception] | None = None,
        gates: dict[str, asyncio.Event] | None = None,
    ) -> None:
        self.delays = delays or {}
        self.failures = failures or {}
        self.gates = gates or {}
        self.calls: list[tuple[str, BaseModel]] = []

    async def invoke(self, template: str, inputs: BaseModel, output: type[BaseModel]) -> BaseModel:
        self.calls.append((template, inputs))
        if template in self.gates:
            await self.gates[template].wait()
        await asyncio.sleep(self.delays.get(template, 0))
        if template in self.failures:
            raise self.failures[template]
        values = {}
        for field in output.model_fields:
            if field == "logo_data_uri":
                values[field] = "data:image/png;base64,AAAA"
            elif field == "audio_data_uri":
                values[field] = "data:audio/wav;base64,AAAA"
            elif field == "node_setup_instructions":
                values[field] = (
                    f"[node_setup] genesis={inputs.genesis_block_code} "
                    f"network={inputs.network_parameters} "
                    f"compile={inputs.compilation_instructions}"
                )
            else:
                values[field] = f"[{template}:{field}]"
        return output(**values)


@pytest.fixture(autouse=True, scope="session")
def _unwrap_fastmcp_tools():
    """Patch tool modules so FunctionTool objects become directly callable.

    FastMCP 2.x wraps @server.tool in FunctionTool (not callable); 3.x
    preserves the function. This fixture unwraps at the module level so
    tests can ``await tool_func(...)`` regardless of FastMCP version.
    """
    import importlib
    import pkgutil

    import coin_forge_mcp.tools as tools_pkg

    modules = [
        importlib.import_module(info.name)
        for info in pkgutil.walk_packages(tools_pkg.__path__, tools_pkg.__name__ + ".")
    ]
    for mod in modules:
        for name in list(vars(mod)):
            obj = getattr(mod, name, None)
            if obj is not None and hasattr(obj, "fn") and not callable(obj):
                setattr(mod, name, obj.fn)


@pytest.fixture(autouse=True)
def _set_dummy_api_key(monkeypatch):
    """Ensure tests never hit real Gemini API."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-key-not-real")


@pytest.fixture(autouse=True)
def _disable_tracing(monkeypatch):
    """Disable MLflow tracing in all tests to avoid real tracking-server calls."""
    monkeypatch.setenv("GEMINI_TRACING_ENABLED", "false")


@pytest.fixture(autouse=True)
def _isolate_dotenv(tmp_path, monkeypatch):
    """Prevent tests from loading the user's real ~/.config/coin-forge-mcp/.env."""
    monkeypatch.setattr(
        "coin_forge_mcp.dotenv.DEFAULT_ENV_PATH",
        tmp_path / "nonexistent.env",
    )


@pytest.fixture(autouse=True)
def _isolate_project_db(tmp_path, monkeypatch):
    """Give every test its own SQLite project store and an empty chat store."""
    import coin_forge_mcp.config as cfg_mod
    import coin_forge_mcp.projects_db as db_mod
    from coin_forge_mcp.sessions import chat_store

    monkeypatch.setenv("FORGE_PROJECT_DB", str(tmp_path / "projects.db"))
    db_mod.close_project_db()
    cfg_mod._config = None
    chat_store.clear()
    yield
    db_mod.close_project_db()
    cfg_mod._config = None
    chat_store.clear()


@pytest.fixture()
def mock_gemini_client():
    """Patch GeminiClient.get() and every generate_* classmethod for unit tests."""
    with (
        patch("coin_forge_mcp.client.GeminiClient.get") as mock_get,
        patch(
            "coin_forge_mcp.client.GeminiClient.generate", new_callable=AsyncMock
        ) as mock_gen,
        patch(
            "coin_forge_mcp.client.GeminiClient.generate_structured",
            new_callable=AsyncMock,
        ) as mock_structured,
        patch(
            "coin_forge_mcp.client.GeminiClient.generate_image", new_callable=AsyncMock
        ) as mock_image,
        patch(
            "coin_forge_mcp.client.GeminiClient.generate_speech", new_callable=AsyncMock
        ) as mock_speech,
    ):
        client = MagicMock()
        mock_get.return_value = client
        yield {
            "get": mock_get,
            "generate": mock_gen,
            "generate_structured": mock_structured,
            "generate_image": mock_image,
            "generate_speech": mock_speech,
            "client": client,
        }


@pytest.fixture()
def clean_config():
    """Reset the config singleton between tests."""
    import coin_forge_mcp.config as cfg_mod

    cfg_mod._config = None
    yield
    cfg_mod._config = None


@pytest.fixture()
def novacoin() -> ProjectParameters:
    return ProjectParameters.model_validate(NOVACOIN)


@pytest.fixture()
def stub_backend() -> StubBackend:
    return StubBackend()
