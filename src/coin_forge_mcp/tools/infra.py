"""Infrastructure tools — runtime configuration on a FastMCP sub-server."""

from __future__ import annotations

from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..config import MODEL_PRESETS, ServerConfig, get_config, update_config
from ..errors import make_tool_error
from ..tracing import trace
from ..types import ModelPreset, ThinkingLevel

infra_server = FastMCP("infra")
_SECRET_FIELDS = {"gemini_api_key", "infra_admin_token"}


def _current_settings() -> dict:
    """Live config minus the API key and admin token."""
    return get_config().model_dump(exclude=_SECRET_FIELDS)


def _check_may_mutate(auth_token: str | None) -> None:
    cfg = get_config()
    if not cfg.infra_mutations_enabled:
        raise PermissionError(
            "Changing settings is disabled. Set INFRA_MUTATIONS_ENABLED=true to allow infra_configure changes."
        )
    if cfg.infra_admin_token and auth_token != cfg.infra_admin_token:
        raise PermissionError("infra_configure changes need a valid auth_token.")


def _requested_changes(
    preset: str | None,
    model: str | None,
    thinking_level: str | None,
    temperature: float | None,
) -> dict[str, object]:
    """Translate tool arguments into ServerConfig field overrides."""
    changes: dict[str, object] = {}
    if preset is not None:
        models = MODEL_PRESETS.get(preset)
        if models is None:
            raise ValueError(f"Unknown preset '{preset}'. Available: {', '.join(sorted(MODEL_PRESETS))}")
        changes.update(default_model=models["default_model"], flash_model=models["flash_model"])
    if model is not None:
        changes["default_model"] = model
    if thinking_level is not None:
        changes["default_thinking_level"] = thinking_level
    if temperature is not None:
        changes["default_temperature"] = temperature
    return changes


def _matching_preset(cfg: ServerConfig) -> str | None:
    for name, models in MODEL_PRESETS.items():
        if (cfg.default_model, cfg.flash_model) == (models["default_model"], models["flash_model"]):
            return name
    return None


@infra_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
@trace(name="infra_configure", span_type="TOOL")
async def infra_configure(
    preset: Annotated[ModelPreset | None, Field(
        description='Named model preset: "best", "stable" (2.5 GA models) or "budget"',
    )] = None,
    model: Annotated[str | None, Field(description="Gemini model ID override (takes precedence over preset)")] = None,
    thinking_level: ThinkingLevel | None = None,
    temperature: Annotated[float | None, Field(ge=0.0, le=2.0, description="Sampling temperature")] = None,
    auth_token: Annotated[str | None, Field(
        description="Optional infra auth token (required when INFRA_ADMIN_TOKEN is configured)",
    )] = None,
) -> dict:
    """Show or change the generation models and sampling settings.

    Called with no arguments it only reports the current config. Changes
    apply to every later generation run.

    Args:
        preset: Named model preset, resolving to a default_model + flash_model pair.
        model: Gemini model ID (takes precedence over the preset's default_model).
        thinking_level: Default thinking depth for text artifacts.
        temperature: Sampling temperature (0.0-2.0).

    Returns:
        Dict with current_config, active_preset, and available_presets.
    """
    try:
        changes = _requested_changes(preset, model, thinking_level, temperature)
        if changes:
            _check_may_mutate(auth_token)
            cfg = update_config(**changes)
        else:
            cfg = get_config()
    except Exception as exc:
        return make_tool_error(exc)

    return {
        "current_config": _current_settings(),
        "active_preset": _matching_preset(cfg),
        "available_presets": {name: models["label"] for name, models in MODEL_PRESETS.items()},
    }
