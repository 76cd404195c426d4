"""Launch-kit generation tools — 2 tools on a FastMCP sub-server."""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

from fastmcp import FastMCP
from fastmcp.server.dependencies import get_context
from mcp.types import ToolAnnotations
from pydantic import Field, ValidationError

from ..backend import GeminiBackend
from ..config import get_config
from ..errors import RunFailure, make_run_failure, make_tool_error
from ..models.params import ProjectParameters
from ..orchestrator import GenerationOrchestrator, TaskStatus
from ..projects_db import get_project_db
from ..tasks import build_task_graph
from ..tracing import trace
from ..types import UserId, coerce_json_param

logger = logging.getLogger(__name__)
forge_server = FastMCP("forge")


def _active_context():
    """Return the MCP request context, or None outside a request."""
    try:
        return get_context()
    except RuntimeError:
        return None


class _ProgressReporter:
    """Task observer that records the event timeline and mirrors it as MCP progress.

    The observer is synchronous, so progress notifications are scheduled as
    tasks and awaited once the run has settled.
    """

    def __init__(self, total: int) -> None:
        self.total = total
        self.finished = 0
        self.events: list[dict] = []
        self._ctx = _active_context()
        self._sends: list[asyncio.Future] = []

    def __call__(self, name: str, status: TaskStatus, error: str | None) -> None:
        self.events.append({"task": name, "status": status.value, "error": error})
        if status in (TaskStatus.SUCCESS, TaskStatus.ERROR):
            self.finished += 1
        if self._ctx is None or status is TaskStatus.PENDING:
            return
        message = f"{name}: {status.value}" + (f" ({error})" if error else "")
        self._sends.append(
            asyncio.ensure_future(self._ctx.report_progress(self.finished, self.total, message))
        )

    async def drain(self) -> None:
        results = await asyncio.gather(*self._sends, return_exceptions=True)
        failed = sum(isinstance(r, Exception) for r in results)
        if failed:
            logger.debug("%d progress notification(s) failed to send", failed)


def _validation_error(exc: ValidationError) -> dict:
    payload = make_tool_error(exc)
    payload["field_errors"] = [
        {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
        for err in exc.errors(include_url=False)
    ]
    return payload


@forge_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=True,
    )
)
@trace(name="forge_generate", span_type="TOOL")
async def forge_generate(
    params: Annotated[dict | str, Field(
        description=(
            "Project parameters. Required: coinName, coinAbbreviation, consensusMechanism. "
            "Optional: blockReward, blockHalving, coinSupply, targetSpacingInMinutes, "
            "missionStatement, brandVoice, tokenUtility, websiteUrl, ..."
        ),
    )],
    include_audio: Annotated[bool | None, Field(
        description="Also narrate a spoken summary (defaults to FORGE_AUDIO_SUMMARY)",
    )] = None,
    save_for_user: Annotated[UserId | None, Field(
        description="When set, persist the finished project for this user",
    )] = None,
) -> dict:
    """Generate the full launch kit for a new cryptocurrency project.

    Independent artifacts (whitepaper, tokenomics, logo, genesis block,
    network config, ...) are generated concurrently; node setup instructions
    are generated once the genesis block, network config and compilation
    guidance exist. Progress is reported per task while the run is live.

    Args:
        params: Wizard answers, camelCase or snake_case keys.
        include_audio: Add the spoken audio summary task.
        save_for_user: Owner id to save the finished project under.

    Returns:
        Dict with run_id, artifacts, tasks, events and (when saved) project_id.
        On failure, a tool error with failed_task, per-task statuses and
        partial_artifacts.
    """
    try:
        parsed = ProjectParameters.model_validate(coerce_json_param(params, dict))
    except ValidationError as exc:
        return _validation_error(exc)

    use_audio = include_audio if include_audio is not None else get_config().audio_summary_enabled
    graph = build_task_graph(include_audio=use_audio)
    reporter = _ProgressReporter(len(graph))
    orchestrator = GenerationOrchestrator(graph, GeminiBackend())

    try:
        result = await orchestrator.run(parsed, on_task_update=reporter)
    except RunFailure as failure:
        await reporter.drain()
        payload = make_run_failure(failure)
        payload["events"] = reporter.events
        return payload
    except Exception as exc:
        await reporter.drain()
        return make_tool_error(exc)
    await reporter.drain()

    response = result.model_dump(mode="json")
    response["events"] = reporter.events
    if save_for_user:
        try:
            project = get_project_db().save(save_for_user, parsed, result.artifacts)
            response["project_id"] = project.project_id
        except Exception as exc:
            logger.warning("Generated run %s but saving failed: %s", result.run_id, exc)
            response["save_error"] = make_tool_error(exc)
    return response


@forge_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=False))
@trace(name="forge_task_graph", span_type="TOOL")
async def forge_task_graph(
    include_audio: Annotated[bool, Field(description="Include the optional audio summary task")] = False,
) -> dict:
    """Describe the generation steps and their dependencies.

    Lets a client render the full checklist before calling forge_generate.

    Returns:
        Dict with tasks (name, label, depends_on, output_fields), roots and count.
    """
    graph = build_task_graph(include_audio=include_audio)
    return {
        "tasks": graph.describe(),
        "roots": [task.name for task in graph.roots()],
        "count": len(graph),
    }
