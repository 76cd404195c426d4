"""Saved-project tools — 4 tools on a FastMCP sub-server."""

from __future__ import annotations

from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..errors import ProjectNotFoundError, make_tool_error
from ..models.params import ProjectParameters
from ..projects_db import get_project_db
from ..tracing import trace
from ..types import ProjectId, UserId, coerce_json_param

projects_server = FastMCP("projects")


@projects_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    )
)
@trace(name="project_save", span_type="TOOL")
async def project_save(
    user_id: UserId,
    params: Annotated[dict | str, Field(description="Project parameters the artifacts were generated from")],
    artifacts: Annotated[dict | str, Field(description="Artifacts from forge_generate, keyed by output field")],
) -> dict:
    """Save a generated project for a user.

    Args:
        user_id: Owner of the project.
        params: Project parameters (validated before saving).
        artifacts: The artifacts dict returned by forge_generate.

    Returns:
        Dict with project_id, user_id and created_at.
    """
    try:
        parsed = ProjectParameters.model_validate(coerce_json_param(params, dict))
        bundle = coerce_json_param(artifacts, dict)
        if not isinstance(bundle, dict) or not bundle:
            raise ValueError("artifacts must be a non-empty object of field name to content")
        project = get_project_db().save(user_id, parsed, {str(k): str(v) for k, v in bundle.items()})
    except Exception as exc:
        return make_tool_error(exc)
    return {
        "project_id": project.project_id,
        "user_id": project.user_id,
        "created_at": project.created_at.isoformat(),
    }


@projects_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=False))
@trace(name="project_list", span_type="TOOL")
async def project_list(user_id: UserId) -> dict:
    """List a user's saved projects, newest first.

    Returns:
        Dict with user_id, projects (id, coin name, ticker, created_at) and count.
    """
    try:
        summaries = get_project_db().list_for_user(user_id)
    except Exception as exc:
        return make_tool_error(exc)
    return {
        "user_id": user_id,
        "projects": [s.model_dump(mode="json") for s in summaries],
        "count": len(summaries),
    }


@projects_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=False))
@trace(name="project_get", span_type="TOOL")
async def project_get(
    user_id: UserId,
    project_id: ProjectId,
    include_media: Annotated[bool, Field(
        description="Include base64 data URIs (logo, audio); they can be large",
    )] = True,
) -> dict:
    """Fetch one saved project with its parameters and artifacts.

    Returns:
        Dict with project_id, user_id, params, artifacts and created_at.
    """
    try:
        project = get_project_db().get(user_id, project_id)
        if project is None:
            raise ProjectNotFoundError(f"Project {project_id} not found")
    except Exception as exc:
        return make_tool_error(exc)

    data = project.model_dump(mode="json")
    if not include_media:
        data["artifacts"] = {
            k: v for k, v in project.artifacts.items() if not v.startswith("data:")
        }
    return data


@projects_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    )
)
@trace(name="project_delete", span_type="TOOL")
async def project_delete(user_id: UserId, project_id: ProjectId) -> dict:
    """Delete one of the user's saved projects.

    Returns:
        Dict with project_id and deleted (False when nothing matched).
    """
    try:
        deleted = get_project_db().delete(user_id, project_id)
    except Exception as exc:
        return make_tool_error(exc)
    return {"project_id": project_id, "deleted": deleted}
