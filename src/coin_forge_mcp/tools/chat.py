"""Project chat tools — ask follow-up questions about a saved project."""

from __future__ import annotations

import logging
from typing import Annotated

from fastmcp import FastMCP
from google.genai import types
from mcp.types import ToolAnnotations
from pydantic import Field

from ..client import GeminiClient
from ..errors import ProjectNotFoundError, SessionNotFoundError, make_tool_error
from ..models.assist import ChatReply, ChatSessionInfo
from ..models.project import Project
from ..projects_db import get_project_db
from ..prompts.assist import CHAT_SYSTEM
from ..sessions import chat_store
from ..tracing import trace
from ..types import ProjectId, SessionId, UserId

logger = logging.getLogger(__name__)
chat_server = FastMCP("chat")

_MISSING = "(not generated for this project)"


def _chat_instruction(project: Project) -> str:
    """Embed the project's technical artifacts in the chat system instruction."""
    a = project.artifacts
    return CHAT_SYSTEM.format(
        coin_name=project.params.get("coin_name", ""),
        ticker=project.params.get("coin_abbreviation", ""),
        readme_content=a.get("readme_content", _MISSING),
        install_script=a.get("install_script", _MISSING),
        network_configuration_file=a.get("network_configuration_file", _MISSING),
        genesis_block_code=a.get("genesis_block_code", _MISSING),
    )


@chat_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    )
)
@trace(name="chat_create_session", span_type="TOOL")
async def chat_create_session(user_id: UserId, project_id: ProjectId) -> dict:
    """Start a Q&A session about one of the user's saved projects.

    The session knows the project's README, install script, network
    configuration and genesis block code.

    Returns:
        Dict with session_id, project_id, coin_name and status.
    """
    try:
        project = get_project_db().get(user_id, project_id)
        if project is None:
            raise ProjectNotFoundError(f"Project {project_id} not found")
    except Exception as exc:
        return make_tool_error(exc)

    session = chat_store.create(
        user_id,
        project_id,
        coin_name=project.params.get("coin_name", ""),
        system_instruction=_chat_instruction(project),
    )
    return ChatSessionInfo(
        session_id=session.session_id,
        project_id=project_id,
        coin_name=session.coin_name,
    ).model_dump()


@chat_server.tool(
    annotations=ToolAnnotations(
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=True,
    )
)
@trace(name="chat_ask", span_type="TOOL")
async def chat_ask(
    session_id: SessionId,
    question: Annotated[str, Field(min_length=1, max_length=4000, description="Question about the project")],
) -> dict:
    """Ask a follow-up question within an existing chat session.

    Args:
        session_id: Session ID returned by chat_create_session.
        question: What the user wants to know, e.g. "How do I start mining?".

    Returns:
        Dict with session_id, answer and turn_count.
    """
    session = chat_store.get(session_id)
    if session is None:
        return make_tool_error(SessionNotFoundError(f"Session {session_id} not found or expired"))

    user_content = types.Content(role="user", parts=[types.Part(text=question)])
    try:
        answer = await GeminiClient.generate(
            [*session.history, user_content],
            system_instruction=session.system_instruction,
            thinking_level="low",
        )
        model_content = types.Content(role="model", parts=[types.Part(text=answer)])
        turn_count = chat_store.add_turn(session_id, user_content, model_content)
    except KeyError:
        return make_tool_error(SessionNotFoundError(f"Session {session_id} expired while answering"))
    except Exception as exc:
        return make_tool_error(exc)

    logger.debug("Chat %s: turn %d", session_id, turn_count)
    return ChatReply(session_id=session_id, answer=answer, turn_count=turn_count).model_dump()
