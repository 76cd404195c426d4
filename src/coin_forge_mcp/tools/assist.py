"""Wizard assistant tools — 2 tools on a FastMCP sub-server."""

from __future__ import annotations

from typing import Annotated

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..assist import explain_concept, make_suggestion, suggest_text
from ..errors import make_tool_error
from ..models.assist import ImproveSuggestion
from ..tracing import trace
from ..types import ConceptName, FieldName, coerce_json_param

assist_server = FastMCP("assist")


@assist_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="forge_explain", span_type="TOOL")
async def forge_explain(concept: ConceptName) -> dict:
    """Explain a cryptocurrency concept from the wizard in plain language.

    Common wizard concepts (Block Reward, Coinbase Maturity, Target Spacing,
    ...) are answered from a built-in glossary; anything else goes to Gemini.

    Args:
        concept: The concept to explain.

    Returns:
        Dict with concept, explanation and source ("predefined" or "gemini").
    """
    try:
        explanation, source = await explain_concept(concept)
    except Exception as exc:
        return make_tool_error(exc)
    return {"concept": concept, "explanation": explanation, "source": source}


@assist_server.tool(annotations=ToolAnnotations(readOnlyHint=True, openWorldHint=True))
@trace(name="forge_suggest", span_type="TOOL")
async def forge_suggest(
    field_name: FieldName,
    form_context: Annotated[dict | str | None, Field(
        description="Other wizard answers so far, as {field label: value}",
    )] = None,
    current_value: Annotated[str | None, Field(
        description="Text already in the field; when given, it is improved instead of replaced",
    )] = None,
) -> dict:
    """Suggest text for a wizard field: write it from scratch or improve the user's draft.

    Args:
        field_name: The field to fill, e.g. "Tagline".
        form_context: The rest of the form, used as project context.
        current_value: The user's draft, if any.

    Returns:
        Dict with field_name, mode ("generate" or "improve") and suggestion.
    """
    try:
        context = coerce_json_param(form_context, dict) or {}
        if not isinstance(context, dict):
            raise ValueError("form_context must be an object of field label to value")
        suggestion = make_suggestion(
            field_name,
            {str(k): str(v) for k, v in context.items()},
            current_value,
        )
        text = await suggest_text(suggestion)
    except Exception as exc:
        return make_tool_error(exc)
    return {
        "field_name": field_name,
        "mode": "improve" if isinstance(suggestion, ImproveSuggestion) else "generate",
        "suggestion": text,
    }
