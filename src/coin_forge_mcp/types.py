"""Shared type aliases and helpers for tool parameters."""

from __future__ import annotations

import json
from typing import Annotated, Literal

from pydantic import Field


def coerce_json_param(value: str | dict | list | None, expected_type: type) -> dict | list | None:
    """Undo JSON-string encoding of an object/array tool argument.

    Some MCP clients send ``{"coinName": ...}`` as a string. Values that do
    not decode to *expected_type* come back unchanged, so the caller's own
    validation reports them.
    """
    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except json.JSONDecodeError:
            return value
        if isinstance(decoded, expected_type):
            return decoded
    return value


# ── Literal enums ────────────────────────────────────────────────────────────

ThinkingLevel = Literal["minimal", "low", "medium", "high"]
ModelPreset = Literal["best", "stable", "budget"]

# ── Annotated aliases ────────────────────────────────────────────────────────

UserId = Annotated[str, Field(min_length=1, max_length=128, description="Owner identity for stored projects")]
ProjectId = Annotated[str, Field(min_length=1, description="Project ID returned by project_save or forge_generate")]
SessionId = Annotated[str, Field(min_length=1, description="Chat session ID returned by chat_create_session")]
ConceptName = Annotated[str, Field(
    min_length=2,
    max_length=200,
    description='Concept to explain, e.g. "Block Halving" or "Coinbase Maturity"',
)]
FieldName = Annotated[str, Field(
    min_length=1,
    max_length=100,
    description='Human-readable wizard field name, e.g. "Mission Statement" or "Tagline"',
)]
