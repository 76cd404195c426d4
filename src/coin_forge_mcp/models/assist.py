"""Assistive models — field suggestions, concept explanations, chat turns."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class GenerateSuggestion(BaseModel):
    """Write a fresh value for an empty form field."""

    kind: Literal["generate"] = "generate"
    field_name: str
    form_context: dict[str, str] = Field(default_factory=dict)


class ImproveSuggestion(BaseModel):
    """Rewrite the value the user already typed into a form field."""

    kind: Literal["improve"] = "improve"
    field_name: str
    form_context: dict[str, str] = Field(default_factory=dict)
    current_value: str = Field(min_length=1)


Suggestion = Annotated[Union[GenerateSuggestion, ImproveSuggestion], Field(discriminator="kind")]


class SuggestionOutput(BaseModel):
    suggestion: str = Field(description="The generated or improved text for the field, with no preamble.")


class ExplanationOutput(BaseModel):
    explanation: str = Field(description="A 2-3 sentence beginner-friendly explanation.")


class ChatSessionInfo(BaseModel):
    """Returned by ``chat_create_session``."""

    session_id: str
    project_id: str
    coin_name: str
    status: str = "created"


class ChatReply(BaseModel):
    """Returned by ``chat_ask``."""

    session_id: str
    answer: str
    turn_count: int
