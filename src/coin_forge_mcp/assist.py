"""Wizard helpers: concept explanations and field-text suggestions."""

from __future__ import annotations

import logging

from .client import GeminiClient
from .config import get_config
from .models.assist import (
    ExplanationOutput,
    GenerateSuggestion,
    ImproveSuggestion,
    Suggestion,
    SuggestionOutput,
)
from .prompts.assist import (
    EXPLAIN_CONCEPT,
    PREDEFINED_EXPLANATIONS,
    SUGGEST_GENERATE,
    SUGGEST_IMPROVE,
)

logger = logging.getLogger(__name__)

_PREDEFINED_BY_KEY = {name.casefold(): text for name, text in PREDEFINED_EXPLANATIONS.items()}


def predefined_explanation(concept: str) -> str | None:
    """Return the canned explanation for *concept* (case-insensitive), if any."""
    return _PREDEFINED_BY_KEY.get(concept.strip().casefold())


async def explain_concept(concept: str) -> tuple[str, str]:
    """Explain a wizard concept in plain language.

    Returns:
        ``(explanation, source)`` where source is ``"predefined"`` or ``"gemini"``.
    """
    canned = predefined_explanation(concept)
    if canned is not None:
        return canned, "predefined"

    logger.debug("No canned explanation for %r, asking Gemini", concept)
    result = await GeminiClient.generate_structured(
        EXPLAIN_CONCEPT.format(concept=concept.strip()),
        schema=ExplanationOutput,
        model=get_config().flash_model,
        thinking_level="low",
    )
    return result.explanation, "gemini"


def _format_context(form_context: dict[str, str]) -> str:
    lines = [f"- {key}: {value}" for key, value in form_context.items() if str(value).strip()]
    return "\n".join(lines) if lines else "(no other fields filled in yet)"


def build_suggestion_prompt(suggestion: Suggestion) -> str:
    """Pick the generate or improve prompt for *suggestion* and fill it in."""
    context = _format_context(suggestion.form_context)
    if isinstance(suggestion, ImproveSuggestion):
        return SUGGEST_IMPROVE.format(
            project_context=context,
            field_name=suggestion.field_name,
            current_value=suggestion.current_value,
        )
    return SUGGEST_GENERATE.format(project_context=context, field_name=suggestion.field_name)


def make_suggestion(
    field_name: str,
    form_context: dict[str, str] | None = None,
    current_value: str | None = None,
) -> Suggestion:
    """Decide between generating and improving once, at the call site."""
    context = form_context or {}
    if current_value and current_value.strip():
        return ImproveSuggestion(field_name=field_name, form_context=context, current_value=current_value)
    return GenerateSuggestion(field_name=field_name, form_context=context)


async def suggest_text(suggestion: Suggestion) -> str:
    """Generate or improve the text of one wizard field."""
    result = await GeminiClient.generate_structured(
        build_suggestion_prompt(suggestion),
        schema=SuggestionOutput,
        model=get_config().flash_model,
        thinking_level="low",
    )
    return result.suggestion.strip().strip('"')
