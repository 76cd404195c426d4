"""Tests for concept explanations and field suggestions."""

from __future__ import annotations

import pytest

import coin_forge_mcp.tools.assist as assist_mod
from coin_forge_mcp.assist import build_suggestion_prompt, make_suggestion, predefined_explanation
from coin_forge_mcp.models.assist import (
    ExplanationOutput,
    GenerateSuggestion,
    ImproveSuggestion,
    SuggestionOutput,
)
from tests.conftest import unwrap_tool

forge_explain = unwrap_tool(assist_mod.forge_explain)
forge_suggest = unwrap_tool(assist_mod.forge_suggest)


class TestSuggestionVariants:
    def test_blank_value_means_generate(self):
        assert isinstance(make_suggestion("Tagline", {}, "   "), GenerateSuggestion)
        assert isinstance(make_suggestion("Tagline", None, None), GenerateSuggestion)

    def test_existing_value_means_improve(self):
        suggestion = make_suggestion("Tagline", {"Project Name": "NovaCoin"}, "fast coin")
        assert isinstance(suggestion, ImproveSuggestion)
        assert suggestion.current_value == "fast coin"

    def test_improve_prompt_quotes_current_value(self):
        prompt = build_suggestion_prompt(
            ImproveSuggestion(field_name="Tagline", form_context={"Project Name": "NovaCoin"}, current_value="fast coin"),
        )
        assert '"fast coin"' in prompt
        assert "- Project Name: NovaCoin" in prompt
        assert "Field to improve: Tagline" in prompt

    def test_generate_prompt_without_context(self):
        prompt = build_suggestion_prompt(GenerateSuggestion(field_name="Mission Statement"))
        assert "(no other fields filled in yet)" in prompt
        assert "Field to write: Mission Statement" in prompt

    def test_empty_current_value_rejected_by_model(self):
        with pytest.raises(ValueError):
            ImproveSuggestion(field_name="Tagline", current_value="")


class TestForgeExplain:
    def test_predefined_lookup_is_case_insensitive(self):
        assert predefined_explanation("block halving") == predefined_explanation("Block Halving")
        assert predefined_explanation("Quantum Sharding") is None

    async def test_predefined_concept_skips_gemini(self, mock_gemini_client):
        out = await forge_explain("Coinbase Maturity")

        assert out["source"] == "predefined"
        assert "blocks that must pass" in out["explanation"]
        mock_gemini_client["generate_structured"].assert_not_awaited()

    async def test_unknown_concept_asks_gemini(self, mock_gemini_client):
        mock_gemini_client["generate_structured"].return_value = ExplanationOutput(
            explanation="Sharding splits the chain into pieces.",
        )

        out = await forge_explain("Sharding")

        assert out == {
            "concept": "Sharding",
            "explanation": "Sharding splits the chain into pieces.",
            "source": "gemini",
        }
        call = mock_gemini_client["generate_structured"].call_args
        assert "Concept: Sharding" in call.args[0]
        assert call.kwargs["schema"] is ExplanationOutput

    async def test_gemini_error_becomes_tool_error(self, mock_gemini_client):
        mock_gemini_client["generate_structured"].side_effect = RuntimeError("429 quota exceeded")

        out = await forge_explain("Sharding")

        assert out["category"] == "API_QUOTA_EXCEEDED"
        assert out["retry_after_seconds"] == 60


class TestForgeSuggest:
    async def test_generate_mode(self, mock_gemini_client):
        mock_gemini_client["generate_structured"].return_value = SuggestionOutput(suggestion='"Money, unchained."')

        out = await forge_suggest("Tagline", {"Project Name": "NovaCoin"})

        assert out == {"field_name": "Tagline", "mode": "generate", "suggestion": "Money, unchained."}
        assert "Field to write: Tagline" in mock_gemini_client["generate_structured"].call_args.args[0]

    async def test_improve_mode_with_json_context(self, mock_gemini_client):
        mock_gemini_client["generate_structured"].return_value = SuggestionOutput(suggestion="Better")

        out = await forge_suggest("Tagline", '{"Brand Voice": "Playful"}', current_value="ok coin")

        assert out["mode"] == "improve"
        prompt = mock_gemini_client["generate_structured"].call_args.args[0]
        assert "- Brand Voice: Playful" in prompt
        assert '"ok coin"' in prompt

    async def test_bad_context_is_tool_error(self, mock_gemini_client):
        out = await forge_suggest("Tagline", "not json")

        assert "error" in out
        mock_gemini_client["generate_structured"].assert_not_awaited()
