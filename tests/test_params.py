"""Tests for ProjectParameters validation, aliases and derived wording."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from coin_forge_mcp.models.params import ProjectParameters
from tests.conftest import NOVACOIN


class TestProjectParameters:
    def test_camel_case_wizard_keys(self):
        params = ProjectParameters.model_validate(NOVACOIN)
        assert params.coin_name == "NovaCoin"
        assert params.coin_abbreviation == "NVC"
        assert params.coin_supply == 21_000_000
        assert params.target_spacing_in_minutes == 10

    def test_snake_case_keys(self):
        params = ProjectParameters(
            coin_name="Orbit", coin_abbreviation="orb", consensus_mechanism="Scrypt - Proof of Work",
        )
        assert params.coin_abbreviation == "ORB"
        assert params.address_letter == "O"

    def test_defaults(self):
        params = ProjectParameters.model_validate(NOVACOIN)
        assert params.address_letter == "N"
        assert params.coin_unit == "sats"
        assert params.block_halving == 210_000
        assert params.coinbase_maturity == 100
        assert params.number_of_confirmations == 6
        assert params.target_timespan_in_minutes == 1440
        assert params.website_url is None
        assert params.mission_statement == ""

    def test_project_name_and_ticker_keys(self):
        params = ProjectParameters.model_validate(
            {"projectName": "Lumen", "ticker": "lmn", "consensusMechanism": "X11 - Proof of Work + Masternode"},
        )
        assert params.coin_name == "Lumen"
        assert params.coin_abbreviation == "LMN"

    def test_explicit_address_letter_kept(self):
        params = ProjectParameters.model_validate({**NOVACOIN, "addressLetter": "X"})
        assert params.address_letter == "X"

    def test_frozen(self):
        params = ProjectParameters.model_validate(NOVACOIN)
        with pytest.raises(ValidationError):
            params.coin_name = "Other"

    @pytest.mark.parametrize("override", [
        {"coinName": ""},
        {"coinAbbreviation": "TOOLONG"},
        {"blockReward": 0},
        {"coinSupply": -5},
        {"targetSpacingInMinutes": 0},
        {"addressLetter": "AB"},
    ])
    def test_invalid_values_rejected(self, override):
        with pytest.raises(ValidationError):
            ProjectParameters.model_validate({**NOVACOIN, **override})

    def test_consensus_required(self):
        data = {k: v for k, v in NOVACOIN.items() if k != "consensusMechanism"}
        with pytest.raises(ValidationError, match="consensusMechanism"):
            ProjectParameters.model_validate(data)

    def test_whitespace_stripped(self):
        params = ProjectParameters.model_validate({**NOVACOIN, "coinName": "  NovaCoin  "})
        assert params.coin_name == "NovaCoin"


class TestDerivedWording:
    def test_key_features_lists_utility_and_audience(self):
        params = ProjectParameters.model_validate(
            {**NOVACOIN, "tokenUtility": "Governance", "targetAudience": "Gamers"},
        )
        assert params.key_features.splitlines() == [
            "- Core Utility: Governance",
            "- Target Audience Focus: Gamers",
            "- Consensus: SHA-256 - Proof of Work",
            "- Decentralized Governance",
        ]

    def test_solution_statement_uses_brand_voice(self):
        params = ProjectParameters.model_validate({**NOVACOIN, "brandVoice": "Playful"})
        assert params.solution_statement == "NovaCoin addresses this by providing a platform that is playful."

    def test_technical_summary_is_plain_text(self):
        params = ProjectParameters.model_validate(
            {**NOVACOIN, "missionStatement": "Open money", "targetAudience": "Developers"},
        )
        summary = params.technical_summary
        assert "*" not in summary
        assert summary.startswith("NovaCoin (NVC) is a new cryptocurrency protocol")
        assert "10-minute" in summary
        assert "tailored for developers" in summary
