"""Project parameters — the validated wizard input that drives one generation run.

Accepts the camelCase keys the wizard submits (``coinName``,
``targetSpacingInMinutes``) as well as snake_case field names. Technical
network parameters default to Bitcoin-like values when the user leaves them
out; the narrative fields default to empty strings.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

CONSENSUS_MECHANISMS: tuple[str, ...] = (
    "Scrypt - Proof of Work and Proof of Stake",
    "SHA-256 - Proof of Work",
    "Scrypt - Proof of Work",
    "X11 - Proof of Work + Masternode",
)

_MARKDOWN_EMPHASIS = re.compile(r"\*+")

_WIZARD_KEYS: dict[str, tuple[str, ...]] = {
    "projectName": ("coinName", "coin_name"),
    "ticker": ("coinAbbreviation", "coin_abbreviation"),
}


class ProjectParameters(BaseModel):
    """Immutable input record for the generation orchestrator."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
        extra="ignore",
    )

    # Identity
    coin_name: str = Field(min_length=1, description="Project / coin name")
    coin_abbreviation: str = Field(min_length=1, max_length=5, description="Ticker symbol (e.g. BTC)")
    address_letter: str = Field(default="", max_length=1, description="First character of public addresses")
    coin_unit: str = Field(default="sats", min_length=1, description="Name of the smallest unit")

    # Economics
    block_reward: float = Field(default=50, gt=0)
    block_halving: int = Field(default=210_000, gt=0)
    coin_supply: float = Field(default=100_000_000, gt=0)
    coinbase_maturity: int = Field(default=100, gt=0)
    number_of_confirmations: int = Field(default=6, gt=0)

    # Timing
    target_spacing_in_minutes: float = Field(default=10, gt=0)
    target_timespan_in_minutes: float = Field(default=1440, gt=0)

    consensus_mechanism: str = Field(min_length=1)

    # Narrative
    mission_statement: str = ""
    target_audience: str = ""
    brand_voice: str = ""
    tagline: str = ""
    token_utility: str = ""
    initial_distribution: str = ""
    community_plan: str = ""
    logo_description: str = ""
    timestamp: str = Field(default="", description="Genesis block timestamp message")
    website_url: str | None = None
    github_url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _accept_wizard_keys(cls, data: object) -> object:
        """Map the wizard's ``projectName``/``ticker`` keys and derive the address letter."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for src, targets in _WIZARD_KEYS.items():
            if src in data and not any(t in data for t in targets):
                data[targets[0]] = data.pop(src)
        if not (data.get("addressLetter") or data.get("address_letter")):
            ticker = str(data.get("coinAbbreviation") or data.get("coin_abbreviation") or "").strip()
            if ticker:
                data["addressLetter"] = ticker[0].upper()
        return data

    @field_validator("coin_abbreviation")
    @classmethod
    def _upper_ticker(cls, value: str) -> str:
        return value.upper()

    # ── Derived wording shared by several prompts ────────────────────────

    @property
    def problem_statement(self) -> str:
        mission = self.mission_statement or f"a purpose-built network for {self.coin_name}"
        return f"The current market lacks a solution for: {mission}"

    @property
    def solution_statement(self) -> str:
        voice = (self.brand_voice or "secure, open and community-driven").lower()
        return f"{self.coin_name} addresses this by providing a platform that is {voice}."

    @property
    def key_features(self) -> str:
        lines = []
        if self.token_utility:
            lines.append(f"- Core Utility: {self.token_utility}")
        if self.target_audience:
            lines.append(f"- Target Audience Focus: {self.target_audience}")
        lines.append(f"- Consensus: {self.consensus_mechanism}")
        lines.append("- Decentralized Governance")
        return "\n".join(lines)

    @property
    def tokenomics_summary(self) -> str:
        summary = (
            f"Total supply of {self.coin_supply:,.0f} {self.coin_abbreviation}, "
            f"block reward of {self.block_reward:g} halving every {self.block_halving:,} blocks"
        )
        if self.initial_distribution:
            summary += f". Distribution: {self.initial_distribution}"
        return summary

    @property
    def technical_summary(self) -> str:
        """One-paragraph plain-text overview (used for the audio summary)."""
        text = (
            f"**{self.coin_name} ({self.coin_abbreviation})** is a new cryptocurrency protocol"
        )
        if self.mission_statement:
            text += f" driven by the mission: *\"{self.mission_statement}\"*"
        text += (
            f". It uses the **{self.consensus_mechanism}** consensus mechanism. "
            f"The network is designed for a **{self.target_spacing_in_minutes:g}-minute** block time."
        )
        if self.target_audience:
            text += f" This project is tailored for **{self.target_audience.lower()}**"
            if self.brand_voice:
                text += f" with a brand voice that is **{self.brand_voice.lower()}**"
            text += "."
        return _MARKDOWN_EMPHASIS.sub("", text)
