"""Generation task schemas — per-task prompt inputs and structured outputs.

Each output model is passed to ``GeminiClient.generate_structured()`` as the
response schema, so field descriptions double as instructions to the model.
Output field names are the keys of the final artifact bundle.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# ── Inputs ───────────────────────────────────────────────────────────────────


class PitchDeckInput(BaseModel):
    project_name: str
    mission_statement: str
    target_audience: str
    token_utility: str
    initial_distribution: str


class TokenomicsInput(BaseModel):
    project_name: str
    ticker: str
    token_utility: str
    initial_distribution: str
    coin_supply: float


class CommunityInput(BaseModel):
    project_name: str
    mission_statement: str
    target_audience: str
    brand_voice: str
    community_plan: str


class LogoInput(BaseModel):
    coin_name: str
    logo_description: str


class WhitepaperInput(BaseModel):
    coin_name: str
    coin_abbreviation: str
    problem_statement: str
    solution_statement: str
    key_features: str
    consensus_mechanism: str
    tokenomics: str


class LandingPageInput(WhitepaperInput):
    tagline: str
    website_url: str
    github_url: str


class SocialCampaignInput(BaseModel):
    coin_name: str
    coin_abbreviation: str
    problem_statement: str
    solution_statement: str
    key_features: str
    website_url: str


class GenesisBlockInput(BaseModel):
    coin_name: str
    coin_abbreviation: str
    address_letter: str
    coin_unit: str
    timestamp: str
    block_reward: float
    block_halving: int
    coin_supply: float
    consensus_mechanism: str


class NetworkConfigInput(BaseModel):
    coin_name: str
    ticker: str
    address_letter: str
    coin_unit: str
    block_reward: float
    block_halving: int
    coin_supply: float
    coinbase_maturity: int
    number_of_confirmations: int
    target_spacing_in_minutes: float
    target_timespan_in_minutes: float


class CompilationInput(BaseModel):
    coin_name: str
    consensus_mechanism: str
    target_spacing: float


class ReadmeInput(BaseModel):
    project_name: str
    ticker: str
    mission_statement: str


class InstallScriptInput(BaseModel):
    project_name: str
    ticker: str


class NodeSetupInput(BaseModel):
    """Second-tier input: carries upstream artifacts verbatim."""

    coin_name: str
    coin_symbol: str
    genesis_block_code: str
    network_parameters: str
    compilation_instructions: str


class AudioSummaryInput(BaseModel):
    summary: str


# ── Outputs ──────────────────────────────────────────────────────────────────


class PitchDeckOutput(BaseModel):
    pitch_deck_content: str = Field(description="The 10-slide pitch deck in Markdown format.")


class TokenomicsOutput(BaseModel):
    tokenomics_model_content: str = Field(description="The tokenomics model in Markdown format.")


class CommunityOutput(BaseModel):
    community_strategy_content: str = Field(description="The community strategy in Markdown format.")


class LogoOutput(BaseModel):
    logo_data_uri: str = Field(
        pattern=r"^data:image/[\w.+-]+;base64,",
        description="The logo image as a data URI ('data:<mimetype>;base64,<data>').",
    )


class WhitepaperOutput(BaseModel):
    whitepaper_content: str = Field(description="The whitepaper in Markdown format.")


class LandingPageOutput(BaseModel):
    landing_page_code: str = Field(description="A single React/JSX landing page component.")


class SocialCampaignOutput(BaseModel):
    twitter_campaign: str = Field(description="A 3-4 tweet launch thread for X, numbered 1/n, 2/n, ...")
    linkedin_post: str = Field(description="A professional LinkedIn launch post.")
    community_welcome: str = Field(description="A welcome message for a new Discord or Telegram community.")


class GenesisBlockOutput(BaseModel):
    genesis_block_code: str = Field(description="C++ source of the CreateGenesisBlock function.")


class NetworkConfigOutput(BaseModel):
    network_configuration_file: str = Field(description="The key=value network configuration file content.")


class CompilationOutput(BaseModel):
    compilation_instructions: str = Field(
        description="Step-by-step instructions for compiling the coin from source, in Markdown.",
    )


class ReadmeOutput(BaseModel):
    readme_content: str = Field(description="The README.md content.")


class InstallScriptOutput(BaseModel):
    install_script: str = Field(description="The install.sh bash script content.")


class NodeSetupOutput(BaseModel):
    node_setup_instructions: str = Field(
        description="Instructions for setting up the initial node and starting to mine, in Markdown.",
    )


class AudioSummaryOutput(BaseModel):
    audio_data_uri: str = Field(
        pattern=r"^data:audio/[\w.+-]+;base64,",
        description="The spoken summary as a data URI ('data:audio/wav;base64,<data>').",
    )
