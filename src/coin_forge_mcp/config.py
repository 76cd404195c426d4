"""Server configuration via environment variables."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field, field_validator

VALID_THINKING_LEVELS = {"minimal", "low", "medium", "high"}

MODEL_PRESETS: dict[str, dict[str, str]] = {
    "best": {
        "default_model": "gemini-3.1-pro-preview",
        "flash_model": "gemini-3-flash-preview",
        "label": "Max quality — 3.1 Pro + 3 Flash (preview, lowest rate limits)",
    },
    "stable": {
        "default_model": "gemini-2.5-pro",
        "flash_model": "gemini-2.5-flash",
        "label": "Fallback — 2.5 Pro + 2.5 Flash (GA models, higher rate limits)",
    },
    "budget": {
        "default_model": "gemini-3-flash-preview",
        "flash_model": "gemini-3-flash-preview",
        "label": "Cost-optimized — 3 Flash for everything (highest rate limits)",
    },
}


def _env_flag(name: str, default: str = "") -> bool:
    """Read a boolean env var (``1``/``true``/``yes`` → True)."""
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


def _resolve_tracing_enabled(flag_value: str, tracking_uri: str) -> bool:
    """Derive tracing_enabled from env vars.

    - ``GEMINI_TRACING_ENABLED=false`` → always disabled (explicit opt-out).
    - Otherwise enabled only when ``MLFLOW_TRACKING_URI`` is non-empty.
    """
    if flag_value.lower() == "false":
        return False
    return bool(tracking_uri)


class ServerConfig(BaseModel):
    """Runtime configuration resolved from environment."""

    gemini_api_key: str = Field(default="")
    default_model: str = Field(default="gemini-3.1-pro-preview")
    flash_model: str = Field(default="gemini-3-flash-preview")
    image_model: str = Field(default="gemini-2.5-flash-image")
    tts_model: str = Field(default="gemini-2.5-flash-preview-tts")
    tts_voice: str = Field(default="Algenib")
    default_thinking_level: str = Field(default="medium")
    default_temperature: float = Field(default=1.0)
    retry_max_attempts: int = Field(default=3)
    retry_base_delay: float = Field(default=1.0)
    retry_max_delay: float = Field(default=60.0)
    project_db_path: str = Field(default="")
    audio_summary_enabled: bool = Field(default=False)
    max_chat_sessions: int = Field(default=50)
    chat_timeout_hours: int = Field(default=2)
    chat_max_turns: int = Field(default=24)
    infra_mutations_enabled: bool = Field(default=False)
    infra_admin_token: str = Field(default="")
    tracing_enabled: bool = Field(default=False)
    mlflow_tracking_uri: str = Field(default="")
    mlflow_experiment_name: str = Field(default="coin-forge-mcp")

    @field_validator("default_thinking_level")
    @classmethod
    def validate_thinking_level(cls, value: str) -> str:
        level = value.strip().lower()
        if level not in VALID_THINKING_LEVELS:
            allowed = ", ".join(sorted(VALID_THINKING_LEVELS))
            raise ValueError(f"Invalid thinking level '{value}'. Allowed: {allowed}")
        return level

    @field_validator("max_chat_sessions", "chat_timeout_hours", "chat_max_turns")
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Configuration values must be >= 1")
        return value

    @field_validator("retry_max_attempts")
    @classmethod
    def validate_retry_max_attempts(cls, value: int) -> int:
        if value < 1:
            raise ValueError("retry_max_attempts must be >= 1")
        return value

    @field_validator("retry_base_delay", "retry_max_delay")
    @classmethod
    def validate_retry_delays(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Retry delay must be > 0")
        return value

    @field_validator("default_temperature")
    @classmethod
    def validate_temperature(cls, value: float) -> float:
        if not 0.0 <= value <= 2.0:
            raise ValueError("Temperature must be between 0.0 and 2.0")
        return value

    @classmethod
    def from_env(cls) -> ServerConfig:
        """Build config from environment variables."""
        from pathlib import Path

        db_default = str(Path.home() / ".local" / "share" / "coin-forge-mcp" / "projects.db")
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY", ""),
            default_model=os.getenv("GEMINI_MODEL", "gemini-3.1-pro-preview"),
            flash_model=os.getenv("GEMINI_FLASH_MODEL", "gemini-3-flash-preview"),
            image_model=os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image"),
            tts_model=os.getenv("GEMINI_TTS_MODEL", "gemini-2.5-flash-preview-tts"),
            tts_voice=os.getenv("GEMINI_TTS_VOICE", "Algenib"),
            default_thinking_level=os.getenv("GEMINI_THINKING_LEVEL", "medium"),
            default_temperature=float(os.getenv("GEMINI_TEMPERATURE", "1.0")),
            retry_max_attempts=int(os.getenv("GEMINI_RETRY_MAX_ATTEMPTS", "3")),
            retry_base_delay=float(os.getenv("GEMINI_RETRY_BASE_DELAY", "1.0")),
            retry_max_delay=float(os.getenv("GEMINI_RETRY_MAX_DELAY", "60.0")),
            project_db_path=os.getenv("FORGE_PROJECT_DB", db_default),
            audio_summary_enabled=_env_flag("FORGE_AUDIO_SUMMARY"),
            max_chat_sessions=int(os.getenv("FORGE_MAX_CHAT_SESSIONS", "50")),
            chat_timeout_hours=int(os.getenv("FORGE_CHAT_TIMEOUT_HOURS", "2")),
            chat_max_turns=int(os.getenv("FORGE_CHAT_MAX_TURNS", "24")),
            infra_mutations_enabled=_env_flag("INFRA_MUTATIONS_ENABLED"),
            infra_admin_token=os.getenv("INFRA_ADMIN_TOKEN", ""),
            tracing_enabled=_resolve_tracing_enabled(
                os.getenv("GEMINI_TRACING_ENABLED", ""),
                os.getenv("MLFLOW_TRACKING_URI", ""),
            ),
            mlflow_tracking_uri=os.getenv("MLFLOW_TRACKING_URI", ""),
            mlflow_experiment_name=os.getenv("MLFLOW_EXPERIMENT_NAME", "coin-forge-mcp"),
        )


_config: ServerConfig | None = None


def get_config() -> ServerConfig:
    """Return the global config singleton, creating it on first access.

    Loads ``~/.config/coin-forge-mcp/.env`` before reading env vars.
    Process environment always takes precedence over the config file.
    """
    global _config
    if _config is None:
        import logging

        from .dotenv import load_dotenv

        injected = load_dotenv()
        if injected:
            logger = logging.getLogger(__name__)
            logger.info(
                "Loaded %d var(s) from config: %s",
                len(injected),
                ", ".join(injected.keys()),
            )
        _config = ServerConfig.from_env()
    return _config


def update_config(**overrides: object) -> ServerConfig:
    """Patch the live config (used by the ``infra_configure`` tool)."""
    global _config
    cfg = get_config()
    data = cfg.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    _config = ServerConfig(**data)
    return _config
