"""Persisted project and generation result models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class GenerationResult(BaseModel):
    """Output of one successful generation run.

    ``artifacts`` maps output-field name (``whitepaper_content``,
    ``logo_data_uri``, ...) to generated text or data URI. ``tasks`` is the
    final per-task status snapshot.
    """

    run_id: str
    artifacts: dict[str, str] = Field(default_factory=dict)
    tasks: dict[str, dict] = Field(default_factory=dict)
    duration_seconds: float = 0.0


class Project(BaseModel):
    """A saved generation: the parameters plus the artifacts they produced."""

    project_id: str
    user_id: str
    params: dict
    artifacts: dict[str, str]
    created_at: datetime


class ProjectSummary(BaseModel):
    """Listing entry returned by ``project_list``."""

    project_id: str
    coin_name: str
    ticker: str
    created_at: datetime
    artifact_count: int = 0
