"""SQLite-backed per-user project store with WAL mode."""

from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path

from .config import get_config
from .models.params import ProjectParameters
from .models.project import Project, ProjectSummary

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS projects (
    project_id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    coin_name TEXT NOT NULL DEFAULT '',
    ticker TEXT NOT NULL DEFAULT '',
    params TEXT NOT NULL DEFAULT '{}',
    artifacts TEXT NOT NULL DEFAULT '{}',
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_projects_user ON projects (user_id, created_at);
"""


def _require_user(user_id: str) -> str:
    uid = (user_id or "").strip()
    if not uid:
        raise ValueError("user_id is required to store or read projects")
    return uid


class ProjectDB:
    """Synchronous SQLite persistence for saved projects.

    Every read and delete is scoped by owner: a project id that belongs to
    another user behaves exactly like an unknown id. Projects are never
    updated in place.
    """

    def __init__(self, db_path: str) -> None:
        if db_path == ":memory:":
            self._conn = sqlite3.connect(db_path)
        else:
            path = Path(db_path).expanduser().resolve()
            path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(str(path))
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute("PRAGMA synchronous=NORMAL")
        self._conn.executescript(_SCHEMA)

    def save(
        self,
        user_id: str,
        params: ProjectParameters | dict,
        artifacts: dict[str, str],
    ) -> Project:
        """Store a finished generation and return it with its new identity.

        Args:
            user_id: Owner identity (required).
            params: The parameters the artifacts were generated from.
            artifacts: Output-field name to generated text or data URI.

        Raises:
            ValueError: ``user_id`` is empty.
        """
        uid = _require_user(user_id)
        if isinstance(params, ProjectParameters):
            params = params.model_dump(mode="json")
        project = Project(
            project_id=uuid.uuid4().hex[:12],
            user_id=uid,
            params=params,
            artifacts=dict(artifacts),
            created_at=datetime.now(timezone.utc),
        )
        self._conn.execute(
            """INSERT INTO projects
               (project_id, user_id, coin_name, ticker, params, artifacts, created_at)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (
                project.project_id,
                project.user_id,
                str(params.get("coin_name") or params.get("coinName") or ""),
                str(params.get("coin_abbreviation") or params.get("coinAbbreviation") or ""),
                json.dumps(project.params),
                json.dumps(project.artifacts),
                project.created_at.isoformat(),
            ),
        )
        self._conn.commit()
        logger.info("Saved project %s for user %s", project.project_id, uid)
        return project

    def get(self, user_id: str, project_id: str) -> Project | None:
        """Load one project owned by *user_id*, or None."""
        uid = _require_user(user_id)
        row = self._conn.execute(
            "SELECT project_id, user_id, params, artifacts, created_at "
            "FROM projects WHERE user_id = ? AND project_id = ?",
            (uid, project_id),
        ).fetchone()
        if row is None:
            return None
        return Project(
            project_id=row[0],
            user_id=row[1],
            params=json.loads(row[2]),
            artifacts=json.loads(row[3]),
            created_at=datetime.fromisoformat(row[4]),
        )

    def list_for_user(self, user_id: str) -> list[ProjectSummary]:
        """Summaries of every project owned by *user_id*, newest first."""
        uid = _require_user(user_id)
        rows = self._conn.execute(
            "SELECT project_id, coin_name, ticker, artifacts, created_at "
            "FROM projects WHERE user_id = ? ORDER BY created_at DESC, rowid DESC",
            (uid,),
        ).fetchall()
        return [
            ProjectSummary(
                project_id=r[0],
                coin_name=r[1],
                ticker=r[2],
                artifact_count=len(json.loads(r[3])),
                created_at=datetime.fromisoformat(r[4]),
            )
            for r in rows
        ]

    def delete(self, user_id: str, project_id: str) -> bool:
        """Delete a project. Returns True if a row was removed."""
        uid = _require_user(user_id)
        cursor = self._conn.execute(
            "DELETE FROM projects WHERE user_id = ? AND project_id = ?",
            (uid, project_id),
        )
        self._conn.commit()
        return cursor.rowcount > 0

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()


_db: ProjectDB | None = None


def get_project_db() -> ProjectDB:
    """Return the process-wide project store, opening it on first access."""
    global _db
    if _db is None:
        _db = ProjectDB(get_config().project_db_path or ":memory:")
    return _db


def close_project_db() -> None:
    """Close and forget the process-wide project store (server shutdown, tests)."""
    global _db
    if _db is not None:
        _db.close()
        _db = None
