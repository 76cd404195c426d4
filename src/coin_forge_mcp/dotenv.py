"""Load environment defaults from ``~/.config/coin-forge-mcp/.env``.

Lets the Gemini key and database path live in one place regardless of which
MCP host launches the server. Values already present in the process
environment always win.
"""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_ENV_PATH = Path.home() / ".config" / "coin-forge-mcp" / ".env"


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def _is_unset(key: str, value: str | None) -> bool:
    """Treat blank values and unresolved ``${KEY}`` placeholders as unset."""
    if value is None:
        return True
    normalized = _strip_quotes(value.strip()).strip()
    if not normalized:
        return True
    if normalized in {f"${key}", f"${{{key}}}"}:
        return True
    return normalized.startswith(f"${{{key}:-") and normalized.endswith("}")


def parse_dotenv(path: Path) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines (optionally ``export``-prefixed or quoted).

    Blank lines and ``#`` comments are skipped. No variable expansion.
    """
    result: dict[str, str] = {}
    if not path.is_file():
        return result

    for raw in path.read_text().splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        line = line.removeprefix("export ").lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            continue
        result[key] = _strip_quotes(value.strip())
    return result


def load_dotenv(path: Path | None = None) -> dict[str, str]:
    """Inject vars from *path* into ``os.environ`` where they are unset.

    Args:
        path: ``.env`` file to read. Defaults to :data:`DEFAULT_ENV_PATH`.

    Returns:
        Dict of vars that were actually injected.
    """
    if path is None:
        path = DEFAULT_ENV_PATH
    injected: dict[str, str] = {}
    for key, value in parse_dotenv(path).items():
        if _is_unset(key, os.environ.get(key)):
            os.environ[key] = value
            injected[key] = value
    return injected
