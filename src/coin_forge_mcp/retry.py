"""Exponential backoff for transient Gemini API errors."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from typing import TypeVar

from .config import get_config

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRANSIENT_MARKERS: tuple[str, ...] = (
    "429",
    "quota",
    "resource_exhausted",
    "timeout",
    "timed out",
    "500 internal",
    "503",
    "service unavailable",
)


def is_transient(exc: Exception) -> bool:
    """Return True when the error message matches a known transient failure."""
    if isinstance(exc, TimeoutError):
        return True
    msg = str(exc).lower()
    return any(marker in msg for marker in _TRANSIENT_MARKERS)


async def with_retry(call: Callable[[], Awaitable[T]], *, label: str = "gemini") -> T:
    """Await ``call()`` until it succeeds, backing off on transient errors.

    Args:
        call: Zero-arg callable returning a fresh awaitable per attempt.
        label: Short name used in retry log lines.

    Returns:
        The first successful result.

    Raises:
        The last exception once attempts are exhausted, or immediately for
        non-transient errors.
    """
    cfg = get_config()
    attempts = cfg.retry_max_attempts

    for attempt in range(1, attempts + 1):
        try:
            return await call()
        except Exception as exc:
            if attempt == attempts or not is_transient(exc):
                raise
            delay = min(cfg.retry_base_delay * 2 ** (attempt - 1) + random.random(), cfg.retry_max_delay)
            logger.warning(
                "%s: retry %d/%d in %.1fs after %s", label, attempt, attempts, delay, exc,
            )
            await asyncio.sleep(delay)
    raise AssertionError("unreachable")
