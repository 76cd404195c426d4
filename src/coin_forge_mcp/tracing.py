"""Optional MLflow tracing integration.

Two layers when enabled:

1. **Autolog** — ``mlflow.gemini.autolog()`` records every google-genai
   ``generate_content`` call as a ``CHAT_MODEL`` span.
2. **Tool spans** — ``trace()`` wraps MCP tool entrypoints so a whole
   ``forge_generate`` run shows up as one root span with the per-task Gemini
   calls nested below it.

``mlflow-tracing`` is an optional extra; without it (or with
``GEMINI_TRACING_ENABLED=false`` / no ``MLFLOW_TRACKING_URI``) ``trace()`` is
the identity decorator.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

try:
    import mlflow
    import mlflow.gemini

    _HAS_MLFLOW = True
except ImportError:
    _HAS_MLFLOW = False


def is_enabled() -> bool:
    """Return True when mlflow is installed and tracing is configured on."""
    if not _HAS_MLFLOW:
        return False
    from .config import get_config

    return get_config().tracing_enabled


def trace(
    func: Callable | None = None,
    *,
    name: str | None = None,
    span_type: str | None = None,
    attributes: dict[str, Any] | None = None,
) -> Callable:
    """Drop-in for ``@mlflow.trace`` that is a no-op when tracing is off.

    Usage::

        @trace(name="forge_generate", span_type="TOOL")
        async def forge_generate(...): ...
    """
    if not is_enabled():
        return func if func is not None else (lambda f: f)
    return mlflow.trace(func, name=name, span_type=span_type, attributes=attributes)


def setup() -> None:
    """Point MLflow at the configured tracking server and enable Gemini autolog.

    Failures are logged; tracing never blocks server start-up.
    """
    if not is_enabled():
        return

    from .config import get_config

    cfg = get_config()
    try:
        mlflow.set_tracking_uri(cfg.mlflow_tracking_uri)
        mlflow.set_experiment(cfg.mlflow_experiment_name)
        mlflow.gemini.autolog()
        logger.info(
            "MLflow tracing enabled (uri=%s, experiment=%s)",
            cfg.mlflow_tracking_uri,
            cfg.mlflow_experiment_name,
        )
    except Exception:
        logger.warning("MLflow tracing setup failed — continuing without tracing", exc_info=True)


def shutdown() -> None:
    """Flush pending async traces."""
    if not is_enabled():
        return

    try:
        mlflow.flush_trace_async_logging()
        logger.info("MLflow traces flushed")
    except Exception:
        logger.warning("MLflow trace flush failed", exc_info=True)
