"""Main FastMCP server — mounts all sub-servers."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastmcp import FastMCP

from . import tracing
from .client import GeminiClient
from .projects_db import close_project_db
from .sessions import chat_store
from .tools.assist import assist_server
from .tools.chat import chat_server
from .tools.forge import forge_server
from .tools.infra import infra_server
from .tools.projects import projects_server

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(server: FastMCP):
    """Startup/shutdown hook — tracing, shared Gemini clients, project store."""
    tracing.setup()
    try:
        yield {}
    finally:
        chat_store.clear()
        close_project_db()
        closed = await GeminiClient.close_all()
        tracing.shutdown()
        logger.info("Lifespan shutdown: closed %d client(s)", closed)


app = FastMCP(
    "coin-forge",
    instructions=(
        "Cryptocurrency launch-kit generator. Call forge_task_graph to see the steps, "
        "forge_generate to produce whitepaper, tokenomics, logo, genesis block, network "
        "config, node setup and marketing copy, then project_* to manage saved projects "
        "and chat_* to ask questions about one."
    ),
    lifespan=_lifespan,
)

app.mount(forge_server)
app.mount(assist_server)
app.mount(projects_server)
app.mount(chat_server)
app.mount(infra_server)


def main() -> None:
    """Entry-point for ``coin-forge-mcp`` console script."""
    app.run()


if __name__ == "__main__":
    main()
