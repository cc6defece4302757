from __future__ import annotations

import asyncio
import logging

from mcp.server.fastmcp import FastMCP

from planka_mcp.core.client import PlankaClient, create_client_from_env
from planka_mcp.core.logging import setup_logging
from planka_mcp.core.registry import register_discovered_tools

log = logging.getLogger("planka_mcp.server")

SERVER_NAME = "planka-mcp"


def create_app(client: PlankaClient) -> FastMCP:
    app = FastMCP(SERVER_NAME)
    register_discovered_tools(app, client)
    return app


# --- Entry point ----------------------------------------------------------- #


async def main() -> None:
    setup_logging()
    # Configuration is read on the first tool call, not at startup.
    client = create_client_from_env()
    app = create_app(client)

    log.info("PLANKA MCP server started")
    try:
        await app.run_stdio_async()
    finally:
        await client.aclose()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
