from __future__ import annotations

import logging

from fastmcp import FastMCP

from ...api import get_api_functions

INSTRUCTIONS = (
    "StudyStem MCP server exposes the tutoring portal tools. "
    "Sign in first, then read the month grid or session list, schedule or delete sessions, "
    "and manage notes and PDF materials by their ids."
)

logger = logging.getLogger(__name__)


def build_mcp_server() -> FastMCP:
    server = FastMCP(name="studystem", instructions=INSTRUCTIONS)
    for api_function in get_api_functions():
        logger.debug("Registering MCP tool: %s", api_function.name)
        server.tool(
            api_function.func,
            name=api_function.name,
            description=api_function.description,
            tags=set(api_function.tags),
        )
    return server


def run_mcp_server(host: str = "127.0.0.1", port: int = 8765) -> None:
    import asyncio

    server = build_mcp_server()
    asyncio.run(server.run_streamable_http_async(host=host, port=port))
