"""
MCP server entry point for clickup-mcp.

Builds the FastMCP server, registers the dependency tools, and owns the
ClickUp client for the lifetime of the server session.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from mcp.server.fastmcp import FastMCP

from clickup_mcp.config import ServerConfig, get_config
from clickup_mcp.core.clickup import ClickUpClient
from clickup_mcp.core.task import DependencyService
from clickup_mcp.tools.dependencies import register_dependency_tools

logger = logging.getLogger(__name__)

SERVER_INSTRUCTIONS = (
    "Manage dependencies between ClickUp tasks. Tasks can be referenced by ID, "
    "or by name with an optional list name. Dependencies that would make a task "
    "wait on itself, or on a task already waiting on it, are rejected."
)


def create_server(config: Optional[ServerConfig] = None) -> FastMCP:
    """Create the FastMCP server with dependency tools registered.

    The ClickUp client and the dependency service are created when the server
    session starts and closed when it ends.
    """
    config = config or get_config()
    state: Dict[str, Optional[DependencyService]] = {"service": None}

    @asynccontextmanager
    async def lifespan(_server: FastMCP) -> AsyncIterator[Dict[str, Any]]:
        async with ClickUpClient(config.clickup) as client:
            service = DependencyService.from_config(client, config)
            state["service"] = service
            logger.info(
                "ClickUp client ready (base_url=%s, team_id=%s)",
                config.clickup.base_url,
                config.clickup.team_id or "unset",
            )
            try:
                yield {"service": service}
            finally:
                state["service"] = None
                logger.info("ClickUp client closed")

    mcp = FastMCP(config.server_name, instructions=SERVER_INSTRUCTIONS, lifespan=lifespan)

    def get_service() -> DependencyService:
        service = state["service"]
        if service is None:
            raise RuntimeError("ClickUp client is not running; the server session has not started")
        return service

    registered = register_dependency_tools(mcp, config, get_service)
    logger.info("%s %s registered %d tools", config.server_name, config.server_version, len(registered))
    return mcp


def main() -> None:
    """Run the server over stdio."""
    config = get_config()
    config.setup_logging()
    mcp = create_server(config)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
