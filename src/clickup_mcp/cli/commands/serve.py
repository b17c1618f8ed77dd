"""Run the MCP server over stdio."""

import click

from clickup_mcp.cli.registry import get_context
from clickup_mcp.server import create_server


@click.command("serve")
@click.pass_context
def serve_cmd(ctx: click.Context) -> None:
    """Serve the dependency tools over the stdio MCP transport."""
    config = get_context(ctx).config
    config.setup_logging()
    create_server(config).run(transport="stdio")
