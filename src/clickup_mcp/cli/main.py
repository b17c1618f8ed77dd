"""clickup-mcp command line entry point."""

from typing import Optional

import click

from clickup_mcp import __version__
from clickup_mcp.cli.commands import deps_group, serve_cmd
from clickup_mcp.cli.registry import CLIContext
from clickup_mcp.config import ServerConfig


@click.group()
@click.version_option(__version__, prog_name="clickup-mcp")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="TOML configuration file (overrides CLICKUP_MCP_CONFIG_FILE).",
)
@click.option("--verbose", "-v", is_flag=True, help="Log to stderr at the configured level.")
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[str], verbose: bool) -> None:
    """Manage ClickUp task dependencies, or serve them over MCP."""
    config = ServerConfig.from_env(config_file)
    if verbose:
        config.setup_logging()
    ctx.obj = CLIContext(config=config, config_file=config_file)


cli.add_command(serve_cmd)
cli.add_command(deps_group)


if __name__ == "__main__":
    cli()
