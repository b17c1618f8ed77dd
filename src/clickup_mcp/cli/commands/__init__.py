"""CLI command groups."""

from clickup_mcp.cli.commands.deps import deps_group
from clickup_mcp.cli.commands.serve import serve_cmd

__all__ = [
    "deps_group",
    "serve_cmd",
]
