"""CLI context shared by every command through ``click.Context.obj``."""

from dataclasses import dataclass
from typing import Optional

import click

from clickup_mcp.config import ServerConfig


@dataclass
class CLIContext:
    config: ServerConfig
    config_file: Optional[str] = None


def get_context(ctx: click.Context) -> CLIContext:
    """Return the CLIContext, loading configuration on first use."""
    root = ctx.find_root()
    if not isinstance(root.obj, CLIContext):
        root.obj = CLIContext(config=ServerConfig.from_env())
    return root.obj
