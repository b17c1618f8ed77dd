"""Unified dependency router entry point.

Handler logic lives in ``clickup_mcp.tools.unified.dependency_handlers``.
``dependency_action`` is the single call path shared by the MCP tools and
the CLI, so both produce identical envelopes.
"""

from __future__ import annotations

from typing import Any

from clickup_mcp.config.server import ServerConfig
from clickup_mcp.core.task import DependencyService
from clickup_mcp.tools.unified.dependency_handlers import (  # noqa: F401
    _DEPENDENCY_ROUTER,
    _dispatch_dependency_action,
)


async def dependency_action(
    action: str,
    *,
    config: ServerConfig,
    service: DependencyService,
    **payload: Any,
) -> dict:
    """Run one dependency action and return its response envelope."""
    return await _dispatch_dependency_action(action=action, payload=payload, config=config, service=service)


__all__ = [
    "dependency_action",
]
