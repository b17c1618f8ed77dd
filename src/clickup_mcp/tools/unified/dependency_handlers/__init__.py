"""Dependency action router, split into domain-focused handler modules."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from clickup_mcp.config import ServerConfig
from clickup_mcp.core.task import DependencyService
from clickup_mcp.tools.unified.common import build_request_id, dispatch_with_standard_errors
from clickup_mcp.tools.unified.dependency_handlers._helpers import _ACTION_SUMMARY, TOOL_NAME
from clickup_mcp.tools.unified.dependency_handlers.handlers_batch import _handle_bulk_add
from clickup_mcp.tools.unified.dependency_handlers.handlers_mutation import _handle_add, _handle_remove
from clickup_mcp.tools.unified.dependency_handlers.handlers_query import _handle_get
from clickup_mcp.tools.unified.router import ActionDefinition, ActionRouter

logger = logging.getLogger(__name__)

_ACTION_DEFINITIONS = [
    ActionDefinition(name="get", handler=_handle_get, summary=_ACTION_SUMMARY["get"], aliases=("list",)),
    ActionDefinition(name="add", handler=_handle_add, summary=_ACTION_SUMMARY["add"]),
    ActionDefinition(name="remove", handler=_handle_remove, summary=_ACTION_SUMMARY["remove"], aliases=("delete",)),
    ActionDefinition(
        name="bulk-add",
        handler=_handle_bulk_add,
        summary=_ACTION_SUMMARY["bulk-add"],
        aliases=("bulk",),
    ),
]

_DEPENDENCY_ROUTER = ActionRouter(tool_name=TOOL_NAME, actions=_ACTION_DEFINITIONS)


async def _dispatch_dependency_action(
    *,
    action: str,
    payload: Dict[str, Any],
    config: ServerConfig,
    service: DependencyService,
    request_id: Optional[str] = None,
) -> dict:
    rid = request_id or build_request_id(TOOL_NAME)
    return await dispatch_with_standard_errors(
        _DEPENDENCY_ROUTER,
        TOOL_NAME,
        action,
        request_id=rid,
        config=config,
        service=service,
        **payload,
    )


__all__ = [
    "_DEPENDENCY_ROUTER",
    "_dispatch_dependency_action",
]
