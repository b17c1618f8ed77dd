"""Shared helpers for dependency handler modules."""

from __future__ import annotations

import logging
from typing import Any, Dict

from clickup_mcp.core.observability import get_metrics
from clickup_mcp.core.task.models import TaskReference
from clickup_mcp.tools.unified.common import build_request_id, make_metric_name

logger = logging.getLogger(__name__)
_metrics = get_metrics()

TOOL_NAME = "dependency"

_ACTION_SUMMARY = {
    "get": "List the tasks a task waits on",
    "add": "Add a dependency between two tasks",
    "remove": "Remove a dependency between two tasks",
    "bulk-add": "Add many dependencies with stop-or-continue error handling",
}


def _request_id() -> str:
    return build_request_id(TOOL_NAME)


def _metric(action: str) -> str:
    return make_metric_name("unified_tools.dependency", action)


def _reference(payload: Dict[str, Any], prefix: str = "") -> TaskReference:
    """Build a :class:`TaskReference` from ``{prefix}task_id``-style payload keys."""
    return TaskReference(
        task_id=payload.get(f"{prefix}task_id"),
        task_name=payload.get(f"{prefix}task_name"),
        list_name=payload.get(f"{prefix}list_name"),
    )


def _telemetry(duration_ms: float) -> Dict[str, Any]:
    return {"duration_ms": round(duration_ms, 2)}

