"""Query action handlers: get."""

from __future__ import annotations

import time
from dataclasses import asdict
from typing import Any

from clickup_mcp.config.server import ServerConfig
from clickup_mcp.core.errors import DependencyError, error_to_response
from clickup_mcp.core.responses.builders import success_response
from clickup_mcp.core.task import DependencyService
from clickup_mcp.tools.unified.dependency_handlers._helpers import (
    TOOL_NAME,
    _metric,
    _metrics,
    _reference,
    _request_id,
    _telemetry,
)
from clickup_mcp.tools.unified.param_schema import AtLeastOne, Bool, Str, validate_payload

_GET_SCHEMA = {
    "task_id": Str(),
    "task_name": Str(),
    "list_name": Str(),
    "include_subtasks": Bool(default=False),
}


async def _handle_get(*, service: DependencyService, config: ServerConfig, **payload: Any) -> dict:
    """Return the waiting_on view of one task."""
    request_id = _request_id()
    action = "get"

    err = validate_payload(
        payload,
        _GET_SCHEMA,
        tool_name=TOOL_NAME,
        action=action,
        request_id=request_id,
        cross_field_rules=[
            AtLeastOne(
                ("task_id", "task_name"),
                message="Either task ID or task name must be provided",
                remediation="Pass taskId, or taskName with an optional listName",
            )
        ],
    )
    if err:
        return err

    task = _reference(payload)
    start = time.perf_counter()
    try:
        result = await service.get_dependencies(task, include_subtasks=payload["include_subtasks"])
    except DependencyError as exc:
        elapsed_ms = (time.perf_counter() - start) * 1000
        _metrics.counter(_metric(action), labels={"status": "error"})
        return error_to_response(
            exc,
            details={"action": f"{TOOL_NAME}.{action}", "request": {"task": task.label}},
            request_id=request_id,
            telemetry=_telemetry(elapsed_ms),
        )
    elapsed_ms = (time.perf_counter() - start) * 1000

    warnings = []
    if result.skipped:
        warnings.append(
            f"{len(result.skipped)} dependency task(s) could not be fetched and were omitted: "
            + ", ".join(result.skipped)
        )

    response = success_response(
        result.model_dump(by_alias=True),
        warnings=warnings or None,
        request_id=request_id,
        telemetry=_telemetry(elapsed_ms),
    )
    _metrics.timer(_metric(action) + ".duration_ms", elapsed_ms)
    _metrics.counter(
        _metric(action),
        labels={"status": "success", "partial": str(bool(result.skipped)).lower()},
    )
    return asdict(response)
