"""Mutation action handlers: add, remove."""

from __future__ import annotations

import time
from dataclasses import asdict
from typing import Any

from clickup_mcp.config.server import ServerConfig
from clickup_mcp.core.errors import DependencyError, error_to_response
from clickup_mcp.core.responses.builders import success_response
from clickup_mcp.core.task import DEPENDENCY_TYPES, DependencyService
from clickup_mcp.tools.unified.dependency_handlers._helpers import (
    TOOL_NAME,
    _metric,
    _metrics,
    _reference,
    _request_id,
    _telemetry,
)
from clickup_mcp.tools.unified.param_schema import AtLeastOne, Str, validate_payload

_TASK_REF_RULE = AtLeastOne(
    ("task_id", "task_name"),
    message="Either task ID or task name must be provided",
    remediation="Pass taskId, or taskName with an optional listName",
)

_ADD_SCHEMA = {
    "task_id": Str(),
    "task_name": Str(),
    "list_name": Str(),
    "depends_on_task_id": Str(),
    "depends_on_task_name": Str(),
    "depends_on_list_name": Str(),
    "dependency_type": Str(choices=frozenset(DEPENDENCY_TYPES), lower=True),
}

_REMOVE_SCHEMA = {
    "task_id": Str(),
    "task_name": Str(),
    "list_name": Str(),
    "dependency_task_id": Str(),
    "dependency_task_name": Str(),
    "dependency_list_name": Str(),
}


async def _handle_add(*, service: DependencyService, config: ServerConfig, **payload: Any) -> dict:
    """Add a dependency relationship between two tasks."""
    request_id = _request_id()
    action = "add"

    if payload.get("dependency_type") is None:
        payload["dependency_type"] = "waiting_on"

    err = validate_payload(
        payload,
        _ADD_SCHEMA,
        tool_name=TOOL_NAME,
        action=action,
        request_id=request_id,
        cross_field_rules=[
            _TASK_REF_RULE,
            AtLeastOne(
                ("depends_on_task_id", "depends_on_task_name"),
                message="Either dependency task ID or dependency task name must be provided",
                remediation="Pass dependsOnTaskId, or dependsOnTaskName with an optional dependsOnListName",
            ),
        ],
    )
    if err:
        return err

    task = _reference(payload)
    depends_on = _reference(payload, prefix="depends_on_")
    dependency_type = payload["dependency_type"]

    start = time.perf_counter()
    try:
        edge = await service.add_dependency(task, depends_on, dependency_type)
    except DependencyError as exc:
        elapsed_ms = (time.perf_counter() - start) * 1000
        _metrics.counter(_metric(action), labels={"status": "error"})
        return error_to_response(
            exc,
            details={
                "action": f"{TOOL_NAME}.{action}",
                "request": {"task": task.label, "depends_on": depends_on.label},
            },
            request_id=request_id,
            telemetry=_telemetry(elapsed_ms),
        )
    elapsed_ms = (time.perf_counter() - start) * 1000

    response = success_response(
        dependency=edge.model_dump(),
        message=f"Task {edge.task_id} now waits on task {edge.depends_on}",
        request_id=request_id,
        telemetry=_telemetry(elapsed_ms),
    )
    _metrics.timer(_metric(action) + ".duration_ms", elapsed_ms)
    _metrics.counter(_metric(action), labels={"status": "success", "dependency_type": dependency_type})
    return asdict(response)


async def _handle_remove(*, service: DependencyService, config: ServerConfig, **payload: Any) -> dict:
    """Remove a dependency relationship between two tasks."""
    request_id = _request_id()
    action = "remove"

    err = validate_payload(
        payload,
        _REMOVE_SCHEMA,
        tool_name=TOOL_NAME,
        action=action,
        request_id=request_id,
        cross_field_rules=[
            _TASK_REF_RULE,
            AtLeastOne(
                ("dependency_task_id", "dependency_task_name"),
                message="Either dependency task ID or dependency task name must be provided",
                remediation="Pass dependencyTaskId, or dependencyTaskName with an optional dependencyListName",
            ),
        ],
    )
    if err:
        return err

    task = _reference(payload)
    dependency = _reference(payload, prefix="dependency_")

    start = time.perf_counter()
    try:
        task_id, dependency_id = await service.remove_dependency(task, dependency)
    except DependencyError as exc:
        elapsed_ms = (time.perf_counter() - start) * 1000
        _metrics.counter(_metric(action), labels={"status": "error"})
        return error_to_response(
            exc,
            details={
                "action": f"{TOOL_NAME}.{action}",
                "request": {"task": task.label, "dependency": dependency.label},
            },
            request_id=request_id,
            telemetry=_telemetry(elapsed_ms),
        )
    elapsed_ms = (time.perf_counter() - start) * 1000

    response = success_response(
        task_id=task_id,
        dependency_task_id=dependency_id,
        message=f"Task {task_id} no longer waits on task {dependency_id}",
        request_id=request_id,
        telemetry=_telemetry(elapsed_ms),
    )
    _metrics.timer(_metric(action) + ".duration_ms", elapsed_ms)
    _metrics.counter(_metric(action), labels={"status": "success"})
    return asdict(response)
