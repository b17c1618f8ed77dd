"""Batch action handlers: bulk-add."""

from __future__ import annotations

import time
from dataclasses import asdict
from typing import Any

from clickup_mcp.config.server import ServerConfig
from clickup_mcp.core.errors import MalformedBatchError, error_to_response
from clickup_mcp.core.responses.builders import success_response
from clickup_mcp.core.task import DependencyService
from clickup_mcp.tools.unified.dependency_handlers._helpers import (
    TOOL_NAME,
    _metric,
    _metrics,
    _request_id,
    _telemetry,
)
from clickup_mcp.tools.unified.param_schema import Bool, Dict_, List_, Num, validate_payload

_BULK_SCHEMA = {
    "dependencies": List_(
        required=True,
        remediation="Pass dependencies as a list of {taskId, dependsOn: [...]} objects",
    ),
    "options": Dict_(),
}

_OPTIONS_SCHEMA = {
    "continueOnError": Bool(default=False),
    "retryCount": Num(integer_only=True, min_val=0, default=0),
}


async def _handle_bulk_add(*, service: DependencyService, config: ServerConfig, **payload: Any) -> dict:
    """Apply a batch of dependencies; per-pair failures land in ``failed``."""
    request_id = _request_id()
    action = "bulk-add"

    err = validate_payload(payload, _BULK_SCHEMA, tool_name=TOOL_NAME, action=action, request_id=request_id)
    if err:
        return err

    options = dict(payload.get("options") or {})
    err = validate_payload(
        options,
        _OPTIONS_SCHEMA,
        tool_name=TOOL_NAME,
        action=action,
        request_id=request_id,
    )
    if err:
        return err

    start = time.perf_counter()
    try:
        report = await service.add_bulk(
            payload["dependencies"],
            continue_on_error=options["continueOnError"],
            retry_count=options["retryCount"],
        )
    except MalformedBatchError as exc:
        elapsed_ms = (time.perf_counter() - start) * 1000
        _metrics.counter(_metric(action), labels={"status": "error"})
        return error_to_response(
            exc,
            details={"action": f"{TOOL_NAME}.{action}"},
            request_id=request_id,
            telemetry=_telemetry(elapsed_ms),
        )
    elapsed_ms = (time.perf_counter() - start) * 1000

    warnings = list(report.warnings)
    if report.summary.failed:
        warnings.append(f"{report.summary.failed} of {report.summary.total} dependencies failed")

    response = success_response(
        report.model_dump(by_alias=True),
        warnings=warnings or None,
        request_id=request_id,
        telemetry=_telemetry(elapsed_ms),
    )
    _metrics.timer(_metric(action) + ".duration_ms", elapsed_ms)
    _metrics.counter(
        _metric(action),
        labels={"status": "success" if not report.summary.failed else "partial"},
    )
    return asdict(response)
