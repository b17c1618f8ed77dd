"""
Observability utilities for clickup-mcp.

Provides metrics collection, audit logging and redaction for MCP tools.

FastMCP integration:
    Tool handlers are wrapped with :func:`mcp_tool`, usually through
    :func:`clickup_mcp.core.naming.canonical_tool`::

        @mcp.tool(name="get_task_dependencies")
        @mcp_tool(tool_name="get_task_dependencies")
        async def get_task_dependencies(taskId: str | None = None) -> dict:
            ...
"""

from clickup_mcp.core.observability.audit import (
    AuditEvent,
    AuditEventType,
    AuditLogger,
    get_audit_logger,
)
from clickup_mcp.core.observability.decorators import mcp_tool
from clickup_mcp.core.observability.metrics import (
    Metric,
    MetricsCollector,
    MetricType,
    get_metrics,
)
from clickup_mcp.core.observability.redaction import (
    SENSITIVE_PATTERNS,
    redact_for_logging,
    redact_sensitive_data,
)

__all__ = [
    "AuditEvent",
    "AuditEventType",
    "AuditLogger",
    "get_audit_logger",
    "mcp_tool",
    "Metric",
    "MetricsCollector",
    "MetricType",
    "get_metrics",
    "SENSITIVE_PATTERNS",
    "redact_for_logging",
    "redact_sensitive_data",
]
