"""MCP tool decorator with observability.

Provides @mcp_tool, which adds correlation context, latency and status
metrics, and an audit trail to tool handlers.
"""

import functools
import time
from typing import Any, Awaitable, Callable, Optional, TypeVar

from clickup_mcp.core.context import (
    generate_correlation_id,
    get_correlation_id,
    sync_request_context,
)
from clickup_mcp.core.observability.audit import _audit
from clickup_mcp.core.observability.metrics import _metrics

T = TypeVar("T")


def _record_outcome(
    name: str,
    corr_id: str,
    start: float,
    success: bool,
    error_msg: Optional[str],
    emit_metrics: bool,
    audit: bool,
) -> None:
    duration_ms = (time.perf_counter() - start) * 1000

    if emit_metrics:
        labels = {"tool": name, "status": "success" if success else "error"}
        _metrics.counter("tool.invocations", labels=labels)
        _metrics.timer("tool.latency", duration_ms, labels={"tool": name})

    if audit:
        _audit.tool_invocation(
            tool_name=name,
            success=success,
            duration_ms=round(duration_ms, 2),
            error=error_msg,
            correlation_id=corr_id,
        )


def _envelope_failed(result: Any) -> Optional[str]:
    """Return the error message of a failed response envelope, if any."""
    if isinstance(result, dict) and result.get("success") is False:
        return result.get("error") or "error"
    return None


def mcp_tool(
    tool_name: Optional[str] = None, emit_metrics: bool = True, audit: bool = True
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator for async MCP tool handlers with observability.

    Automatically:
    - Establishes a correlation ID for the call (prefix ``tool``)
    - Emits invocation counter and latency timer metrics
    - Creates an audit log entry

    A handler that returns an error envelope (``success: False``) is recorded
    as a failed invocation even though it did not raise.

    Args:
        tool_name: Override tool name (defaults to function name)
        emit_metrics: Whether to emit metrics
        audit: Whether to create audit log entries
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        name = tool_name or func.__name__

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> T:
            existing_corr_id = get_correlation_id()
            corr_id = existing_corr_id or generate_correlation_id(prefix="tool")

            if not existing_corr_id:
                with sync_request_context(correlation_id=corr_id):
                    return await _async_tool_impl(corr_id, *args, **kwargs)
            return await _async_tool_impl(corr_id, *args, **kwargs)

        async def _async_tool_impl(_corr_id: str, *args: Any, **kwargs: Any) -> T:
            start = time.perf_counter()
            success = True
            error_msg = None
            try:
                result = await func(*args, **kwargs)
                error_msg = _envelope_failed(result)
                success = error_msg is None
                return result
            except Exception as e:
                success = False
                error_msg = str(e)
                raise
            finally:
                _record_outcome(name, _corr_id, start, success, error_msg, emit_metrics, audit)

        return async_wrapper

    return decorator
