"""Error-to-ErrorCode mapping registry.

Provides a centralized mapping from exception types to (ErrorCode, ErrorType)
tuples, enabling consistent error response generation across the codebase.

Usage:
    from clickup_mcp.core.errors.base import error_to_response

    try:
        await mutator.add(task_id, depends_on)
    except Exception as e:
        result = error_to_response(e)
        if result is not None:
            return result
        raise  # Unknown error, re-raise
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from clickup_mcp.core.errors.clickup import ClickUpAuthenticationError, ClickUpRateLimitError
from clickup_mcp.core.errors.dependency import (
    CircularDependencyError,
    DependencyError,
    MalformedBatchError,
    MissingReferenceError,
    RemoteRejectedError,
    SelfDependencyError,
    TaskNotFoundError,
)
from clickup_mcp.core.errors.execution import ActionRouterError
from clickup_mcp.core.responses.builders import error_response
from clickup_mcp.core.responses.types import ErrorCode, ErrorType

ERROR_MAPPINGS: Dict[Type[Exception], Tuple[ErrorCode, ErrorType]] = {
    # --- Reference / validation errors ---
    MissingReferenceError: (ErrorCode.MISSING_REQUIRED, ErrorType.VALIDATION),
    SelfDependencyError: (ErrorCode.SELF_REFERENCE, ErrorType.VALIDATION),
    MalformedBatchError: (ErrorCode.VALIDATION_ERROR, ErrorType.VALIDATION),
    ActionRouterError: (ErrorCode.VALIDATION_ERROR, ErrorType.VALIDATION),
    # --- Graph / resource errors ---
    TaskNotFoundError: (ErrorCode.TASK_NOT_FOUND, ErrorType.NOT_FOUND),
    CircularDependencyError: (ErrorCode.CIRCULAR_DEPENDENCY, ErrorType.CONFLICT),
    # --- Remote errors ---
    RemoteRejectedError: (ErrorCode.REMOTE_REJECTED, ErrorType.CONFLICT),
    ClickUpAuthenticationError: (ErrorCode.UNAUTHORIZED, ErrorType.AUTHENTICATION),
    ClickUpRateLimitError: (ErrorCode.RATE_LIMIT_EXCEEDED, ErrorType.RATE_LIMIT),
    # --- Catch-all for the domain ---
    DependencyError: (ErrorCode.VALIDATION_ERROR, ErrorType.VALIDATION),
}


def lookup_error_mapping(exc: BaseException) -> Optional[Tuple[ErrorCode, ErrorType]]:
    """Return the (code, type) pair for *exc*, walking its MRO.

    The most specific registered class wins, so subclasses inherit their
    parent's mapping unless they are registered themselves. A retryable
    :class:`RemoteRejectedError` without a more specific mapping is reported
    as ``unavailable``.
    """
    for klass in type(exc).__mro__:
        mapping = ERROR_MAPPINGS.get(klass)
        if mapping is None:
            continue
        if klass is RemoteRejectedError and getattr(exc, "retryable", False):
            return ErrorCode.REMOTE_REJECTED, ErrorType.UNAVAILABLE
        return mapping
    return None


def error_to_response(
    exc: Exception,
    *,
    details: Optional[Mapping[str, Any]] = None,
    request_id: Optional[str] = None,
    telemetry: Optional[Mapping[str, Any]] = None,
) -> Optional[dict]:
    """Convert a known exception to a standard error_response dict, or None if unknown.

    Args:
        exc: The exception to convert.
        details: Extra details merged over the exception's own ``details``.
        request_id: Correlation identifier for the envelope.
        telemetry: Timing metadata captured before the failure.

    Returns:
        A dict suitable for an MCP tool response, or None if no class in the
        exception's MRO is registered in ERROR_MAPPINGS.
    """
    mapping = lookup_error_mapping(exc)
    if mapping is None:
        return None

    code, error_type = mapping
    merged: Dict[str, Any] = dict(getattr(exc, "details", None) or {})
    if details:
        merged.update(details)

    rate_limit = None
    retry_after = getattr(exc, "retry_after", None)
    if retry_after is not None:
        rate_limit = {"retry_after": retry_after}

    message = getattr(exc, "message", None) or str(exc)
    return asdict(
        error_response(
            message,
            error_code=code,
            error_type=error_type,
            remediation=getattr(exc, "remediation", None),
            details=merged or None,
            request_id=request_id,
            rate_limit=rate_limit,
            telemetry=telemetry,
        )
    )
