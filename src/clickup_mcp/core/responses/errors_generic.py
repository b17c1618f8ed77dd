"""
Generic HTTP-analog error helpers for MCP tool responses.

validation (400), feature disabled (403) and internal (500).
"""

from typing import Any, Mapping, Optional

from clickup_mcp.core.responses.builders import error_response
from clickup_mcp.core.responses.types import ErrorCode, ErrorType, ToolResponse


def validation_error(
    message: str,
    *,
    field: Optional[str] = None,
    details: Optional[Mapping[str, Any]] = None,
    remediation: Optional[str] = None,
    request_id: Optional[str] = None,
) -> ToolResponse:
    """Create a validation error response (HTTP 400 analog).

    Args:
        message: Human-readable description of the validation failure.
        field: The field that failed validation.
        details: Additional context (e.g., constraint violated, value received).
        remediation: Guidance on how to fix the input.
        request_id: Correlation identifier.

    Example:
        >>> validation_error("dependsOn must be a list", field="dependencies[0].dependsOn")
    """
    error_details = dict(details) if details else {}
    if field and "field" not in error_details:
        error_details["field"] = field

    return error_response(
        message,
        error_code=ErrorCode.VALIDATION_ERROR,
        error_type=ErrorType.VALIDATION,
        details=error_details if error_details else None,
        remediation=remediation,
        request_id=request_id,
    )


def feature_disabled_error(
    feature: str,
    *,
    remediation: Optional[str] = None,
    request_id: Optional[str] = None,
) -> ToolResponse:
    """Create an error response for a tool disabled by configuration."""
    return error_response(
        f"'{feature}' is disabled by configuration",
        error_code=ErrorCode.FEATURE_DISABLED,
        error_type=ErrorType.FEATURE_FLAG,
        details={"feature": feature},
        remediation=remediation or "Remove it from CLICKUP_MCP_DISABLED_TOOLS or the disabled_tools config key.",
        request_id=request_id,
    )


def internal_error(
    message: str = "An internal error occurred",
    *,
    details: Optional[Mapping[str, Any]] = None,
    request_id: Optional[str] = None,
) -> ToolResponse:
    """Create an internal error response (HTTP 500 analog).

    Args:
        message: Human-readable description (keep vague for security).
        details: Non-sensitive context, such as the action and error class.
        request_id: Correlation identifier for log correlation.
    """
    remediation = "Check configuration and logs for details."
    if request_id:
        remediation += f" Reference: {request_id}"

    return error_response(
        message,
        error_code=ErrorCode.INTERNAL_ERROR,
        error_type=ErrorType.INTERNAL,
        remediation=remediation,
        details=details,
        request_id=request_id,
    )
