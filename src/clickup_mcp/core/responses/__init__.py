"""
Standard response contracts for MCP tool operations.

Re-exports all public symbols from sub-modules. Callers can use
``from clickup_mcp.core.responses import success_response`` or import from
canonical sub-module paths like ``responses.builders``.

Sub-modules:
    types           - ErrorCode, ErrorType, ToolResponse, _build_meta
    builders        - success_response, error_response
    errors_generic  - validation_error, internal_error, feature_disabled_error
    sanitization    - sanitize_error_message
"""

from clickup_mcp.core.responses.builders import (  # noqa: F401
    error_response,
    success_response,
)
from clickup_mcp.core.responses.errors_generic import (  # noqa: F401
    feature_disabled_error,
    internal_error,
    validation_error,
)
from clickup_mcp.core.responses.sanitization import (  # noqa: F401
    sanitize_error_message,
)
from clickup_mcp.core.responses.types import (  # noqa: F401
    RESPONSE_VERSION,
    ErrorCode,
    ErrorType,
    ToolResponse,
    _build_meta,
)

__all__ = [
    "RESPONSE_VERSION",
    "ErrorCode",
    "ErrorType",
    "ToolResponse",
    "error_response",
    "success_response",
    "feature_disabled_error",
    "internal_error",
    "validation_error",
    "sanitize_error_message",
]
