"""
Error message sanitization for MCP tool responses.

Converts exceptions to user-safe messages without exposing internal details,
logging full exception information server-side for debugging.
"""

import json
import logging

import httpx

logger = logging.getLogger(__name__)


def sanitize_error_message(
    exc: Exception,
    context: str = "",
    include_type: bool = False,
) -> str:
    """
    Convert exception to user-safe message without internal details.

    Args:
        exc: The exception to sanitize
        context: Optional context for logging (e.g., "add_task_dependency")
        include_type: Whether to include exception type name in message

    Returns:
        User-safe error message without file paths, stack traces, tokens or
        internal state
    """
    if context:
        logger.debug(f"Error in {context}: {exc}", exc_info=True)
    else:
        logger.debug(f"Error: {exc}", exc_info=True)

    type_name = type(exc).__name__

    if isinstance(exc, httpx.TimeoutException):
        return "Request to ClickUp timed out"
    if isinstance(exc, httpx.HTTPError):
        return "Connection to ClickUp failed - service may be unavailable"
    if isinstance(exc, json.JSONDecodeError):
        return "Invalid JSON format"
    if isinstance(exc, ValueError):
        suffix = f" ({type_name})" if include_type else ""
        return f"Invalid value provided{suffix}"
    if isinstance(exc, KeyError):
        return "Required configuration key not found"
    if isinstance(exc, ConnectionError):
        return "Connection failed - service may be unavailable"
    if isinstance(exc, OSError):
        return "System I/O error occurred"

    suffix = f" ({type_name})" if include_type else ""
    return f"An internal error occurred{suffix}"
