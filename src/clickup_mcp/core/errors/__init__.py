"""Unified error hierarchy for clickup-mcp.

All custom exception classes are defined in domain-specific modules within
this package. This __init__.py re-exports everything for convenient access.

Usage:
    from clickup_mcp.core.errors import CircularDependencyError, error_to_response
"""

from clickup_mcp.core.errors.base import ERROR_MAPPINGS, error_to_response, lookup_error_mapping
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

__all__ = [
    "ERROR_MAPPINGS",
    "error_to_response",
    "lookup_error_mapping",
    "ClickUpAuthenticationError",
    "ClickUpRateLimitError",
    "CircularDependencyError",
    "DependencyError",
    "MalformedBatchError",
    "MissingReferenceError",
    "RemoteRejectedError",
    "SelfDependencyError",
    "TaskNotFoundError",
    "ActionRouterError",
]
