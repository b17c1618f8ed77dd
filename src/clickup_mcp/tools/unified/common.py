"""Shared helpers for unified tool routers.

Request IDs, metric names, validation errors and dispatch error handling,
parameterised by tool name so each router can reuse them.

Imports only from ``clickup_mcp.core`` and the standard library.
"""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Callable, Optional

from clickup_mcp.core.context import generate_correlation_id, get_correlation_id
from clickup_mcp.core.errors.base import error_to_response
from clickup_mcp.core.errors.execution import ActionRouterError
from clickup_mcp.core.responses.builders import error_response
from clickup_mcp.core.responses.errors_generic import internal_error, validation_error
from clickup_mcp.core.responses.sanitization import sanitize_error_message
from clickup_mcp.core.responses.types import ErrorCode, ErrorType
from clickup_mcp.tools.unified.router import ActionRouter

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# 1. Request ID
# ---------------------------------------------------------------------------


def build_request_id(tool_name: str) -> str:
    """Return an existing correlation ID or generate one with *tool_name* prefix."""
    return get_correlation_id() or generate_correlation_id(prefix=tool_name)


# ---------------------------------------------------------------------------
# 2. Metric name
# ---------------------------------------------------------------------------


def make_metric_name(prefix: str, action: str) -> str:
    """Build a dot-separated metric key, normalising hyphens to underscores.

    Examples::

        make_metric_name("unified_tools.dependency", "bulk-add") -> "unified_tools.dependency.bulk_add"
    """
    return f"{prefix}.{action.replace('-', '_')}"


# ---------------------------------------------------------------------------
# 3. Dispatch with standard errors
# ---------------------------------------------------------------------------


def _unsupported_action(router: ActionRouter, tool_name: str, action: str, request_id: str) -> dict:
    allowed = router.allowed_actions()
    allowed_str = ", ".join(sorted(allowed))
    return asdict(
        validation_error(
            f"Unsupported {tool_name} action '{action}'. Allowed actions: {allowed_str}",
            field="action",
            details={"action": action, "allowed_actions": list(allowed)},
            remediation=f"Use one of: {allowed_str}",
            request_id=request_id,
        )
    )


async def dispatch_with_standard_errors(
    router: ActionRouter,
    tool_name: str,
    action: str,
    /,
    *,
    request_id: Optional[str] = None,
    **kwargs: Any,
) -> dict:
    """Dispatch *action* through *router*, converting exceptions to envelopes.

    Known domain errors become envelopes through ``ERROR_MAPPINGS`` with the
    qualified action name added to ``details``. Anything else is logged with
    its traceback and returned as ``INTERNAL_ERROR`` with a sanitized message.
    """
    rid = request_id or build_request_id(tool_name)
    action_key = f"{tool_name}.{action}"

    try:
        return await router.dispatch(action, **kwargs)
    except ActionRouterError:
        return _unsupported_action(router, tool_name, action, rid)
    except Exception as exc:
        response = error_to_response(exc, details={"action": action_key}, request_id=rid)
        if response is not None:
            logger.info(
                "%s action '%s' failed: %s",
                tool_name.capitalize(),
                action,
                getattr(exc, "message", None) or exc,
            )
            return response

        logger.exception(
            "%s action '%s' failed with unexpected error: %s",
            tool_name.capitalize(),
            action,
            exc,
        )
        return asdict(
            internal_error(
                f"{tool_name.capitalize()} action '{action}' failed: "
                f"{sanitize_error_message(exc, context=action_key)}",
                details={"action": action_key, "error_type": exc.__class__.__name__},
                request_id=rid,
            )
        )


# ---------------------------------------------------------------------------
# 4. Validation error factory
# ---------------------------------------------------------------------------


def make_validation_error_fn(
    tool_name: str,
    *,
    default_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
) -> Callable[..., dict]:
    """Return a validation-error builder pre-bound to *tool_name*.

    The returned callable has the signature::

        validation_error(
            *,
            field: str,
            action: str,
            message: str,
            request_id: str | None = None,
            code: ErrorCode = default_code,
            remediation: str | None = None,
        ) -> dict
    """

    def _validation_error(
        *,
        field: str,
        action: str,
        message: str,
        request_id: Optional[str] = None,
        code: ErrorCode = default_code,
        remediation: Optional[str] = None,
    ) -> dict:
        return asdict(
            error_response(
                f"Invalid field '{field}' for {tool_name}.{action}: {message}",
                error_code=code,
                error_type=ErrorType.VALIDATION,
                remediation=remediation or f"Provide a valid '{field}' value",
                details={"field": field, "action": f"{tool_name}.{action}"},
                request_id=request_id or build_request_id(tool_name),
            )
        )

    return _validation_error
