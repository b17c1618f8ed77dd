"""JSON output helpers for CLI commands.

Every command prints exactly one response envelope to stdout, the same shape
the MCP tools return. Failed envelopes exit with status 1.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Mapping, NoReturn, Optional

import click

from clickup_mcp.core.responses import ErrorCode, ErrorType, error_response, success_response


def emit(envelope: Mapping[str, Any]) -> None:
    """Print *envelope*; exit 1 when it reports failure."""
    click.echo(json.dumps(envelope, indent=2, default=str))
    if envelope.get("success") is False:
        sys.exit(1)


def emit_success(data: Mapping[str, Any], **kwargs: Any) -> None:
    emit(asdict(success_response(data, **kwargs)))


def emit_error(
    message: str,
    *,
    code: str = ErrorCode.VALIDATION_ERROR.value,
    error_type: str = ErrorType.VALIDATION.value,
    remediation: Optional[str] = None,
    details: Optional[Mapping[str, Any]] = None,
) -> NoReturn:
    emit(
        asdict(
            error_response(
                message,
                error_code=code,
                error_type=error_type,
                remediation=remediation,
                details=details,
            )
        )
    )
    sys.exit(1)
