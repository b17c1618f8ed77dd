"""
Request context for clickup-mcp.

Holds request-scoped state (correlation ID, client ID) in
context variables so that logs, audit lines, and response envelopes emitted
anywhere inside one tool call share the same correlation ID.

Example:
    from clickup_mcp.core.context import sync_request_context, get_correlation_id

    with sync_request_context(correlation_id="tool_abc123"):
        assert get_correlation_id() == "tool_abc123"
"""

import uuid
from contextlib import asynccontextmanager, contextmanager
from contextvars import ContextVar
from typing import AsyncIterator, Iterator, Optional

# Context variables for request-scoped state
_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
_client_id: ContextVar[str] = ContextVar("client_id", default="anonymous")


def generate_correlation_id(prefix: str = "req") -> str:
    """Generate a new correlation ID such as ``tool_1f3a9c0d2b7e``."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def get_correlation_id() -> str:
    """Return the correlation ID for the current context (empty when unset)."""
    return _correlation_id.get()


def get_client_id() -> str:
    """Return the client ID for the current context."""
    return _client_id.get()


@contextmanager
def sync_request_context(
    *,
    correlation_id: Optional[str] = None,
    client_id: Optional[str] = None,
) -> Iterator[str]:
    """Establish request context for the duration of the ``with`` block.

    Yields the effective correlation ID. Previous values are restored on exit,
    so nested contexts behave correctly.
    """
    corr = correlation_id or generate_correlation_id()
    corr_token = _correlation_id.set(corr)
    client_token = _client_id.set(client_id or "anonymous")
    try:
        yield corr
    finally:
        _client_id.reset(client_token)
        _correlation_id.reset(corr_token)


@asynccontextmanager
async def request_context(
    *,
    correlation_id: Optional[str] = None,
    client_id: Optional[str] = None,
) -> AsyncIterator[str]:
    """Async variant of :func:`sync_request_context`."""
    with sync_request_context(correlation_id=correlation_id, client_id=client_id) as corr:
        yield corr
