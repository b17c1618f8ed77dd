"""ClickUp API error classes.

Specialisations of :class:`RemoteRejectedError` for failures whose handling
differs from a generic refusal.
"""

from typing import Any, Optional

from clickup_mcp.core.errors.dependency import RemoteRejectedError


class ClickUpAuthenticationError(RemoteRejectedError):
    """Raised when ClickUp rejects the API token (401/403).

    This error is NOT retryable - the token must be fixed first.
    """

    default_remediation = "Check CLICKUP_API_TOKEN and that the token can access this workspace."

    def __init__(
        self,
        message: str = "ClickUp authentication failed",
        *,
        status_code: Optional[int] = 401,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, status_code=status_code, retryable=False, **kwargs)


class ClickUpRateLimitError(RemoteRejectedError):
    """Raised when ClickUp answers 429.

    Always retryable. ``retry_after`` holds the server-provided delay in
    seconds when the response carried one.
    """

    def __init__(
        self,
        retry_after: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        self.retry_after = retry_after
        message = "ClickUp rate limit exceeded"
        if retry_after:
            message += f" (retry after {retry_after}s)"
        kwargs.setdefault(
            "remediation",
            f"Wait {int(retry_after)} seconds before retrying." if retry_after else "Retry with exponential backoff.",
        )
        super().__init__(message, status_code=429, retryable=True, **kwargs)
        if retry_after is not None:
            self.details["retry_after"] = retry_after
