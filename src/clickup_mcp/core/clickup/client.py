"""Async client for the ClickUp REST API v2.

Only the endpoints the dependency tools need are wrapped. Every non-2xx
response and every transport failure is translated into the dependency error
hierarchy, so callers never see raw ``httpx`` exceptions:

    401/403      -> ClickUpAuthenticationError
    404          -> TaskNotFoundError
    429          -> ClickUpRateLimitError (retryable)
    5xx          -> RemoteRejectedError (retryable)
    other 4xx    -> RemoteRejectedError
    transport    -> RemoteRejectedError (retryable)
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Optional

import httpx

from clickup_mcp.config.domains import ClickUpSettings
from clickup_mcp.core.clickup.shared import extract_error_message, parse_retry_after
from clickup_mcp.core.errors.clickup import ClickUpAuthenticationError, ClickUpRateLimitError
from clickup_mcp.core.errors.dependency import RemoteRejectedError, TaskNotFoundError
from clickup_mcp.core.observability.redaction import redact_for_logging

logger = logging.getLogger(__name__)

# Workspace-prefixed custom task IDs such as ``DEV-1234``
_CUSTOM_TASK_ID = re.compile(r"^[A-Z][A-Z0-9]*-\d+$")


def _bool_param(value: bool) -> str:
    return "true" if value else "false"


def is_custom_task_id(task_id: str) -> bool:
    return bool(_CUSTOM_TASK_ID.match(task_id))


class ClickUpClient:
    """Thin async wrapper over one shared ``httpx.AsyncClient``.

    The client owns its ``httpx.AsyncClient`` unless one is injected, and
    closes it in :meth:`aclose` (or on ``async with`` exit).

    Example:
        async with ClickUpClient(config.clickup) as client:
            task = await client.get_task("86a1b2c3")
    """

    def __init__(
        self,
        settings: ClickUpSettings,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=settings.timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    @property
    def team_id(self) -> Optional[str]:
        return self.settings.team_id

    async def __aenter__(self) -> "ClickUpClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    async def get_task(self, task_id: str, *, include_subtasks: bool = False) -> Dict[str, Any]:
        """``GET /task/{task_id}``."""
        params = self._task_params(task_id)
        if include_subtasks:
            params["include_subtasks"] = _bool_param(True)
        return await self._request("GET", f"/task/{task_id}", params=params or None, task_ref=task_id)

    async def get_team_tasks(self, page: int = 0, *, include_subtasks: bool = True) -> Dict[str, Any]:
        """``GET /team/{team_id}/task`` for one page of the workspace task search."""
        if not self.team_id:
            raise RemoteRejectedError(
                "ClickUp team ID is not configured",
                remediation="Set CLICKUP_TEAM_ID, or reference tasks by ID instead of name.",
            )
        params = {"page": page, "include_subtasks": _bool_param(include_subtasks)}
        return await self._request("GET", f"/team/{self.team_id}/task", params=params)

    async def add_dependency(self, task_id: str, depends_on: str) -> Dict[str, Any]:
        """``POST /task/{task_id}/dependency``: *task_id* waits on *depends_on*."""
        return await self._request(
            "POST",
            f"/task/{task_id}/dependency",
            params=self._task_params(task_id) or None,
            json_body={"depends_on": depends_on},
            task_ref=task_id,
        )

    async def delete_dependency(self, task_id: str, depends_on: str) -> Dict[str, Any]:
        """``DELETE /task/{task_id}/dependency?depends_on=...``."""
        return await self._request(
            "DELETE",
            f"/task/{task_id}/dependency",
            params={"depends_on": depends_on, **self._task_params(task_id)},
            task_ref=task_id,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _task_params(self, task_id: str) -> Dict[str, Any]:
        """Query parameters ClickUp needs to resolve *task_id* in the path.

        Custom task IDs are only resolved when the request names the
        workspace that owns them.
        """
        if not is_custom_task_id(task_id):
            return {}
        if not self.team_id:
            raise RemoteRejectedError(
                f"Custom task ID '{task_id}' needs a configured ClickUp team ID",
                remediation="Set CLICKUP_TEAM_ID, or reference the task by its ClickUp ID.",
            )
        return {"custom_task_ids": _bool_param(True), "team_id": self.team_id}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
        task_ref: Optional[str] = None,
    ) -> Dict[str, Any]:
        if not self.settings.api_token:
            raise ClickUpAuthenticationError("ClickUp API token is not configured", status_code=None)

        logger.debug(
            "ClickUp request %s %s %s",
            method,
            path,
            redact_for_logging({"params": params, "body": json_body}),
        )
        try:
            response = await self._http.request(
                method,
                path,
                params=params,
                json=json_body,
                headers={"Authorization": self.settings.api_token},
            )
        except httpx.TimeoutException as exc:
            raise RemoteRejectedError(
                f"ClickUp request timed out: {method} {path}",
                retryable=True,
                original_error=exc,
            ) from exc
        except httpx.HTTPError as exc:
            raise RemoteRejectedError(
                f"ClickUp request failed: {type(exc).__name__}",
                retryable=True,
                original_error=exc,
            ) from exc

        if response.status_code >= 400:
            self._raise_for_status(response, method, path, task_ref)

        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError as exc:
            raise RemoteRejectedError(
                f"ClickUp returned a non-JSON body for {method} {path}",
                status_code=response.status_code,
                original_error=exc,
            ) from exc
        return data if isinstance(data, dict) else {"data": data}

    def _raise_for_status(
        self,
        response: httpx.Response,
        method: str,
        path: str,
        task_ref: Optional[str],
    ) -> None:
        status = response.status_code
        error_msg = extract_error_message(response)
        logger.warning("ClickUp %s %s failed with %d: %s", method, path, status, error_msg)

        if status in (401, 403):
            raise ClickUpAuthenticationError(f"ClickUp rejected the API token: {error_msg}", status_code=status)
        if status == 404 and task_ref is not None:
            raise TaskNotFoundError(task_ref)
        if status == 429:
            raise ClickUpRateLimitError(retry_after=parse_retry_after(response))
        raise RemoteRejectedError(
            f"ClickUp API error {status}: {error_msg}",
            status_code=status,
            retryable=status >= 500,
        )
