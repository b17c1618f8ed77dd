"""Task reference resolution.

Maps an id-or-name reference to a canonical ClickUp task ID. IDs pass
through untouched; names are looked up with the paginated workspace task
search.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from clickup_mcp.core.clickup.client import ClickUpClient
from clickup_mcp.core.errors.dependency import MissingReferenceError, TaskNotFoundError
from clickup_mcp.core.task._helpers import clean_ref, normalize_name
from clickup_mcp.core.task.models import TaskReference

logger = logging.getLogger(__name__)


class TaskResolver:
    """Resolve :class:`TaskReference` values to task IDs."""

    def __init__(self, client: ClickUpClient, *, max_search_pages: int = 10) -> None:
        self.client = client
        self.max_search_pages = max(1, max_search_pages)

    async def resolve(self, ref: TaskReference, *, role: str = "task") -> str:
        """Return the task ID for *ref*.

        A non-blank ``task_id`` is returned as-is without an existence check.

        Raises:
            MissingReferenceError: neither ID nor name was supplied.
            TaskNotFoundError: no task matched the name (and list name).
        """
        task_id = clean_ref(ref.task_id)
        if task_id:
            return task_id

        task_name = clean_ref(ref.task_name)
        if not task_name:
            raise MissingReferenceError(role)

        list_name = clean_ref(ref.list_name)
        if not list_name:
            logger.warning(
                "Resolving %s by name '%s' without a list name; the first match in the workspace is used",
                role,
                task_name,
            )

        match = await self._search_by_name(task_name, list_name)
        if match is None:
            raise TaskNotFoundError(task_name, list_name=list_name)
        return match

    async def _search_by_name(self, task_name: str, list_name: Optional[str]) -> Optional[str]:
        wanted = normalize_name(task_name)
        wanted_list = normalize_name(list_name) if list_name else None

        for page in range(self.max_search_pages):
            data = await self.client.get_team_tasks(page, include_subtasks=True)
            tasks = data.get("tasks") or []
            for task in tasks:
                if self._matches(task, wanted, wanted_list):
                    logger.debug("Resolved task name '%s' to %s on page %d", task_name, task["id"], page)
                    return str(task["id"])
            if not tasks or data.get("last_page") is True:
                return None

        logger.info(
            "Stopped searching for task '%s' after %d pages",
            task_name,
            self.max_search_pages,
        )
        return None

    @staticmethod
    def _matches(task: Mapping[str, Any], wanted: str, wanted_list: Optional[str]) -> bool:
        if not task.get("id") or normalize_name(task.get("name")) != wanted:
            return False
        if wanted_list is None:
            return True
        task_list = task.get("list")
        list_name = task_list.get("name") if isinstance(task_list, Mapping) else None
        return normalize_name(list_name) == wanted_list
