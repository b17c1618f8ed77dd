"""Read-only dependency queries.

Builds the ``waiting_on`` view of a task from its ClickUp record. Counterpart
fetch failures are logged and skipped so one deleted or inaccessible task
does not hide the rest of the list. ``blocking`` is never computed: doing so
would need an inverse search over the whole workspace.
"""

from __future__ import annotations

import logging
from typing import Set

from clickup_mcp.core.clickup.client import ClickUpClient
from clickup_mcp.core.errors.dependency import DependencyError
from clickup_mcp.core.task._helpers import (
    build_dependency_info,
    record_waiting_on_ids,
    subtasks_with_dependencies,
)
from clickup_mcp.core.task.models import TaskDependencies, TaskReference, TaskSummary
from clickup_mcp.core.task.resolver import TaskResolver

logger = logging.getLogger(__name__)


class DependencyQuery:
    """Fetch and assemble dependency edges for a task."""

    def __init__(self, client: ClickUpClient, resolver: TaskResolver) -> None:
        self.client = client
        self.resolver = resolver

    async def get_dependencies(self, ref: TaskReference, *, include_subtasks: bool = False) -> TaskDependencies:
        """Return the dependency view for *ref*.

        With ``include_subtasks`` every embedded subtask that records
        dependencies is queried one level deep and its lists are appended.

        Raises:
            MissingReferenceError / TaskNotFoundError: from resolution or a
                remote 404 on the task itself.
            RemoteRejectedError: the task itself could not be fetched.
        """
        task_id = await self.resolver.resolve(ref)
        return await self._collect(task_id, include_subtasks=include_subtasks)

    async def waiting_on_ids(self, task_id: str) -> Set[str]:
        """IDs that *task_id* currently waits on, read from its task record."""
        record = await self.client.get_task(task_id)
        return set(record_waiting_on_ids(record))

    async def _collect(self, task_id: str, *, include_subtasks: bool) -> TaskDependencies:
        record = await self.client.get_task(task_id, include_subtasks=include_subtasks)
        result = TaskDependencies(task=TaskSummary(id=str(record.get("id") or task_id), name=record.get("name") or ""))

        for depends_on in record_waiting_on_ids(record):
            try:
                counterpart = await self.client.get_task(depends_on)
            except DependencyError as exc:
                logger.warning("Failed to get dependency task %s: %s", depends_on, exc)
                result.skipped.append(depends_on)
                continue
            result.dependencies.waiting_on.append(build_dependency_info(counterpart))

        if include_subtasks:
            for subtask_id in subtasks_with_dependencies(record):
                try:
                    sub = await self._collect(subtask_id, include_subtasks=False)
                except DependencyError as exc:
                    logger.warning("Failed to get dependencies for subtask %s: %s", subtask_id, exc)
                    result.skipped.append(subtask_id)
                    continue
                result.dependencies.waiting_on.extend(sub.dependencies.waiting_on)
                result.dependencies.blocking.extend(sub.dependencies.blocking)
                result.skipped.extend(sub.skipped)

        logger.debug(
            "Collected dependencies for %s: waiting_on=%d skipped=%d",
            task_id,
            len(result.dependencies.waiting_on),
            len(result.skipped),
        )
        return result
