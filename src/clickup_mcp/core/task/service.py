"""Assembly of the dependency components around one ClickUp client.

``DependencyService`` wires resolver -> query -> guard -> mutator -> bulk
orchestrator from a client handle and the server configuration. Tests
build it around a fake client the same way.
"""

from __future__ import annotations

from typing import Any, Optional

from clickup_mcp.config.decorators import log_call, timed
from clickup_mcp.config.domains import DependencySettings
from clickup_mcp.config.server import ServerConfig
from clickup_mcp.core.clickup.client import ClickUpClient
from clickup_mcp.core.task.batch import BulkDependencyOrchestrator
from clickup_mcp.core.task.guard import CycleGuard
from clickup_mcp.core.task.models import (
    BulkReport,
    DependencyEdge,
    DependencyType,
    TaskDependencies,
    TaskReference,
)
from clickup_mcp.core.task.mutations import DependencyMutator
from clickup_mcp.core.task.queries import DependencyQuery
from clickup_mcp.core.task.resolver import TaskResolver


class DependencyService:
    """Facade over the dependency components sharing one client."""

    def __init__(
        self,
        client: ClickUpClient,
        *,
        settings: Optional[DependencySettings] = None,
        max_search_pages: int = 10,
        workspace_id: Optional[str] = None,
    ) -> None:
        settings = settings or DependencySettings()
        self.client = client
        self.settings = settings
        self.resolver = TaskResolver(client, max_search_pages=max_search_pages)
        self.query = DependencyQuery(client, self.resolver)
        self.guard = CycleGuard(self.query, max_depth=settings.cycle_check_depth)
        self.mutator = DependencyMutator(client, self.guard, workspace_id=workspace_id)
        self.bulk = BulkDependencyOrchestrator(
            self.mutator,
            max_retry_count=settings.max_retry_count,
            retry_backoff_seconds=settings.retry_backoff_seconds,
            max_batch_size=settings.max_batch_size,
        )

    @classmethod
    def from_config(cls, client: ClickUpClient, config: ServerConfig) -> "DependencyService":
        return cls(
            client,
            settings=config.dependencies,
            max_search_pages=config.clickup.max_search_pages,
            workspace_id=config.clickup.team_id,
        )

    async def get_dependencies(self, ref: TaskReference, *, include_subtasks: bool = False) -> TaskDependencies:
        return await self.query.get_dependencies(ref, include_subtasks=include_subtasks)

    @log_call()
    async def add_dependency(
        self,
        task: TaskReference,
        depends_on: TaskReference,
        kind: Any = DependencyType.WAITING_ON,
    ) -> DependencyEdge:
        """Resolve both references, then run the guarded add."""
        task_id = await self.resolver.resolve(task, role="task")
        depends_on_id = await self.resolver.resolve(depends_on, role="dependency task")
        return await self.mutator.add(task_id, depends_on_id, kind)

    @log_call()
    async def remove_dependency(self, task: TaskReference, dependency: TaskReference) -> tuple[str, str]:
        """Resolve both references and delete the edge; returns the resolved IDs."""
        task_id = await self.resolver.resolve(task, role="task")
        dependency_id = await self.resolver.resolve(dependency, role="dependency task")
        await self.mutator.remove(task_id, dependency_id)
        return task_id, dependency_id

    @timed("dependency_service.add_bulk")
    async def add_bulk(self, items: Any, *, continue_on_error: bool = False, retry_count: Any = 0) -> BulkReport:
        return await self.bulk.apply_batch(items, continue_on_error=continue_on_error, retry_count=retry_count)
