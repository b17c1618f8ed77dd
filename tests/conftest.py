"""Shared fixtures: an in-memory ClickUp store standing in for ClickUpClient."""

from collections import defaultdict, deque
from typing import Any, Deque, Dict, List, Optional, Tuple

import pytest

from clickup_mcp.config import ClickUpSettings, DependencySettings, ServerConfig, set_config
from clickup_mcp.core.errors import TaskNotFoundError
from clickup_mcp.core.task import DependencyService


class FakeClickUpStore:
    """Async drop-in for ``ClickUpClient`` backed by dicts.

    Edges are stored once and projected onto both endpoint records the way
    ClickUp does, so parsing code has to filter by ``task_id``.
    """

    def __init__(self, *, team_id: Optional[str] = "team-1", page_size: int = 100) -> None:
        self.team_id = team_id
        self.page_size = page_size
        self.tasks: Dict[str, Dict[str, Any]] = {}
        self.edges: List[Tuple[str, str]] = []
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self._failures: Dict[str, Deque[Exception]] = defaultdict(deque)
        self.closed = False

    # -- setup helpers -------------------------------------------------

    def add_task(
        self,
        task_id: str,
        name: Optional[str] = None,
        *,
        list_name: str = "Backlog",
        status: str = "to do",
        parent: Optional[str] = None,
    ) -> "FakeClickUpStore":
        self.tasks[task_id] = {
            "id": task_id,
            "name": name or task_id,
            "status": {"status": status},
            "list": {"id": f"list-{list_name.lower()}", "name": list_name},
            "parent": parent,
        }
        return self

    def link(self, task_id: str, depends_on: str) -> "FakeClickUpStore":
        """Record ``task_id waits_on depends_on`` without going through the API."""
        self.edges.append((task_id, depends_on))
        return self

    def fail_next(self, method: str, *errors: Exception) -> None:
        """Raise *errors*, one per call, from the next calls to *method*."""
        self._failures[method].extend(errors)

    def waiting_on(self, task_id: str) -> List[str]:
        return [dep for (waiter, dep) in self.edges if waiter == task_id]

    def remote_calls(self, method: Optional[str] = None) -> List[Tuple[str, Tuple[Any, ...]]]:
        return [call for call in self.calls if method is None or call[0] == method]

    # -- client surface ------------------------------------------------

    async def __aenter__(self) -> "FakeClickUpStore":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        self.closed = True

    async def get_task(self, task_id: str, *, include_subtasks: bool = False) -> Dict[str, Any]:
        self._record("get_task", task_id, include_subtasks)
        record = self._record_for(task_id)
        if include_subtasks:
            record["subtasks"] = [
                self._record_for(child_id) for child_id, task in self.tasks.items() if task["parent"] == task_id
            ]
        return record

    async def get_team_tasks(self, page: int = 0, *, include_subtasks: bool = True) -> Dict[str, Any]:
        self._record("get_team_tasks", page, include_subtasks)
        ordered = list(self.tasks.values())
        if not include_subtasks:
            ordered = [task for task in ordered if not task["parent"]]
        start = page * self.page_size
        chunk = ordered[start : start + self.page_size]
        return {
            "tasks": [dict(task) for task in chunk],
            "last_page": start + self.page_size >= len(ordered),
        }

    async def add_dependency(self, task_id: str, depends_on: str) -> Dict[str, Any]:
        self._record("add_dependency", task_id, depends_on)
        for ref in (task_id, depends_on):
            if ref not in self.tasks:
                raise TaskNotFoundError(ref)
        if (task_id, depends_on) not in self.edges:
            self.edges.append((task_id, depends_on))
        return {}

    async def delete_dependency(self, task_id: str, depends_on: str) -> Dict[str, Any]:
        self._record("delete_dependency", task_id, depends_on)
        for ref in (task_id, depends_on):
            if ref not in self.tasks:
                raise TaskNotFoundError(ref)
        self.edges = [edge for edge in self.edges if edge != (task_id, depends_on)]
        return {}

    # -- internals -----------------------------------------------------

    def _record(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        queue = self._failures.get(method)
        if queue:
            raise queue.popleft()

    def _record_for(self, task_id: str) -> Dict[str, Any]:
        if task_id not in self.tasks:
            raise TaskNotFoundError(task_id)
        record = dict(self.tasks[task_id])
        record["dependencies"] = [
            {"task_id": waiter, "depends_on": dep, "type": 0 if waiter == task_id else 1}
            for (waiter, dep) in self.edges
            if task_id in (waiter, dep)
        ]
        return record


@pytest.fixture(autouse=True)
def _reset_global_config():
    yield
    set_config(None)


@pytest.fixture
def store():
    """Store seeded with tasks T1, T2, T3 in the Backlog list."""
    fake = FakeClickUpStore()
    for task_id in ("T1", "T2", "T3"):
        fake.add_task(task_id, f"Task {task_id[1:]}")
    return fake


@pytest.fixture
def server_config():
    return ServerConfig(
        clickup=ClickUpSettings(api_token="pk_test_token", team_id="team-1"),
        dependencies=DependencySettings(retry_backoff_seconds=0.0),
    )


@pytest.fixture
def service(store, server_config):
    return DependencyService.from_config(store, server_config)


@pytest.fixture
def make_store():
    """Factory for empty stores, for tests that need custom paging or team IDs."""
    return FakeClickUpStore
