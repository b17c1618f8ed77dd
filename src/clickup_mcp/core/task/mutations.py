"""Single-edge dependency mutations against ClickUp.

Every add runs the cycle guard before the remote write. Removal is
unconditional: ClickUp decides whether the edge existed.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Tuple

from clickup_mcp.core.clickup.client import ClickUpClient
from clickup_mcp.core.errors.dependency import DependencyError, MissingReferenceError
from clickup_mcp.core.observability.audit import get_audit_logger
from clickup_mcp.core.task._helpers import clean_ref
from clickup_mcp.core.task.guard import CycleGuard
from clickup_mcp.core.task.models import DependencyEdge, DependencyType

logger = logging.getLogger(__name__)

DEPENDENCY_TYPES = tuple(t.value for t in DependencyType)


def parse_dependency_type(kind: Any) -> DependencyType:
    """Coerce *kind* to a :class:`DependencyType`, raising on unknown values."""
    if isinstance(kind, DependencyType):
        return kind
    try:
        return DependencyType(str(kind).strip().lower())
    except ValueError:
        raise DependencyError(
            f"Unknown dependency type '{kind}'",
            details={"dependency_type": kind},
            remediation=f"Use one of: {', '.join(DEPENDENCY_TYPES)}",
        ) from None


def normalize_edge(dependent_id: str, dependency_id: str, kind: DependencyType) -> Tuple[str, str]:
    """Return the ``(waiter, waited_on)`` pair for an edge of type *kind*.

    ``blocking`` means the dependent blocks the dependency, i.e. the
    dependency waits on the dependent.
    """
    if kind is DependencyType.BLOCKING:
        return dependency_id, dependent_id
    return dependent_id, dependency_id


class DependencyMutator:
    """Add and remove single dependency edges."""

    def __init__(
        self,
        client: ClickUpClient,
        guard: CycleGuard,
        *,
        workspace_id: Optional[str] = None,
    ) -> None:
        self.client = client
        self.guard = guard
        self.workspace_id = workspace_id

    async def add(
        self,
        dependent_id: str,
        dependency_id: str,
        kind: Any = DependencyType.WAITING_ON,
    ) -> DependencyEdge:
        """Create the edge after validating it, returning the normalised edge.

        Raises:
            MissingReferenceError: either ID is blank.
            SelfDependencyError / CircularDependencyError: from the guard.
            TaskNotFoundError: a task does not exist.
            RemoteRejectedError: ClickUp refused the write.
        """
        dependent, dependency = self._require_ids(dependent_id, dependency_id)
        dep_type = parse_dependency_type(kind)
        waiter, waited_on = normalize_edge(dependent, dependency, dep_type)

        await self.guard.assert_no_cycle(waiter, waited_on)
        response = await self.client.add_dependency(waiter, waited_on)

        edge = self._edge_from_response(waiter, waited_on, response)
        logger.info("Added dependency: %s waits on %s", waiter, waited_on)
        get_audit_logger().dependency_change("add", waiter, waited_on, requested_type=dep_type.value)
        return edge

    async def remove(self, dependent_id: str, dependency_id: str) -> None:
        """Delete the edge ``dependent_id waits_on dependency_id``.

        Raises:
            MissingReferenceError: either ID is blank.
            TaskNotFoundError: ClickUp answered 404.
            RemoteRejectedError: any other remote failure.
        """
        dependent, dependency = self._require_ids(dependent_id, dependency_id)
        await self.client.delete_dependency(dependent, dependency)
        logger.info("Removed dependency: %s no longer waits on %s", dependent, dependency)
        get_audit_logger().dependency_change("remove", dependent, dependency)

    @staticmethod
    def _require_ids(dependent_id: Optional[str], dependency_id: Optional[str]) -> Tuple[str, str]:
        dependent = clean_ref(dependent_id)
        if not dependent:
            raise MissingReferenceError("task")
        dependency = clean_ref(dependency_id)
        if not dependency:
            raise MissingReferenceError("dependency task")
        return dependent, dependency

    def _edge_from_response(self, waiter: str, waited_on: str, response: Mapping[str, Any]) -> DependencyEdge:
        record = self._find_record(waiter, waited_on, response)

        def _text(key: str) -> Optional[str]:
            value = record.get(key)
            return str(value) if value not in (None, "") else None

        return DependencyEdge(
            task_id=waiter,
            depends_on=waited_on,
            type=DependencyType.WAITING_ON.wire_code,
            date_created=_text("date_created"),
            userid=_text("userid"),
            workspace_id=_text("workspace_id") or self.workspace_id,
            chain_id=_text("chain_id"),
        )

    @staticmethod
    def _find_record(waiter: str, waited_on: str, response: Mapping[str, Any]) -> Mapping[str, Any]:
        """Pick the edge's provenance record out of whatever ClickUp returned."""
        candidates = response.get("dependencies")
        if isinstance(candidates, list):
            for dep in candidates:
                if isinstance(dep, Mapping) and dep.get("task_id") == waiter and dep.get("depends_on") == waited_on:
                    return dep
            return {}
        if response.get("task_id") == waiter and response.get("depends_on") == waited_on:
            return response
        return {}
