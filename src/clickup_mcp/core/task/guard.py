"""Cycle guard for prospective dependency edges.

With the default depth of 1 only direct two-task cycles and self-loops are
rejected; a longer cycle (A waits on B waits on C waits on A) can still be
created. A depth above 1 runs a bounded breadth-first search over
``waiting_on`` edges, at the cost of one remote fetch per visited task.
"""

from __future__ import annotations

import logging
from typing import List, Set, Tuple

from clickup_mcp.core.errors.dependency import (
    CircularDependencyError,
    SelfDependencyError,
    TaskNotFoundError,
)
from clickup_mcp.core.task.queries import DependencyQuery

logger = logging.getLogger(__name__)


class CycleGuard:
    """Reject edges that would introduce a self-loop or a cycle."""

    def __init__(self, query: DependencyQuery, *, max_depth: int = 1) -> None:
        self.query = query
        self.max_depth = max(1, max_depth)

    async def assert_no_cycle(self, dependent_id: str, dependency_id: str) -> None:
        """Raise if ``dependent_id waits_on dependency_id`` would close a cycle.

        Raises:
            SelfDependencyError: both IDs are equal (no remote call is made).
            CircularDependencyError: the dependency already reaches the
                dependent through ``waiting_on`` edges within ``max_depth`` hops.
            TaskNotFoundError: the dependency task does not exist.
        """
        if dependent_id == dependency_id:
            raise SelfDependencyError(dependent_id)

        waiting_on = await self.query.waiting_on_ids(dependency_id)
        if dependent_id in waiting_on:
            raise CircularDependencyError(dependent_id, dependency_id, path=[dependency_id, dependent_id])

        if self.max_depth > 1:
            await self._search_deeper(dependent_id, dependency_id, waiting_on)

    async def _search_deeper(self, dependent_id: str, dependency_id: str, first_hop: Set[str]) -> None:
        visited: Set[str] = {dependency_id}
        frontier: List[Tuple[str, List[str]]] = [
            (node, [dependency_id, node]) for node in sorted(first_hop) if node not in visited
        ]

        for _ in range(1, self.max_depth):
            next_frontier: List[Tuple[str, List[str]]] = []
            for node, path in frontier:
                if node in visited:
                    continue
                visited.add(node)
                try:
                    neighbours = await self.query.waiting_on_ids(node)
                except TaskNotFoundError:
                    logger.warning("Skipping missing task %s during cycle search", node)
                    continue
                if dependent_id in neighbours:
                    raise CircularDependencyError(dependent_id, dependency_id, path=path + [dependent_id])
                next_frontier.extend((n, path + [n]) for n in sorted(neighbours) if n not in visited)
            if not next_frontier:
                return
            frontier = next_frontier

        logger.debug(
            "Cycle search for %s -> %s stopped at depth %d",
            dependent_id,
            dependency_id,
            self.max_depth,
        )
