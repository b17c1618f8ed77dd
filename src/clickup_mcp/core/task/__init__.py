"""Task dependency operations package.

Sub-modules:
- ``models``: pydantic models for references, edges and reports
- ``_helpers``: task-record parsing helpers
- ``resolver``: id-or-name reference resolution
- ``queries``: read-only dependency queries
- ``guard``: self-loop and cycle checks
- ``mutations``: single-edge add/remove
- ``batch``: bulk orchestration
- ``service``: component assembly
"""

from clickup_mcp.core.task.batch import BulkDependencyOrchestrator, flatten_pairs, validate_batch
from clickup_mcp.core.task.guard import CycleGuard
from clickup_mcp.core.task.models import (
    BulkDependencyItem,
    BulkReport,
    DependencyEdge,
    DependencyInfo,
    DependencyType,
    TaskDependencies,
    TaskReference,
)
from clickup_mcp.core.task.mutations import DEPENDENCY_TYPES, DependencyMutator, normalize_edge
from clickup_mcp.core.task.queries import DependencyQuery
from clickup_mcp.core.task.resolver import TaskResolver
from clickup_mcp.core.task.service import DependencyService

__all__ = [
    "BulkDependencyOrchestrator",
    "flatten_pairs",
    "validate_batch",
    "CycleGuard",
    "BulkDependencyItem",
    "BulkReport",
    "DependencyEdge",
    "DependencyInfo",
    "DependencyType",
    "TaskDependencies",
    "TaskReference",
    "DEPENDENCY_TYPES",
    "DependencyMutator",
    "normalize_edge",
    "DependencyQuery",
    "TaskResolver",
    "DependencyService",
]
