"""Typed models for task references, dependency edges and bulk reports."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class DependencyType(str, Enum):
    """Direction of a dependency relative to the task it is recorded on."""

    WAITING_ON = "waiting_on"
    BLOCKING = "blocking"

    @property
    def wire_code(self) -> int:
        """ClickUp's integer code: 0 = waiting_on, 1 = blocking."""
        return 0 if self is DependencyType.WAITING_ON else 1


class TaskReference(BaseModel):
    """A task named either by ID or by name, optionally scoped to a list."""

    task_id: Optional[str] = Field(None, description="Canonical ClickUp task ID")
    task_name: Optional[str] = Field(None, description="Task name for workspace search")
    list_name: Optional[str] = Field(None, description="List name that disambiguates task_name")

    @property
    def label(self) -> str:
        """Human-readable reference for error messages."""
        return (self.task_id or self.task_name or "").strip()


class DependencyEdge(BaseModel):
    """One ``task_id`` waits on ``depends_on`` relationship.

    Provenance fields come from the remote store and stay empty when the
    remote response omits them.
    """

    task_id: str = Field(..., description="Dependent task ID")
    depends_on: str = Field(..., description="Dependency task ID")
    type: int = Field(0, description="Wire type: 0 = waiting_on, 1 = blocking")
    date_created: Optional[str] = Field(None, description="Creation timestamp (ms) from ClickUp")
    userid: Optional[str] = Field(None, description="User who created the edge")
    workspace_id: Optional[str] = Field(None, description="Workspace (team) ID")
    chain_id: Optional[str] = Field(None, description="ClickUp dependency chain ID")


class ListSummary(BaseModel):
    id: str = ""
    name: str = ""


class TaskSummary(BaseModel):
    id: str
    name: str = ""


class DependencyInfo(BaseModel):
    """Display data for the task on the other end of an edge."""

    model_config = ConfigDict(populate_by_name=True)

    task_id: str = Field(..., description="Counterpart task ID")
    task_name: str = Field("", description="Counterpart task name")
    status: str = Field("", description="Counterpart status label")
    list_ref: ListSummary = Field(default_factory=ListSummary, alias="list", description="Owning list")


class DependencyLists(BaseModel):
    waiting_on: List[DependencyInfo] = Field(default_factory=list)
    blocking: List[DependencyInfo] = Field(default_factory=list)


class TaskDependencies(BaseModel):
    """Dependency view of one task.

    ``skipped`` lists counterpart IDs whose fetch failed; it is reported as a
    warning rather than serialised with the payload.
    """

    task: TaskSummary
    dependencies: DependencyLists = Field(default_factory=DependencyLists)
    skipped: List[str] = Field(default_factory=list, exclude=True)

    def waiting_on_ids(self) -> List[str]:
        return [info.task_id for info in self.dependencies.waiting_on]


class BulkDependencyItem(BaseModel):
    """One bulk entry: ``task_id`` should wait on every ID in ``depends_on``."""

    task_id: str
    depends_on: List[str] = Field(default_factory=list)


class BulkSuccess(BaseModel):
    """One applied pair; serialised with the camelCase keys the bulk tool accepts."""

    model_config = ConfigDict(populate_by_name=True)

    task_id: str = Field(..., alias="taskId")
    depends_on: str = Field(..., alias="dependsOn")
    success: bool = True


class BulkFailure(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    task_id: str = Field(..., alias="taskId")
    depends_on: str = Field(..., alias="dependsOn")
    error: str
    error_code: str


class BulkSummary(BaseModel):
    total: int = 0
    success: int = 0
    failed: int = 0


class BulkReport(BaseModel):
    """Outcome of a bulk run; ``summary.total == success + failed`` always holds.

    ``warnings`` carries request adjustments (such as a clamped retry count)
    for the response envelope; it is not part of the serialised report.
    """

    successful: List[BulkSuccess] = Field(default_factory=list)
    failed: List[BulkFailure] = Field(default_factory=list)
    summary: BulkSummary = Field(default_factory=BulkSummary)
    warnings: List[str] = Field(default_factory=list, exclude=True)

    def record_success(self, task_id: str, depends_on: str) -> None:
        self.successful.append(BulkSuccess(task_id=task_id, depends_on=depends_on))
        self.summary.total += 1
        self.summary.success += 1

    def record_failure(self, task_id: str, depends_on: str, error: str, error_code: str) -> None:
        self.failed.append(BulkFailure(task_id=task_id, depends_on=depends_on, error=error, error_code=error_code))
        self.summary.total += 1
        self.summary.failed += 1
