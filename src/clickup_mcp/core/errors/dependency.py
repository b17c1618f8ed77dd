"""Dependency-domain error classes.

Every failure the resolver, guard, mutator or batch orchestrator can raise
derives from :class:`DependencyError`. Each error carries the offending
reference or pair in ``details`` so tool responses can name it.
"""

from typing import Any, Dict, Optional


class DependencyError(Exception):
    """Base exception for task dependency operations.

    Attributes:
        message: Human-readable error description
        details: Machine-readable context (offending reference or pair)
        remediation: Guidance surfaced to the caller
    """

    default_remediation: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        remediation: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})
        self.remediation = remediation or self.default_remediation


class MissingReferenceError(DependencyError):
    """Neither a task ID nor a task name was supplied."""

    default_remediation = "Provide a task ID, or a task name with an optional list name."

    def __init__(self, role: str = "task", **kwargs: Any) -> None:
        self.role = role
        kwargs.setdefault("details", {"reference": role})
        super().__init__(f"Either {role} ID or {role} name must be provided", **kwargs)


class TaskNotFoundError(DependencyError):
    """A task reference could not be found in the remote store."""

    default_remediation = "Verify the task ID, or check the task name and list name spelling."

    def __init__(
        self,
        reference: str,
        *,
        list_name: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        self.reference = reference
        self.list_name = list_name
        details = {"task": reference}
        if list_name:
            details["list_name"] = list_name
        kwargs.setdefault("details", details)
        where = f" in list '{list_name}'" if list_name else ""
        super().__init__(f"Task '{reference}' not found{where}", **kwargs)


class SelfDependencyError(DependencyError):
    """A task was asked to depend on itself."""

    default_remediation = "Specify a different task as the dependency."

    def __init__(self, task_id: str, **kwargs: Any) -> None:
        self.task_id = task_id
        kwargs.setdefault("details", {"task_id": task_id, "depends_on": task_id})
        super().__init__("Cannot create self-dependency", **kwargs)


class CircularDependencyError(DependencyError):
    """Adding the edge would close a cycle in the dependency graph."""

    default_remediation = "Remove the existing dependency in the opposite direction before adding this one."

    def __init__(
        self,
        task_id: str,
        depends_on: str,
        *,
        path: Optional[list] = None,
        **kwargs: Any,
    ) -> None:
        self.task_id = task_id
        self.depends_on = depends_on
        self.path = list(path or [depends_on, task_id])
        kwargs.setdefault(
            "details",
            {"task_id": task_id, "depends_on": depends_on, "cycle_path": self.path},
        )
        super().__init__(
            "Circular dependency detected: Target task already depends on source task",
            **kwargs,
        )


class RemoteRejectedError(DependencyError):
    """The remote store refused or failed a request.

    Attributes:
        status_code: HTTP status of the remote response, if one was received
        retryable: Whether the failure is transient (rate limit, 5xx, transport)
    """

    default_remediation = "Re-query the task dependencies to confirm the current remote state before retrying."

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        retryable: bool = False,
        original_error: Optional[Exception] = None,
        **kwargs: Any,
    ) -> None:
        self.status_code = status_code
        self.retryable = retryable
        self.original_error = original_error
        super().__init__(message, **kwargs)
        if status_code is not None:
            self.details.setdefault("status_code", status_code)


class MalformedBatchError(DependencyError):
    """A bulk request failed structural validation before any remote call."""

    default_remediation = "Pass dependencies as a list of {taskId, dependsOn: [...]} objects."

    def __init__(self, message: str, *, field: Optional[str] = None, **kwargs: Any) -> None:
        self.field = field
        if field:
            kwargs.setdefault("details", {"field": field})
        super().__init__(message, **kwargs)
