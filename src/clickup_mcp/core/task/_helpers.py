"""Shared helpers for reading ClickUp task records."""

from typing import Any, Dict, List, Mapping, Optional

from clickup_mcp.core.task.models import DependencyInfo, ListSummary


def normalize_name(value: Optional[str]) -> str:
    """Comparison key for task and list names: trimmed, case-folded."""
    return (value or "").strip().casefold()


def clean_ref(value: Optional[str]) -> Optional[str]:
    """Strip a reference string, mapping blank values to ``None``."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def record_waiting_on_ids(record: Mapping[str, Any]) -> List[str]:
    """IDs the task *record* waits on, in remote order, without duplicates.

    Only dependency objects recorded from this task's side
    (``task_id == record["id"]``) with a ``depends_on`` count.
    """
    task_id = record.get("id")
    seen: Dict[str, None] = {}
    for dep in record.get("dependencies") or []:
        if not isinstance(dep, Mapping):
            continue
        depends_on = dep.get("depends_on")
        if dep.get("task_id") == task_id and depends_on:
            seen.setdefault(str(depends_on), None)
    return list(seen)


def build_dependency_info(record: Mapping[str, Any]) -> DependencyInfo:
    """Project a task record onto the counterpart display fields."""
    status = record.get("status")
    status_label = status.get("status", "") if isinstance(status, Mapping) else str(status or "")
    list_data = record.get("list") if isinstance(record.get("list"), Mapping) else {}
    return DependencyInfo(
        task_id=str(record.get("id", "")),
        task_name=str(record.get("name") or ""),
        status=status_label,
        list_ref=ListSummary(id=str(list_data.get("id") or ""), name=str(list_data.get("name") or "")),
    )


def subtasks_with_dependencies(record: Mapping[str, Any]) -> List[str]:
    """IDs of subtasks embedded in *record* that carry dependency objects."""
    ids = []
    for subtask in record.get("subtasks") or []:
        if isinstance(subtask, Mapping) and subtask.get("id") and subtask.get("dependencies"):
            ids.append(str(subtask["id"]))
    return ids
