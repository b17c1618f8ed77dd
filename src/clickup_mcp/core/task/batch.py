"""Bulk dependency orchestration.

Applies a batch of ``task waits_on dependency`` edges one pair at a time,
in input order. Individual failures are collected into the report; only a
structurally malformed request raises.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Sequence, Tuple

from clickup_mcp.core.errors.base import lookup_error_mapping
from clickup_mcp.core.errors.dependency import DependencyError, MalformedBatchError, RemoteRejectedError
from clickup_mcp.core.observability.metrics import get_metrics
from clickup_mcp.core.responses.types import ErrorCode
from clickup_mcp.core.task.models import BulkDependencyItem, BulkReport
from clickup_mcp.core.task.mutations import DependencyMutator

logger = logging.getLogger(__name__)

# Cap on a single backoff delay, whatever the attempt number or Retry-After says
MAX_BACKOFF_SECONDS = 30.0


def _item_field(item: Mapping[str, Any], snake: str, camel: str) -> Any:
    return item[snake] if snake in item else item.get(camel)


def validate_batch(
    items: Any,
    *,
    retry_count: Any = 0,
    max_batch_size: Optional[int] = None,
) -> List[BulkDependencyItem]:
    """Check the batch shape and return typed items.

    Entries may use ``task_id``/``depends_on`` or ``taskId``/``dependsOn``.

    Raises:
        MalformedBatchError: naming the offending field.
    """
    if isinstance(retry_count, bool) or not isinstance(retry_count, int):
        raise MalformedBatchError("retryCount must be an integer", field="options.retryCount")
    if retry_count < 0:
        raise MalformedBatchError("retryCount must not be negative", field="options.retryCount")
    if not isinstance(items, list):
        raise MalformedBatchError("dependencies must be a list", field="dependencies")
    if max_batch_size is not None and len(items) > max_batch_size:
        raise MalformedBatchError(
            f"dependencies must have at most {max_batch_size} entries",
            field="dependencies",
        )

    typed: List[BulkDependencyItem] = []
    for index, item in enumerate(items):
        prefix = f"dependencies[{index}]"
        if isinstance(item, BulkDependencyItem):
            item = item.model_dump()
        if not isinstance(item, Mapping):
            raise MalformedBatchError(f"{prefix} must be an object", field=prefix)

        task_id = _item_field(item, "task_id", "taskId")
        if not isinstance(task_id, str) or not task_id.strip():
            raise MalformedBatchError(f"{prefix}.taskId must be a non-empty string", field=f"{prefix}.taskId")

        depends_on = _item_field(item, "depends_on", "dependsOn")
        if not isinstance(depends_on, list):
            raise MalformedBatchError(f"{prefix}.dependsOn must be a list", field=f"{prefix}.dependsOn")
        for dep_index, dep in enumerate(depends_on):
            if not isinstance(dep, str) or not dep.strip():
                field = f"{prefix}.dependsOn[{dep_index}]"
                raise MalformedBatchError(f"{field} must be a non-empty string", field=field)

        typed.append(BulkDependencyItem(task_id=task_id.strip(), depends_on=[d.strip() for d in depends_on]))
    return typed


def flatten_pairs(items: Sequence[BulkDependencyItem]) -> List[Tuple[str, str]]:
    """Expand items into ordered ``(dependent, dependency)`` pairs."""
    return [(item.task_id, dep) for item in items for dep in item.depends_on]


class BulkDependencyOrchestrator:
    """Run the guarded add for each pair with retry and stop/continue policy."""

    def __init__(
        self,
        mutator: DependencyMutator,
        *,
        max_retry_count: int = 5,
        retry_backoff_seconds: float = 0.5,
        max_batch_size: Optional[int] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.mutator = mutator
        self.max_retry_count = max_retry_count
        self.retry_backoff_seconds = retry_backoff_seconds
        self.max_batch_size = max_batch_size
        self._sleep = sleep
        self._metrics = get_metrics()

    async def apply_batch(
        self,
        items: Any,
        *,
        continue_on_error: bool = False,
        retry_count: Any = 0,
    ) -> BulkReport:
        """Apply every pair and return the report.

        Raises:
            MalformedBatchError: before any remote call, when the input is
                not a list of ``{taskId, dependsOn: [...]}`` objects or
                ``retry_count`` is not a non-negative integer. A
                ``retry_count`` above ``max_retry_count`` is clamped and
                reported in ``report.warnings``.
        """
        typed = validate_batch(
            items,
            retry_count=retry_count,
            max_batch_size=self.max_batch_size,
        )
        pairs = flatten_pairs(typed)
        report = BulkReport()
        if retry_count > self.max_retry_count:
            logger.warning("Clamping retryCount %d to %d", retry_count, self.max_retry_count)
            report.warnings.append(f"retryCount {retry_count} exceeds the maximum; using {self.max_retry_count}")
            retry_count = self.max_retry_count

        for dependent, dependency in pairs:
            error = await self._apply_pair(dependent, dependency, retry_count)
            if error is None:
                report.record_success(dependent, dependency)
                continue

            message, code = error
            report.record_failure(dependent, dependency, message, code)
            if not continue_on_error:
                logger.info("Stopping bulk run after failure on %s -> %s", dependent, dependency)
                break

        self._metrics.counter("dependencies.bulk.pairs", value=report.summary.total)
        if report.summary.failed:
            self._metrics.counter("dependencies.bulk.failed", value=report.summary.failed)
        logger.info(
            "Bulk dependency run finished: total=%d success=%d failed=%d",
            report.summary.total,
            report.summary.success,
            report.summary.failed,
        )
        return report

    async def _apply_pair(self, dependent: str, dependency: str, retry_count: int) -> Optional[Tuple[str, str]]:
        """Return ``None`` on success or ``(message, error_code)`` on failure."""
        attempt = 0
        while True:
            try:
                await self.mutator.add(dependent, dependency)
                return None
            except RemoteRejectedError as exc:
                if exc.retryable and attempt < retry_count:
                    attempt += 1
                    delay = self._backoff(attempt, getattr(exc, "retry_after", None))
                    logger.warning(
                        "Retrying %s -> %s in %.2fs (attempt %d/%d): %s",
                        dependent,
                        dependency,
                        delay,
                        attempt,
                        retry_count,
                        exc,
                    )
                    await self._sleep(delay)
                    continue
                return exc.message, self._error_code(exc)
            except DependencyError as exc:
                return exc.message, self._error_code(exc)
            except Exception as exc:
                logger.exception("Unexpected error adding %s -> %s", dependent, dependency)
                return str(exc) or type(exc).__name__, ErrorCode.INTERNAL_ERROR.value

    def _backoff(self, attempt: int, retry_after: Optional[float]) -> float:
        delay = self.retry_backoff_seconds * (2 ** (attempt - 1))
        if retry_after:
            delay = max(delay, retry_after)
        return min(delay, MAX_BACKOFF_SECONDS)

    @staticmethod
    def _error_code(exc: Exception) -> str:
        mapping = lookup_error_mapping(exc)
        return mapping[0].value if mapping else ErrorCode.INTERNAL_ERROR.value
