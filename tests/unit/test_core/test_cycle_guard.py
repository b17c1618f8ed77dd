"""Tests for CycleGuard.

Tests cover:
1. Self-loops rejected without remote calls
2. One-hop cycles rejected at the default depth
3. Longer cycles allowed at depth 1, caught with a deeper search
4. Missing dependency task surfaces as TaskNotFoundError
"""

import pytest

from clickup_mcp.core.errors import CircularDependencyError, SelfDependencyError, TaskNotFoundError
from clickup_mcp.core.task import CycleGuard, DependencyQuery, TaskResolver


def _guard(fake, depth=1):
    return CycleGuard(DependencyQuery(fake, TaskResolver(fake)), max_depth=depth)


@pytest.mark.asyncio
class TestSelfDependency:
    @pytest.mark.parametrize("task_id", ["T1", "abc", "missing-1"])
    async def test_self_loop_rejected(self, store, task_id):
        with pytest.raises(SelfDependencyError) as exc_info:
            await _guard(store).assert_no_cycle(task_id, task_id)

        assert exc_info.value.message == "Cannot create self-dependency"
        assert exc_info.value.details == {"task_id": task_id, "depends_on": task_id}
        assert store.calls == []


@pytest.mark.asyncio
class TestOneHop:
    async def test_unrelated_tasks_pass(self, store):
        await _guard(store).assert_no_cycle("T1", "T2")

        assert [args[0] for _, args in store.remote_calls("get_task")] == ["T2"]

    async def test_reverse_edge_rejected(self, store):
        store.link("T2", "T1")

        with pytest.raises(CircularDependencyError) as exc_info:
            await _guard(store).assert_no_cycle("T1", "T2")

        assert exc_info.value.details["task_id"] == "T1"
        assert exc_info.value.details["depends_on"] == "T2"
        assert exc_info.value.details["cycle_path"] == ["T2", "T1"]

    async def test_existing_same_direction_edge_passes(self, store):
        store.link("T1", "T2")

        await _guard(store).assert_no_cycle("T1", "T2")

    async def test_three_cycle_not_detected_at_depth_one(self, store):
        # T2 waits on T3, T3 waits on T1: T1 -> T2 would close a 3-cycle.
        store.link("T2", "T3").link("T3", "T1")

        await _guard(store).assert_no_cycle("T1", "T2")

    async def test_missing_dependency_task(self, store):
        with pytest.raises(TaskNotFoundError) as exc_info:
            await _guard(store).assert_no_cycle("T1", "missing-1")

        assert exc_info.value.details == {"task": "missing-1"}


@pytest.mark.asyncio
class TestDeeperSearch:
    async def test_three_cycle_detected(self, store):
        store.link("T2", "T3").link("T3", "T1")

        with pytest.raises(CircularDependencyError) as exc_info:
            await _guard(store, depth=2).assert_no_cycle("T1", "T2")

        assert exc_info.value.path == ["T2", "T3", "T1"]

    async def test_cycle_beyond_depth_not_detected(self, store):
        store.add_task("T4")
        store.link("T2", "T3").link("T3", "T4").link("T4", "T1")

        await _guard(store, depth=2).assert_no_cycle("T1", "T2")

        with pytest.raises(CircularDependencyError):
            await _guard(store, depth=3).assert_no_cycle("T1", "T2")

    async def test_missing_deeper_node_is_skipped(self, store):
        store.link("T2", "ghost").link("T2", "T3")

        await _guard(store, depth=3).assert_no_cycle("T1", "T2")

    async def test_shared_nodes_fetched_once(self, store):
        store.add_task("T4")
        store.link("T2", "T3").link("T2", "T4").link("T3", "T4")

        await _guard(store, depth=4).assert_no_cycle("T1", "T2")

        fetched = [args[0] for _, args in store.remote_calls("get_task")]
        assert sorted(fetched) == ["T2", "T3", "T4"]

    async def test_depth_below_one_clamped(self, store):
        assert _guard(store, depth=0).max_depth == 1
