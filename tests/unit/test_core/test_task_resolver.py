"""Tests for TaskResolver.

Tests cover:
1. ID pass-through without remote calls
2. Name search: case/whitespace folding, list-name filtering, first match wins
3. Pagination bounds and last_page handling
4. MissingReferenceError / TaskNotFoundError
"""

import logging

import pytest

from clickup_mcp.core.errors import MissingReferenceError, TaskNotFoundError
from clickup_mcp.core.task import TaskReference, TaskResolver


@pytest.fixture
def named_store(make_store):
    fake = make_store()
    fake.add_task("a1", "Write docs", list_name="Backlog")
    fake.add_task("a2", "Write docs", list_name="Sprint 4")
    fake.add_task("a3", "Ship release", list_name="Sprint 4")
    return fake


@pytest.mark.asyncio
class TestResolveById:
    async def test_id_returned_unchanged(self, named_store):
        resolver = TaskResolver(named_store)

        assert await resolver.resolve(TaskReference(task_id="does-not-exist")) == "does-not-exist"
        assert named_store.calls == []

    async def test_id_is_trimmed(self, named_store):
        resolver = TaskResolver(named_store)

        assert await resolver.resolve(TaskReference(task_id="  a1 ")) == "a1"

    async def test_id_wins_over_name(self, named_store):
        resolver = TaskResolver(named_store)
        ref = TaskReference(task_id="a3", task_name="Write docs")

        assert await resolver.resolve(ref) == "a3"
        assert named_store.remote_calls("get_team_tasks") == []


@pytest.mark.asyncio
class TestResolveByName:
    async def test_first_match_in_remote_order(self, named_store):
        resolver = TaskResolver(named_store)

        assert await resolver.resolve(TaskReference(task_name="Write docs")) == "a1"

    async def test_match_ignores_case_and_whitespace(self, named_store):
        resolver = TaskResolver(named_store)

        assert await resolver.resolve(TaskReference(task_name="  write DOCS ")) == "a1"

    async def test_list_name_disambiguates(self, named_store):
        resolver = TaskResolver(named_store)
        ref = TaskReference(task_name="Write docs", list_name="sprint 4")

        assert await resolver.resolve(ref) == "a2"

    async def test_name_without_list_logs_warning(self, named_store, caplog):
        resolver = TaskResolver(named_store)

        with caplog.at_level(logging.WARNING, logger="clickup_mcp.core.task.resolver"):
            await resolver.resolve(TaskReference(task_name="Ship release"))

        assert any("without a list name" in record.message for record in caplog.records)

    async def test_no_warning_when_list_given(self, named_store, caplog):
        resolver = TaskResolver(named_store)

        with caplog.at_level(logging.WARNING, logger="clickup_mcp.core.task.resolver"):
            await resolver.resolve(TaskReference(task_name="Ship release", list_name="Sprint 4"))

        assert not caplog.records

    async def test_unknown_name_raises_not_found(self, named_store):
        resolver = TaskResolver(named_store)

        with pytest.raises(TaskNotFoundError) as exc_info:
            await resolver.resolve(TaskReference(task_name="Nope", list_name="Backlog"))

        assert exc_info.value.details == {"task": "Nope", "list_name": "Backlog"}

    async def test_name_in_wrong_list_raises_not_found(self, named_store):
        resolver = TaskResolver(named_store)

        with pytest.raises(TaskNotFoundError):
            await resolver.resolve(TaskReference(task_name="Ship release", list_name="Backlog"))


@pytest.mark.asyncio
class TestResolvePagination:
    async def test_scans_following_pages(self, make_store):
        fake = make_store(page_size=2)
        for index in range(5):
            fake.add_task(f"t{index}", f"Task {index}")
        resolver = TaskResolver(fake)

        assert await resolver.resolve(TaskReference(task_name="Task 4")) == "t4"
        assert [args[0] for _, args in fake.remote_calls("get_team_tasks")] == [0, 1, 2]

    async def test_stops_on_last_page(self, make_store):
        fake = make_store(page_size=2)
        for index in range(3):
            fake.add_task(f"t{index}", f"Task {index}")
        resolver = TaskResolver(fake, max_search_pages=10)

        with pytest.raises(TaskNotFoundError):
            await resolver.resolve(TaskReference(task_name="Missing"))

        assert len(fake.remote_calls("get_team_tasks")) == 2

    async def test_page_budget_is_respected(self, make_store):
        fake = make_store(page_size=1)
        for index in range(5):
            fake.add_task(f"t{index}", f"Task {index}")
        resolver = TaskResolver(fake, max_search_pages=2)

        with pytest.raises(TaskNotFoundError):
            await resolver.resolve(TaskReference(task_name="Task 4"))

        assert len(fake.remote_calls("get_team_tasks")) == 2


@pytest.mark.asyncio
class TestMissingReference:
    async def test_nothing_given(self, named_store):
        resolver = TaskResolver(named_store)

        with pytest.raises(MissingReferenceError) as exc_info:
            await resolver.resolve(TaskReference())

        assert str(exc_info.value) == "Either task ID or task name must be provided"
        assert named_store.calls == []

    async def test_blank_strings_count_as_missing(self, named_store):
        resolver = TaskResolver(named_store)

        with pytest.raises(MissingReferenceError):
            await resolver.resolve(TaskReference(task_id="  ", task_name=""))

    async def test_role_appears_in_message(self, named_store):
        resolver = TaskResolver(named_store)

        with pytest.raises(MissingReferenceError) as exc_info:
            await resolver.resolve(TaskReference(list_name="Backlog"), role="dependency task")

        assert exc_info.value.details == {"reference": "dependency task"}
        assert "dependency task ID" in exc_info.value.message
