"""Tests for the dependency action handlers through dependency_action.

Each test drives the same call path the MCP tools and CLI use, against the
in-memory ClickUp store, and checks the response-v2 envelope.
"""

from __future__ import annotations

import pytest

from clickup_mcp.core.errors import RemoteRejectedError
from clickup_mcp.tools.unified.dependency import _DEPENDENCY_ROUTER, dependency_action


async def _run(action, service, config, **payload):
    return await dependency_action(action, config=config, service=service, **payload)


def _assert_envelope(result, *, success):
    assert result["success"] is success
    assert result["meta"]["version"] == "response-v2"
    assert result["meta"]["request_id"]


class TestRouterShape:
    def test_actions(self):
        assert _DEPENDENCY_ROUTER.allowed_actions() == ["get", "add", "remove", "bulk-add"]

    @pytest.mark.parametrize("alias, name", [("list", "get"), ("delete", "remove"), ("bulk", "bulk-add")])
    def test_aliases(self, alias, name):
        assert _DEPENDENCY_ROUTER.resolve(alias).name == name


# =============================================================================
# get
# =============================================================================


@pytest.mark.asyncio
class TestGet:
    async def test_by_id(self, service, server_config, store):
        store.link("T1", "T2")

        result = await _run("get", service, server_config, task_id="T1")

        _assert_envelope(result, success=True)
        assert result["data"]["task"] == {"id": "T1", "name": "Task 1"}
        [info] = result["data"]["dependencies"]["waiting_on"]
        assert info["task_id"] == "T2"
        assert info["list"]["name"] == "Backlog"
        assert result["data"]["dependencies"]["blocking"] == []
        assert "duration_ms" in result["meta"]["telemetry"]

    async def test_by_name(self, service, server_config):
        result = await _run("get", service, server_config, task_name="Task 2", list_name="Backlog")

        assert result["data"]["task"]["id"] == "T2"

    async def test_missing_reference(self, service, server_config, store):
        result = await _run("get", service, server_config, task_id="  ")

        _assert_envelope(result, success=False)
        assert result["data"]["error_code"] == "MISSING_REQUIRED"
        assert result["error"].endswith("Either task ID or task name must be provided")
        assert store.calls == []

    async def test_not_found(self, service, server_config):
        result = await _run("get", service, server_config, task_id="missing-1")

        assert result["data"]["error_code"] == "TASK_NOT_FOUND"
        assert result["data"]["details"]["request"] == {"task": "missing-1"}

    async def test_partial_result_warning(self, service, server_config, store):
        store.link("T1", "T2").link("T1", "gone")

        result = await _run("get", service, server_config, task_id="T1")

        assert result["success"] is True
        assert [w for w in result["meta"]["warnings"] if "gone" in w]

    async def test_include_subtasks_must_be_bool(self, service, server_config):
        result = await _run("get", service, server_config, task_id="T1", include_subtasks="yes")

        assert result["data"]["error_code"] == "INVALID_FORMAT"


# =============================================================================
# add
# =============================================================================


@pytest.mark.asyncio
class TestAdd:
    async def test_waiting_on(self, service, server_config, store):
        result = await _run("add", service, server_config, task_id="T1", depends_on_task_id="T2")

        _assert_envelope(result, success=True)
        assert result["data"]["dependency"]["task_id"] == "T1"
        assert result["data"]["dependency"]["depends_on"] == "T2"
        assert result["data"]["dependency"]["type"] == 0
        assert result["data"]["dependency"]["workspace_id"] == "team-1"
        assert result["data"]["message"] == "Task T1 now waits on task T2"
        assert store.waiting_on("T1") == ["T2"]

    async def test_blocking(self, service, server_config, store):
        result = await _run(
            "add",
            service,
            server_config,
            task_id="T1",
            depends_on_task_id="T2",
            dependency_type="BLOCKING",
        )

        assert result["data"]["message"] == "Task T2 now waits on task T1"
        assert store.waiting_on("T2") == ["T1"]

    async def test_by_names(self, service, server_config, store):
        result = await _run(
            "add",
            service,
            server_config,
            task_name="task 3",
            depends_on_task_name="Task 1",
            depends_on_list_name="Backlog",
        )

        assert result["success"] is True
        assert store.waiting_on("T3") == ["T1"]

    async def test_unknown_type(self, service, server_config, store):
        result = await _run(
            "add",
            service,
            server_config,
            task_id="T1",
            depends_on_task_id="T2",
            dependency_type="related",
        )

        assert result["data"]["error_code"] == "INVALID_FORMAT"
        assert result["data"]["details"]["field"] == "dependency_type"
        assert store.calls == []

    async def test_missing_dependency_reference(self, service, server_config):
        result = await _run("add", service, server_config, task_id="T1")

        assert result["data"]["error_code"] == "MISSING_REQUIRED"
        assert result["data"]["details"]["field"] == "depends_on_task_id"
        assert "dependency task ID" in result["error"]

    async def test_self_dependency(self, service, server_config, store):
        result = await _run("add", service, server_config, task_id="T1", depends_on_task_id="T1")

        assert result["data"]["error_code"] == "SELF_REFERENCE"
        assert result["data"]["error_type"] == "validation"
        assert result["error"] == "Cannot create self-dependency"
        assert store.calls == []

    async def test_circular_dependency(self, service, server_config, store):
        store.link("T2", "T1")

        result = await _run("add", service, server_config, task_id="T1", depends_on_task_id="T2")

        assert result["data"]["error_code"] == "CIRCULAR_DEPENDENCY"
        assert result["data"]["error_type"] == "conflict"
        details = result["data"]["details"]
        assert details["task_id"] == "T1"
        assert details["depends_on"] == "T2"
        assert details["request"] == {"task": "T1", "depends_on": "T2"}
        assert details["action"] == "dependency.add"

    async def test_remote_rejection(self, service, server_config, store):
        store.fail_next("add_dependency", RemoteRejectedError("ClickUp API error 400: nope", status_code=400))

        result = await _run("add", service, server_config, task_id="T1", depends_on_task_id="T2")

        assert result["data"]["error_code"] == "REMOTE_REJECTED"
        assert "Re-query" in result["data"]["remediation"]
        assert "telemetry" in result["meta"]


# =============================================================================
# remove
# =============================================================================


@pytest.mark.asyncio
class TestRemove:
    async def test_remove(self, service, server_config, store):
        store.link("T1", "T2")

        result = await _run("remove", service, server_config, task_id="T1", dependency_task_id="T2")

        _assert_envelope(result, success=True)
        assert result["data"] == {
            "task_id": "T1",
            "dependency_task_id": "T2",
            "message": "Task T1 no longer waits on task T2",
        }
        assert store.waiting_on("T1") == []

    async def test_alias(self, service, server_config, store):
        store.link("T1", "T2")

        result = await _run("delete", service, server_config, task_id="T1", dependency_task_name="Task 2")

        assert result["success"] is True

    async def test_missing_dependency_reference(self, service, server_config):
        result = await _run("remove", service, server_config, task_id="T1")

        assert result["data"]["details"]["field"] == "dependency_task_id"

    async def test_unknown_dependency_task(self, service, server_config):
        result = await _run("remove", service, server_config, task_id="T1", dependency_task_id="missing-1")

        assert result["data"]["error_code"] == "TASK_NOT_FOUND"


# =============================================================================
# bulk-add
# =============================================================================


@pytest.mark.asyncio
class TestBulkAdd:
    async def test_scenario_with_missing_task(self, service, server_config):
        result = await _run(
            "bulk-add",
            service,
            server_config,
            dependencies=[{"taskId": "T3", "dependsOn": ["T1", "missing-1"]}],
            options={"continueOnError": True},
        )

        _assert_envelope(result, success=True)
        data = result["data"]
        assert data["successful"] == [{"taskId": "T3", "dependsOn": "T1", "success": True}]
        [failure] = data["failed"]
        assert sorted(failure) == ["dependsOn", "error", "error_code", "taskId"]
        assert failure["taskId"] == "T3"
        assert failure["dependsOn"] == "missing-1"
        assert failure["error_code"] == "TASK_NOT_FOUND"
        assert data["summary"] == {"total": 2, "success": 1, "failed": 1}
        assert result["meta"]["warnings"] == ["1 of 2 dependencies failed"]

    async def test_defaults_stop_on_error(self, service, server_config):
        result = await _run(
            "bulk-add",
            service,
            server_config,
            dependencies=[{"taskId": "T3", "dependsOn": ["missing-1", "T1"]}],
        )

        assert result["data"]["summary"] == {"total": 1, "success": 0, "failed": 1}

    async def test_malformed_item(self, service, server_config, store):
        result = await _run(
            "bulk-add",
            service,
            server_config,
            dependencies=[{"taskId": "T3", "dependsOn": "T1"}],
        )

        assert result["success"] is False
        assert result["data"]["error_code"] == "VALIDATION_ERROR"
        assert result["data"]["details"]["field"] == "dependencies[0].dependsOn"
        assert store.calls == []

    async def test_dependencies_required(self, service, server_config):
        result = await _run("bulk-add", service, server_config)

        assert result["data"]["error_code"] == "MISSING_REQUIRED"
        assert result["data"]["details"]["field"] == "dependencies"

    @pytest.mark.parametrize("options", [{"retryCount": -1}, {"retryCount": 1.5}, {"continueOnError": "yes"}])
    async def test_invalid_options(self, service, server_config, options):
        result = await _run(
            "bulk-add",
            service,
            server_config,
            dependencies=[{"taskId": "T3", "dependsOn": ["T1"]}],
            options=options,
        )

        assert result["success"] is False
        assert result["data"]["error_type"] == "validation"

    async def test_retry_count_above_limit_is_clamped(self, service, server_config, store):
        result = await _run(
            "bulk-add",
            service,
            server_config,
            dependencies=[{"taskId": "T3", "dependsOn": ["T1"]}],
            options={"retryCount": 99},
        )

        assert result["success"] is True
        assert result["data"]["summary"] == {"total": 1, "success": 1, "failed": 0}
        assert result["meta"]["warnings"] == ["retryCount 99 exceeds the maximum; using 5"]
        assert store.waiting_on("T3") == ["T1"]

    async def test_retry_recovers_transient_failure(self, service, server_config, store):
        store.fail_next("add_dependency", RemoteRejectedError("ClickUp API error 502", status_code=502, retryable=True))

        result = await _run(
            "bulk-add",
            service,
            server_config,
            dependencies=[{"taskId": "T3", "dependsOn": ["T1"]}],
            options={"retryCount": 1},
        )

        assert result["data"]["summary"]["success"] == 1
        assert "warnings" not in result["meta"]


@pytest.mark.asyncio
class TestDispatchBoundary:
    async def test_unknown_action(self, service, server_config):
        result = await _run("explode", service, server_config)

        assert result["data"]["error_code"] == "VALIDATION_ERROR"
        assert result["data"]["details"]["allowed_actions"] == ["get", "add", "remove", "bulk-add"]

    async def test_unexpected_error_becomes_internal(self, service, server_config, store):
        store.fail_next("get_task", ZeroDivisionError("division by zero"))

        result = await _run("get", service, server_config, task_id="T1")

        assert result["data"]["error_code"] == "INTERNAL_ERROR"
        assert result["data"]["details"]["error_type"] == "ZeroDivisionError"
