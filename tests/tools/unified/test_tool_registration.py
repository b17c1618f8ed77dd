"""Tool registration tests.

Validates that the dependency tools are registered under their canonical
names with camelCase parameters, that ``disabled_tools`` is honoured, and
that each tool delegates to the unified dependency router.
"""

from __future__ import annotations

from dataclasses import replace

import pytest
from mcp.server.fastmcp import FastMCP

from clickup_mcp.server import create_server
from clickup_mcp.tools.dependencies import DEPENDENCY_TOOL_NAMES, register_dependency_tools


class CapturingMCP:
    """Stands in for FastMCP and keeps the decorated tool callables."""

    def __init__(self):
        self.tools = {}

    def tool(self, name=None, **_kwargs):
        def decorator(fn):
            self.tools[name] = fn
            return fn

        return decorator


@pytest.fixture
def captured(server_config, service):
    mcp = CapturingMCP()
    register_dependency_tools(mcp, server_config, lambda: service)
    return mcp.tools


class TestRegistration:
    def test_all_tools_registered(self, server_config, service):
        mcp = CapturingMCP()

        registered = register_dependency_tools(mcp, server_config, lambda: service)

        assert registered == list(DEPENDENCY_TOOL_NAMES)
        assert sorted(mcp.tools) == sorted(DEPENDENCY_TOOL_NAMES)

    def test_disabled_tool_skipped(self, server_config, service):
        config = replace(server_config, disabled_tools=["add_bulk_dependencies"])
        mcp = CapturingMCP()

        registered = register_dependency_tools(mcp, config, lambda: service)

        assert "add_bulk_dependencies" not in registered
        assert "add_bulk_dependencies" not in mcp.tools
        assert len(registered) == 3


@pytest.mark.asyncio
class TestFastMCPSchema:
    async def test_camel_case_parameters(self, server_config, service):
        mcp = FastMCP("test")
        register_dependency_tools(mcp, server_config, lambda: service)

        tools = {tool.name: tool for tool in await mcp.list_tools()}

        assert set(tools) == set(DEPENDENCY_TOOL_NAMES)
        add_props = tools["add_task_dependency"].inputSchema["properties"]
        assert {"taskId", "taskName", "listName", "dependsOnTaskId", "dependencyType"} <= set(add_props)
        bulk_schema = tools["add_bulk_dependencies"].inputSchema
        assert bulk_schema["required"] == ["dependencies"]

    async def test_create_server(self, server_config):
        config = replace(server_config, server_name="deps-test", disabled_tools=["remove_task_dependency"])

        mcp = create_server(config)

        assert mcp.name == "deps-test"
        names = {tool.name for tool in await mcp.list_tools()}
        assert names == set(DEPENDENCY_TOOL_NAMES) - {"remove_task_dependency"}


@pytest.mark.asyncio
class TestToolCalls:
    async def test_get_task_dependencies(self, captured, store):
        store.link("T1", "T2")

        result = await captured["get_task_dependencies"](taskId="T1")

        assert result["success"] is True
        assert result["meta"]["request_id"].startswith("tool_")
        assert [d["task_id"] for d in result["data"]["dependencies"]["waiting_on"]] == ["T2"]

    async def test_add_task_dependency(self, captured, store):
        result = await captured["add_task_dependency"](taskId="T1", dependsOnTaskId="T3")

        assert result["success"] is True
        assert store.waiting_on("T1") == ["T3"]

    async def test_add_then_reverse_is_circular(self, captured):
        await captured["add_task_dependency"](taskId="T1", dependsOnTaskId="T2")

        result = await captured["add_task_dependency"](taskId="T2", dependsOnTaskId="T1")

        assert result["data"]["error_code"] == "CIRCULAR_DEPENDENCY"

    async def test_remove_task_dependency(self, captured, store):
        store.link("T1", "T2")

        result = await captured["remove_task_dependency"](taskName="Task 1", dependencyTaskId="T2")

        assert result["data"]["task_id"] == "T1"
        assert store.waiting_on("T1") == []

    async def test_add_bulk_dependencies(self, captured):
        result = await captured["add_bulk_dependencies"](
            dependencies=[{"taskId": "T3", "dependsOn": ["T1", "T2"]}],
            options={"continueOnError": True, "retryCount": 0},
        )

        assert result["data"]["summary"] == {"total": 2, "success": 2, "failed": 0}

    async def test_request_id_shared_with_handler(self, captured):
        result = await captured["add_task_dependency"](taskId="T1", dependsOnTaskId="T1")

        assert result["meta"]["request_id"].startswith("tool_")

    async def test_service_unavailable_before_session(self, server_config):
        mcp = CapturingMCP()

        def get_service():
            raise RuntimeError("ClickUp client is not running")

        register_dependency_tools(mcp, server_config, get_service)

        with pytest.raises(RuntimeError):
            await mcp.tools["get_task_dependencies"](taskId="T1")
