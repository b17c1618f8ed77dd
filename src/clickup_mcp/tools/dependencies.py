"""
Task dependency tools for clickup-mcp.

Provides the MCP tools for reading and mutating ClickUp task dependencies.
Every tool is a thin adapter from camelCase tool arguments to the unified
dependency router.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from clickup_mcp.config import ServerConfig
from clickup_mcp.core.naming import canonical_tool
from clickup_mcp.core.task import DependencyService
from clickup_mcp.tools.unified.dependency import dependency_action

logger = logging.getLogger(__name__)

DEPENDENCY_TOOL_NAMES = (
    "get_task_dependencies",
    "add_task_dependency",
    "remove_task_dependency",
    "add_bulk_dependencies",
)


def register_dependency_tools(
    mcp: FastMCP,
    config: ServerConfig,
    get_service: Callable[[], DependencyService],
) -> List[str]:
    """
    Register dependency tools with the FastMCP server.

    Args:
        mcp: FastMCP server instance
        config: Server configuration
        get_service: Returns the live DependencyService owned by the server lifespan

    Returns:
        Names of the tools that were registered
    """
    registered: List[str] = []

    def _enabled(name: str) -> bool:
        if config.is_tool_enabled(name):
            registered.append(name)
            return True
        logger.info("Tool %s disabled by configuration", name)
        return False

    if _enabled("get_task_dependencies"):

        @canonical_tool(mcp, canonical_name="get_task_dependencies")
        async def get_task_dependencies(
            taskId: Optional[str] = None,
            taskName: Optional[str] = None,
            listName: Optional[str] = None,
            includeSubtasks: bool = False,
        ) -> dict:
            """
            Get the tasks a ClickUp task is waiting on.

            Identify the task by taskId, or by taskName (optionally narrowed
            by listName). The blocking list is always empty: finding tasks
            that wait on this one would need a workspace-wide scan.

            Args:
                taskId: ClickUp task ID
                taskName: Task name, matched case-insensitively
                listName: List name that disambiguates taskName
                includeSubtasks: Also include dependencies recorded on direct subtasks

            Returns:
                JSON object with the task and its waiting_on/blocking lists
            """
            return await dependency_action(
                "get",
                config=config,
                service=get_service(),
                task_id=taskId,
                task_name=taskName,
                list_name=listName,
                include_subtasks=includeSubtasks,
            )

    if _enabled("add_task_dependency"):

        @canonical_tool(mcp, canonical_name="add_task_dependency")
        async def add_task_dependency(
            taskId: Optional[str] = None,
            taskName: Optional[str] = None,
            listName: Optional[str] = None,
            dependsOnTaskId: Optional[str] = None,
            dependsOnTaskName: Optional[str] = None,
            dependsOnListName: Optional[str] = None,
            dependencyType: str = "waiting_on",
        ) -> dict:
            """
            Make one ClickUp task depend on another.

            With dependencyType "waiting_on" (default) the task waits on the
            dependsOn task. With "blocking" the task blocks the dependsOn task.
            Self-dependencies and direct two-task cycles are rejected before
            anything is written.

            Args:
                taskId: ID of the dependent task
                taskName: Name of the dependent task
                listName: List name that disambiguates taskName
                dependsOnTaskId: ID of the dependency task
                dependsOnTaskName: Name of the dependency task
                dependsOnListName: List name that disambiguates dependsOnTaskName
                dependencyType: "waiting_on" or "blocking"

            Returns:
                JSON object with the created dependency and a confirmation message
            """
            return await dependency_action(
                "add",
                config=config,
                service=get_service(),
                task_id=taskId,
                task_name=taskName,
                list_name=listName,
                depends_on_task_id=dependsOnTaskId,
                depends_on_task_name=dependsOnTaskName,
                depends_on_list_name=dependsOnListName,
                dependency_type=dependencyType,
            )

    if _enabled("remove_task_dependency"):

        @canonical_tool(mcp, canonical_name="remove_task_dependency")
        async def remove_task_dependency(
            taskId: Optional[str] = None,
            taskName: Optional[str] = None,
            listName: Optional[str] = None,
            dependencyTaskId: Optional[str] = None,
            dependencyTaskName: Optional[str] = None,
            dependencyListName: Optional[str] = None,
        ) -> dict:
            """
            Remove a dependency so a task no longer waits on another.

            Args:
                taskId: ID of the dependent task
                taskName: Name of the dependent task
                listName: List name that disambiguates taskName
                dependencyTaskId: ID of the task being waited on
                dependencyTaskName: Name of the task being waited on
                dependencyListName: List name that disambiguates dependencyTaskName

            Returns:
                JSON object confirming the removed dependency
            """
            return await dependency_action(
                "remove",
                config=config,
                service=get_service(),
                task_id=taskId,
                task_name=taskName,
                list_name=listName,
                dependency_task_id=dependencyTaskId,
                dependency_task_name=dependencyTaskName,
                dependency_list_name=dependencyListName,
            )

    if _enabled("add_bulk_dependencies"):

        @canonical_tool(mcp, canonical_name="add_bulk_dependencies")
        async def add_bulk_dependencies(
            dependencies: List[Dict[str, Any]],
            options: Optional[Dict[str, Any]] = None,
        ) -> dict:
            """
            Add many dependencies in one call.

            Pairs are applied one at a time in input order. By default the run
            stops at the first failure; set options.continueOnError to attempt
            every pair. options.retryCount retries rate-limited or transient
            ClickUp failures for each pair.

            Args:
                dependencies: List of {taskId, dependsOn: [taskId, ...]} objects
                options: {continueOnError: bool, retryCount: int}

            Returns:
                JSON object with successful and failed pairs plus a summary
            """
            return await dependency_action(
                "bulk-add",
                config=config,
                service=get_service(),
                dependencies=dependencies,
                options=options,
            )

    logger.debug("Registered dependency tools: %s", ", ".join(registered))
    return registered
