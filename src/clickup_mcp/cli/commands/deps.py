"""Dependency commands: run the dependency tools from the command line.

Each command opens its own ClickUp client, dispatches through the same
router the MCP tools use, and prints the resulting envelope.
"""

import asyncio
import json
from dataclasses import asdict
from typing import Any, Optional

import click

from clickup_mcp.cli.output import emit, emit_error, emit_success
from clickup_mcp.cli.registry import get_context
from clickup_mcp.config import ServerConfig
from clickup_mcp.core.clickup import ClickUpClient
from clickup_mcp.core.context import generate_correlation_id, request_context
from clickup_mcp.core.responses import feature_disabled_error
from clickup_mcp.core.task import DependencyService
from clickup_mcp.tools.unified.dependency import _DEPENDENCY_ROUTER, dependency_action


async def _run_action(config: ServerConfig, action: str, **payload: Any) -> dict:
    async with request_context(correlation_id=generate_correlation_id(prefix="cli")):
        async with ClickUpClient(config.clickup) as client:
            service = DependencyService.from_config(client, config)
            return await dependency_action(action, config=config, service=service, **payload)


def _dispatch(ctx: click.Context, tool_name: str, action: str, **payload: Any) -> None:
    config = get_context(ctx).config
    if not config.is_tool_enabled(tool_name):
        emit(asdict(feature_disabled_error(tool_name)))
        return
    emit(asyncio.run(_run_action(config, action, **payload)))


@click.group("deps")
def deps_group() -> None:
    """Read and change task dependencies."""


@deps_group.command("actions")
def list_actions_cmd() -> None:
    """List the dependency actions and what they do."""
    emit_success({"actions": _DEPENDENCY_ROUTER.describe()})


@deps_group.command("get")
@click.option("--task-id", default=None, help="Task ID.")
@click.option("--task-name", default=None, help="Task name (case-insensitive).")
@click.option("--list-name", default=None, help="List name that disambiguates --task-name.")
@click.option("--include-subtasks", is_flag=True, help="Include dependencies recorded on subtasks.")
@click.pass_context
def get_cmd(
    ctx: click.Context,
    task_id: Optional[str],
    task_name: Optional[str],
    list_name: Optional[str],
    include_subtasks: bool,
) -> None:
    """Show the tasks a task is waiting on."""
    _dispatch(
        ctx,
        "get_task_dependencies",
        "get",
        task_id=task_id,
        task_name=task_name,
        list_name=list_name,
        include_subtasks=include_subtasks,
    )


@deps_group.command("add")
@click.option("--task-id", default=None, help="Dependent task ID.")
@click.option("--task-name", default=None, help="Dependent task name.")
@click.option("--list-name", default=None)
@click.option("--depends-on-id", default=None, help="Dependency task ID.")
@click.option("--depends-on-name", default=None, help="Dependency task name.")
@click.option("--depends-on-list", default=None)
@click.option(
    "--type",
    "dependency_type",
    type=click.Choice(["waiting_on", "blocking"]),
    default="waiting_on",
    show_default=True,
)
@click.pass_context
def add_cmd(
    ctx: click.Context,
    task_id: Optional[str],
    task_name: Optional[str],
    list_name: Optional[str],
    depends_on_id: Optional[str],
    depends_on_name: Optional[str],
    depends_on_list: Optional[str],
    dependency_type: str,
) -> None:
    """Make a task wait on (or block) another task."""
    _dispatch(
        ctx,
        "add_task_dependency",
        "add",
        task_id=task_id,
        task_name=task_name,
        list_name=list_name,
        depends_on_task_id=depends_on_id,
        depends_on_task_name=depends_on_name,
        depends_on_list_name=depends_on_list,
        dependency_type=dependency_type,
    )


@deps_group.command("remove")
@click.option("--task-id", default=None, help="Dependent task ID.")
@click.option("--task-name", default=None, help="Dependent task name.")
@click.option("--list-name", default=None)
@click.option("--dependency-id", default=None, help="ID of the task being waited on.")
@click.option("--dependency-name", default=None, help="Name of the task being waited on.")
@click.option("--dependency-list", default=None)
@click.pass_context
def remove_cmd(
    ctx: click.Context,
    task_id: Optional[str],
    task_name: Optional[str],
    list_name: Optional[str],
    dependency_id: Optional[str],
    dependency_name: Optional[str],
    dependency_list: Optional[str],
) -> None:
    """Remove a dependency between two tasks."""
    _dispatch(
        ctx,
        "remove_task_dependency",
        "remove",
        task_id=task_id,
        task_name=task_name,
        list_name=list_name,
        dependency_task_id=dependency_id,
        dependency_task_name=dependency_name,
        dependency_list_name=dependency_list,
    )


@deps_group.command("bulk")
@click.argument("source", type=click.File("r"), default="-")
@click.option("--continue-on-error", is_flag=True, help="Attempt every pair even after a failure.")
@click.option("--retry-count", type=int, default=0, show_default=True, help="Retries per pair for transient errors.")
@click.pass_context
def bulk_cmd(ctx: click.Context, source: Any, continue_on_error: bool, retry_count: int) -> None:
    """Add dependencies from a JSON file (or stdin with '-').

    SOURCE holds a list of {"taskId": ..., "dependsOn": [...]} objects, or an
    object with that list under "dependencies".
    """
    try:
        document = json.load(source)
    except json.JSONDecodeError as exc:
        emit_error(
            f"Invalid JSON input: {exc.msg}",
            remediation="Pass a JSON list of {taskId, dependsOn: [...]} objects",
            details={"line": exc.lineno, "column": exc.colno},
        )

    dependencies = document.get("dependencies") if isinstance(document, dict) else document
    _dispatch(
        ctx,
        "add_bulk_dependencies",
        "bulk-add",
        dependencies=dependencies,
        options={"continueOnError": continue_on_error, "retryCount": retry_count},
    )
