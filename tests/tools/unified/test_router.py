"""Tests for ActionRouter and dispatch_with_standard_errors."""

from __future__ import annotations

import logging

import pytest

from clickup_mcp.core.errors import ActionRouterError, TaskNotFoundError
from clickup_mcp.tools.unified.common import build_request_id, dispatch_with_standard_errors, make_metric_name
from clickup_mcp.tools.unified.router import ActionDefinition, ActionRouter


def _sync_handler(**kwargs):
    return {"success": True, "data": {"handler": "sync", **kwargs}}


async def _async_handler(**kwargs):
    return {"success": True, "data": {"handler": "async", **kwargs}}


def _router():
    return ActionRouter(
        "dependency",
        [
            ActionDefinition(name="get", handler=_sync_handler, summary="Read", aliases=("list",)),
            ActionDefinition(name="bulk-add", handler=_async_handler, summary="Many"),
        ],
    )


class TestActionRouter:
    def test_allowed_actions_in_order(self):
        assert _router().allowed_actions() == ["get", "bulk-add"]

    def test_describe(self):
        assert _router().describe() == {"get": "Read", "bulk-add": "Many"}

    @pytest.mark.parametrize("action", ["get", "GET", " list ", "List"])
    def test_resolve_names_and_aliases(self, action):
        assert _router().resolve(action).name == "get"

    def test_unknown_action(self):
        with pytest.raises(ActionRouterError) as exc_info:
            _router().resolve("explode")

        assert exc_info.value.allowed_actions == ("get", "bulk-add")

    def test_duplicate_action_rejected(self):
        with pytest.raises(ValueError):
            ActionRouter(
                "dependency",
                [ActionDefinition("get", _sync_handler), ActionDefinition("GET", _sync_handler)],
            )

    def test_alias_clash_rejected(self):
        with pytest.raises(ValueError):
            ActionRouter(
                "dependency",
                [ActionDefinition("get", _sync_handler), ActionDefinition("list", _sync_handler, aliases=("get",))],
            )


@pytest.mark.asyncio
class TestDispatch:
    async def test_sync_handler(self):
        result = await _router().dispatch("get", task_id="T1")

        assert result["data"] == {"handler": "sync", "task_id": "T1"}

    async def test_async_handler_awaited(self):
        result = await _router().dispatch("bulk-add")

        assert result["data"]["handler"] == "async"


@pytest.mark.asyncio
class TestDispatchWithStandardErrors:
    async def test_success_passthrough(self):
        result = await dispatch_with_standard_errors(_router(), "dependency", "get", task_id="T1")

        assert result["success"] is True

    async def test_unknown_action_envelope(self):
        result = await dispatch_with_standard_errors(_router(), "dependency", "explode", request_id="rid_1")

        assert result["success"] is False
        assert result["data"]["error_code"] == "VALIDATION_ERROR"
        assert result["data"]["details"] == {
            "action": "explode",
            "allowed_actions": ["get", "bulk-add"],
            "field": "action",
        }
        assert result["meta"]["request_id"] == "rid_1"

    async def test_domain_error_mapped(self):
        async def handler(**_):
            raise TaskNotFoundError("missing-1")

        router = ActionRouter("dependency", [ActionDefinition("get", handler)])
        result = await dispatch_with_standard_errors(router, "dependency", "get")

        assert result["data"]["error_code"] == "TASK_NOT_FOUND"
        assert result["data"]["details"] == {"task": "missing-1", "action": "dependency.get"}

    async def test_unexpected_error_sanitised(self, caplog):
        async def handler(**_):
            raise RuntimeError("token pk_1_secret leaked at /srv/app.py")

        router = ActionRouter("dependency", [ActionDefinition("get", handler)])
        with caplog.at_level(logging.ERROR, logger="clickup_mcp.tools.unified.common"):
            result = await dispatch_with_standard_errors(router, "dependency", "get", request_id="rid_2")

        assert result["data"]["error_code"] == "INTERNAL_ERROR"
        assert result["data"]["details"] == {"action": "dependency.get", "error_type": "RuntimeError"}
        assert "pk_1_secret" not in result["error"]
        assert "rid_2" in result["data"]["remediation"]
        assert any(record.exc_info for record in caplog.records)


class TestHelpers:
    def test_metric_name(self):
        assert make_metric_name("unified_tools.dependency", "bulk-add") == "unified_tools.dependency.bulk_add"

    def test_request_id_prefix(self):
        assert build_request_id("dependency").startswith("dependency_")
