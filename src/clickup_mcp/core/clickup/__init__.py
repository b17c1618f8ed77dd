"""ClickUp REST API access."""

from clickup_mcp.core.clickup.client import ClickUpClient

__all__ = ["ClickUpClient"]
