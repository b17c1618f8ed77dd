"""clickup-dependency-mcp: validated task dependency management for ClickUp over MCP."""

from clickup_mcp.config.server import _PACKAGE_VERSION as __version__

__all__ = ["__version__"]
