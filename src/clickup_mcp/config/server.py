"""ServerConfig dataclass and global configuration state.

This module defines the ``ServerConfig`` class (field declarations and simple
accessor methods) and the global ``get_config`` / ``set_config`` helpers.
Loading and validation logic lives in the ``_ServerConfigLoader`` mixin
(``loader.py``) which ``ServerConfig`` inherits from.
"""

import logging
import sys
from dataclasses import dataclass, field
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_package_version
from typing import List, Optional

from clickup_mcp.config.domains import ClickUpSettings, DependencySettings
from clickup_mcp.config.loader import _ServerConfigLoader


def _get_version() -> str:
    """Get package version from metadata (single source of truth: pyproject.toml)."""
    try:
        return get_package_version("clickup-dependency-mcp")
    except PackageNotFoundError:
        return "0.3.0"  # Fallback for dev without install


_PACKAGE_VERSION = _get_version()


@dataclass
class ServerConfig(_ServerConfigLoader):
    """Server configuration with support for env vars and TOML overrides."""

    # Logging configuration
    log_level: str = "INFO"
    structured_logging: bool = True

    # Server configuration
    server_name: str = "clickup-mcp"
    server_version: str = field(default_factory=lambda: _PACKAGE_VERSION)

    # Remote store connection
    clickup: ClickUpSettings = field(default_factory=ClickUpSettings)

    # Cycle guard and bulk orchestration
    dependencies: DependencySettings = field(default_factory=DependencySettings)

    # Tool registration control
    disabled_tools: List[str] = field(default_factory=list)

    startup_warnings: List[str] = field(default_factory=list, repr=False)

    def _add_startup_warning(self, message: str) -> None:
        if message and message not in self.startup_warnings:
            self.startup_warnings.append(message)

    def is_tool_enabled(self, tool_name: str) -> bool:
        """Return False when *tool_name* is listed in ``disabled_tools``."""
        return tool_name not in self.disabled_tools

    def setup_logging(self) -> None:
        """Configure logging based on settings.

        Output goes to stderr; stdout belongs to the stdio MCP transport.
        """
        level = getattr(logging, self.log_level, logging.INFO)

        if self.structured_logging:
            formatter = logging.Formatter(
                '{"timestamp":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}'
            )
        else:
            formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)

        root_logger = logging.getLogger("clickup_mcp")
        root_logger.setLevel(level)
        for existing in list(root_logger.handlers):
            if getattr(existing, "_clickup_mcp_handler", False):
                root_logger.removeHandler(existing)
        handler._clickup_mcp_handler = True  # type: ignore[attr-defined]
        root_logger.addHandler(handler)

        for warning in self.startup_warnings:
            root_logger.warning(warning)


# Global configuration instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def set_config(config: Optional[ServerConfig]) -> None:
    """Set (or with ``None``, reset) the global configuration instance."""
    global _config
    _config = config
