"""ServerConfig loading and validation logic.

Provides ``_ServerConfigLoader``, a mixin class whose methods are inherited by
``ServerConfig`` (defined in ``server.py``). Splitting loading/validation
logic into its own module keeps ``server.py`` focused on field definitions and
simple accessor methods.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, List, Optional, cast

if TYPE_CHECKING:
    from clickup_mcp.config.server import ServerConfig

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # Python < 3.11 fallback

from clickup_mcp.config.domains import ClickUpSettings, DependencySettings
from clickup_mcp.config.parsing import _normalize_base_url, _parse_bool, _parse_csv, _try_parse_bool

logger = logging.getLogger(__name__)

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class _ServerConfigLoader:
    """Mixin providing config-loading methods for ``ServerConfig``.

    At runtime ``self`` is always a ``ServerConfig`` instance.
    """

    if TYPE_CHECKING:
        log_level: str
        structured_logging: bool
        server_name: str
        server_version: str
        disabled_tools: List[str]
        clickup: ClickUpSettings
        dependencies: DependencySettings
        startup_warnings: List[str]

        def _add_startup_warning(self, message: str) -> None: ...

    @classmethod
    def from_env(cls, config_file: Optional[str] = None) -> "ServerConfig":
        """
        Create configuration from environment variables and optional TOML file.

        Priority (highest to lowest):
        1. Environment variables
        2. Project TOML config (./clickup-mcp.toml or ./.clickup-mcp.toml)
        3. User TOML config (~/.clickup-mcp.toml)
        4. XDG config (~/.config/clickup-mcp/config.toml)
        5. Default values
        """
        config = cls()

        toml_path = config_file or os.environ.get("CLICKUP_MCP_CONFIG_FILE")
        if toml_path:
            config._load_toml(Path(toml_path))
        else:
            xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
            xdg_config = Path(xdg_config_home) / "clickup-mcp" / "config.toml"
            if xdg_config.exists():
                config._load_toml(xdg_config)
                logger.debug(f"Loaded XDG config from {xdg_config}")

            home_config = Path.home() / ".clickup-mcp.toml"
            if home_config.exists():
                config._load_toml(home_config)
                logger.debug(f"Loaded user config from {home_config}")

            project_config = Path("clickup-mcp.toml")
            if project_config.exists():
                config._load_toml(project_config)
                logger.debug(f"Loaded project config from {project_config}")
            else:
                hidden_config = Path(".clickup-mcp.toml")
                if hidden_config.exists():
                    config._load_toml(hidden_config)
                    logger.debug(f"Loaded project config from {hidden_config}")

        config._load_env()
        config._validate_startup_configuration()

        return cast("ServerConfig", config)

    def _load_toml(self, path: Path) -> None:
        """Load configuration from a TOML file, overlaying the current values."""
        if not path.exists():
            logger.warning(f"Config file not found: {path}")
            return

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)

            if "clickup" in data:
                self.clickup = ClickUpSettings.from_toml_dict({**asdict(self.clickup), **data["clickup"]})

            if "dependencies" in data:
                self.dependencies = DependencySettings.from_toml_dict(
                    {**asdict(self.dependencies), **data["dependencies"]}
                )

            if "logging" in data:
                log = data["logging"]
                if "level" in log:
                    self.log_level = str(log["level"]).upper()
                if "structured" in log:
                    self.structured_logging = _parse_bool(log["structured"])

            if "server" in data:
                srv = data["server"]
                if "name" in srv:
                    self.server_name = srv["name"]

            if "tools" in data:
                tools_cfg = data["tools"]
                if "disabled_tools" in tools_cfg:
                    self.disabled_tools = list(tools_cfg["disabled_tools"])

        except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
            logger.error(f"Error loading config file {path}: {e}")
            self._add_startup_warning(f"Config file {path} could not be loaded: {e}")

    def _load_env(self) -> None:
        """Load configuration from environment variables."""
        if token := os.environ.get("CLICKUP_API_TOKEN"):
            self.clickup.api_token = token.strip()

        if team := os.environ.get("CLICKUP_TEAM_ID"):
            self.clickup.team_id = team.strip()

        if base_url := os.environ.get("CLICKUP_BASE_URL"):
            self.clickup.base_url = _normalize_base_url(base_url)

        if timeout := os.environ.get("CLICKUP_TIMEOUT"):
            self._apply_number("CLICKUP_TIMEOUT", timeout, float, lambda v: setattr(self.clickup, "timeout", v))

        if level := os.environ.get("CLICKUP_MCP_LOG_LEVEL"):
            self.log_level = level.strip().upper()

        if structured := os.environ.get("CLICKUP_MCP_STRUCTURED_LOGGING"):
            parsed = _try_parse_bool(structured)
            if parsed is None:
                self._add_startup_warning(
                    f"Ignoring CLICKUP_MCP_STRUCTURED_LOGGING: expected true/false, got {structured!r}"
                )
            else:
                self.structured_logging = parsed

        if depth := os.environ.get("CLICKUP_MCP_CYCLE_CHECK_DEPTH"):
            self._apply_number(
                "CLICKUP_MCP_CYCLE_CHECK_DEPTH",
                depth,
                int,
                lambda v: setattr(self.dependencies, "cycle_check_depth", v),
            )

        if max_retry := os.environ.get("CLICKUP_MCP_MAX_RETRY_COUNT"):
            self._apply_number(
                "CLICKUP_MCP_MAX_RETRY_COUNT",
                max_retry,
                int,
                lambda v: setattr(self.dependencies, "max_retry_count", v),
            )

        if disabled := os.environ.get("CLICKUP_MCP_DISABLED_TOOLS"):
            self.disabled_tools = _parse_csv(disabled)

    def _apply_number(
        self,
        env_var: str,
        raw: str,
        parse: Callable[[str], Any],
        apply: Callable[[Any], None],
    ) -> None:
        try:
            apply(parse(raw.strip()))
        except ValueError:
            self._add_startup_warning(f"Ignoring {env_var}: expected a number, got {raw!r}")

    def _validate_startup_configuration(self) -> None:
        """Collect warnings for settings that would make every tool call fail."""
        if not self.clickup.api_token:
            self._add_startup_warning("CLICKUP_API_TOKEN is not set; every ClickUp request will be rejected.")
        if not self.clickup.team_id:
            self._add_startup_warning("CLICKUP_TEAM_ID is not set; tasks can only be referenced by ID.")
        if self.log_level not in _VALID_LOG_LEVELS:
            self._add_startup_warning(f"Unknown log level '{self.log_level}', falling back to INFO.")
            self.log_level = "INFO"
        if self.clickup.timeout <= 0:
            self._add_startup_warning("clickup.timeout must be positive; using 30 seconds.")
            self.clickup.timeout = 30.0
        if self.clickup.max_search_pages < 1:
            self._add_startup_warning("clickup.max_search_pages must be at least 1; using 1.")
            self.clickup.max_search_pages = 1
        if self.dependencies.cycle_check_depth < 1:
            self._add_startup_warning("cycle_check_depth must be at least 1; using 1.")
            self.dependencies.cycle_check_depth = 1
        elif self.dependencies.cycle_check_depth > 1:
            logger.info(
                "Cycle guard will search up to %d waiting_on hops",
                self.dependencies.cycle_check_depth,
            )
        if self.dependencies.max_retry_count < 0:
            self._add_startup_warning("max_retry_count must not be negative; using 0.")
            self.dependencies.max_retry_count = 0
        if self.dependencies.retry_backoff_seconds < 0:
            self.dependencies.retry_backoff_seconds = 0.0
        if self.dependencies.max_batch_size < 1:
            self._add_startup_warning("max_batch_size must be at least 1; using 100.")
            self.dependencies.max_batch_size = 100
