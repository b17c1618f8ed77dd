"""Configuration package for clickup-mcp.

Callers can use ``from clickup_mcp.config import ServerConfig`` etc.

Sub-modules:
    parsing    – Boolean/CSV/URL parsing helpers
    domains    – ClickUpSettings, DependencySettings
    server     – ServerConfig dataclass, get_config/set_config globals
    loader     – ServerConfig loading/validation mixin (_ServerConfigLoader)
    decorators – log_call, timed
"""

from clickup_mcp.config.decorators import (  # noqa: F401
    log_call,
    timed,
)
from clickup_mcp.config.domains import (  # noqa: F401
    DEFAULT_BASE_URL,
    ClickUpSettings,
    DependencySettings,
)
from clickup_mcp.config.parsing import _parse_bool, _try_parse_bool  # noqa: F401
from clickup_mcp.config.server import (  # noqa: F401
    _PACKAGE_VERSION,
    ServerConfig,
    get_config,
    set_config,
)
