"""Domain-specific configuration dataclasses.

Contains the ClickUp connection settings and the dependency-management
tuning knobs.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from clickup_mcp.config.parsing import _normalize_base_url

DEFAULT_BASE_URL = "https://api.clickup.com/api/v2"


@dataclass
class ClickUpSettings:
    """Connection settings for the ClickUp REST API.

    Attributes:
        api_token: Personal or OAuth token sent verbatim in ``Authorization``
        team_id: Workspace (team) ID used for name search and edge provenance
        base_url: API root, without a trailing slash
        timeout: Transport timeout in seconds for each request
        max_search_pages: Upper bound on pages scanned when resolving a task
            by name
    """

    api_token: Optional[str] = None
    team_id: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    max_search_pages: int = 10

    @classmethod
    def from_toml_dict(cls, data: Dict[str, Any]) -> "ClickUpSettings":
        """Create settings from a ``[clickup]`` TOML table."""
        team_id = data.get("team_id")
        return cls(
            api_token=data.get("api_token"),
            team_id=str(team_id) if team_id is not None else None,
            base_url=_normalize_base_url(str(data.get("base_url", DEFAULT_BASE_URL))),
            timeout=float(data.get("timeout", 30.0)),
            max_search_pages=int(data.get("max_search_pages", 10)),
        )


@dataclass
class DependencySettings:
    """Tuning for the cycle guard and the bulk orchestrator.

    Attributes:
        cycle_check_depth: How many ``waiting_on`` hops the cycle guard
            explores. ``1`` rejects only direct two-task cycles; larger values
            run a bounded breadth-first search and cost one remote fetch per
            visited task.
        max_retry_count: Upper bound accepted for a bulk request's
            ``retryCount`` option
        retry_backoff_seconds: Base delay between retries of a transient
            remote failure; doubles on each attempt
        max_batch_size: Upper bound on the number of entries in one bulk request
    """

    cycle_check_depth: int = 1
    max_retry_count: int = 5
    retry_backoff_seconds: float = 0.5
    max_batch_size: int = 100

    @classmethod
    def from_toml_dict(cls, data: Dict[str, Any]) -> "DependencySettings":
        """Create settings from a ``[dependencies]`` TOML table."""
        return cls(
            cycle_check_depth=int(data.get("cycle_check_depth", 1)),
            max_retry_count=int(data.get("max_retry_count", 5)),
            retry_backoff_seconds=float(data.get("retry_backoff_seconds", 0.5)),
            max_batch_size=int(data.get("max_batch_size", 100)),
        )
