"""Pure helpers for parsing ClickUp HTTP responses.

SECURITY: every message extracted from a response body is run through
:func:`redact_secrets` before it reaches a log line or an error message.
"""

from __future__ import annotations

import re
import time
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    import httpx

# API keys, tokens and ClickUp personal tokens embedded in free text
_SECRET_PATTERN = re.compile(
    r"(?i)"
    r"(?:"
    r"(?:api[_-]?key|token|bearer|authorization|secret|password)"
    r"[\s:=\"']+"
    r")"
    r"([A-Za-z0-9_\-\.]{8,})"
)
_CLICKUP_TOKEN_PATTERN = re.compile(r"\bpk_[0-9]+_[A-Za-z0-9]{16,}\b")


def redact_secrets(text: str) -> str:
    """Remove API tokens from a text string."""
    if not text:
        return text

    def _replace(match: re.Match[str]) -> str:
        return match.group(0).replace(match.group(1), "****")

    return _CLICKUP_TOKEN_PATTERN.sub("****", _SECRET_PATTERN.sub(_replace, text))


def parse_retry_after(response: "httpx.Response", *, now: Optional[float] = None) -> Optional[float]:
    """Seconds to wait before retrying a 429 response.

    ``Retry-After`` (numeric) wins. Otherwise ClickUp's
    ``X-RateLimit-Reset`` epoch timestamp is converted to a delay.
    Returns ``None`` when neither header is usable.
    """
    retry_after = response.headers.get("Retry-After")
    if retry_after:
        try:
            return max(float(retry_after), 0.0)
        except ValueError:
            pass

    reset = response.headers.get("X-RateLimit-Reset")
    if reset:
        try:
            delay = float(reset) - (now if now is not None else time.time())
        except ValueError:
            return None
        return max(round(delay, 1), 0.0)
    return None


def extract_error_message(response: "httpx.Response") -> str:
    """Extract and redact an error message from a ClickUp error response.

    ClickUp error bodies look like ``{"err": "Task not found", "ECODE": "ITEM_013"}``;
    the ECODE is appended in brackets when present.
    """
    try:
        data: Any = response.json()
    except ValueError:
        text = response.text[:200] if response.text else f"HTTP {response.status_code}"
        return redact_secrets(text)

    if not isinstance(data, dict):
        return redact_secrets(str(data)[:200])

    message = data.get("err") or data.get("error") or data.get("message")
    if isinstance(message, dict):
        message = message.get("message", str(message))
    if not message:
        message = response.text[:200] if response.text else f"HTTP {response.status_code}"

    ecode = data.get("ECODE")
    if ecode:
        message = f"{message} [{ecode}]"
    return redact_secrets(str(message))
