"""Helpers for safe debug logging.

The Hue bridge username is a bearer credential and it travels inside
every request path; Jenkins API tokens travel in basic auth. This module
redacts both before anything is emitted at DEBUG level.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "username",
        "password",
        "apitoken",
        "api_token",
        "token",
        "authorization",
        "cookie",
    }
)

# Only a segment followed by another path segment; Jenkins' trailing /api/json stays intact.
_HUE_API_USER_RE = re.compile(r"(/api/)([^/?#]+)(?=/)")


def redact_url(url: str) -> str:
    """Mask the Hue username segment of ``/api/<username>/...`` paths."""
    return _HUE_API_USER_RE.sub(r"\1<redacted>", url)


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key.lower() in _SENSITIVE_VALUE_KEYS:
                redacted[key] = "<redacted>"
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    return repr(value)
