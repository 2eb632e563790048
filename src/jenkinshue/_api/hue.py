"""Hue bridge REST API (v1) endpoints.

Endpoints:
  - GET /api/<username>/lights/<id>
  - PUT /api/<username>/lights/<id>/state
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from jenkinshue._constants import LIGHT_PATH, LIGHT_STATE_PATH
from jenkinshue._redact import redact_url
from jenkinshue._transport import Transport
from jenkinshue.config import HueConfig
from jenkinshue.exceptions import HueApiError, HueTransportError


def _light_url(config: HueConfig, template: str, light_id: str) -> str:
    path = template.format(username=quote(config.username, safe=""), light_id=quote(light_id, safe=""))
    return f"{config.base_url}{path}"


def _raise_for_errors(decoded: Any, url: str) -> None:
    """Raise :class:`HueApiError` for the first ``{"error": ...}`` item."""
    items = decoded if isinstance(decoded, list) else [decoded]
    for item in items:
        if not isinstance(item, dict):
            continue
        error = item.get("error")
        if not isinstance(error, dict):
            continue
        error_type = error.get("type")
        description = error.get("description") or "unknown error"
        raise HueApiError(
            f"Hue bridge error {error_type}: {description}",
            error_type=error_type if isinstance(error_type, int) else None,
            address=str(error.get("address") or ""),
            url=redact_url(url),
        )


async def fetch_light_status(config: HueConfig, transport: Transport, light_id: str) -> dict[str, Any]:
    """Return the raw light object (``{"state": {"on": ...}, "name": ...}``)."""
    url = _light_url(config, LIGHT_PATH, light_id)
    decoded = await transport.get_json(url)
    _raise_for_errors(decoded, url)
    if not isinstance(decoded, dict):
        raise HueTransportError(f"Unexpected light payload for light {light_id}", url=redact_url(url))
    return decoded


async def put_light_state(
    config: HueConfig,
    transport: Transport,
    light_id: str,
    body: Mapping[str, Any],
) -> list[dict[str, Any]]:
    """Send a state change and return the bridge's success list."""
    url = _light_url(config, LIGHT_STATE_PATH, light_id)
    decoded = await transport.put_json(url, body)
    _raise_for_errors(decoded, url)
    if not isinstance(decoded, list):
        return []
    return [item for item in decoded if isinstance(item, dict)]
