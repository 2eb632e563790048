"""Hue bridge light client."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from jenkinshue._api.hue import fetch_light_status, put_light_state
from jenkinshue._constants import ALERT_BLINK, HUE_ERROR_DEVICE_OFF
from jenkinshue._transport import JsonTransport, Transport
from jenkinshue.config import HueConfig
from jenkinshue.exceptions import HueApiError, HueTransportError

_logger = logging.getLogger(__name__)


class HueBridge:
    """Set, query and blink lights on a Hue bridge."""

    def __init__(self, config: HueConfig, transport: Transport) -> None:
        self._config = config
        self._transport = transport

    @classmethod
    def from_session(
        cls,
        config: HueConfig,
        http_session: aiohttp.ClientSession,
        *,
        timeout: float | None = None,
    ) -> HueBridge:
        transport = JsonTransport(http_session, error_cls=HueTransportError, timeout=timeout)
        return cls(config, transport)

    async def get_light_status(self, light_id: str) -> dict[str, Any]:
        return await fetch_light_status(self._config, self._transport, str(light_id))

    async def set_light(self, light_id: str, encoded_state: Mapping[str, Any]) -> None:
        results = await put_light_state(self._config, self._transport, str(light_id), encoded_state)
        _logger.debug("Light %s updated: %d attribute(s) acknowledged", light_id, len(results))

    async def blink(self, light_id: str) -> None:
        """Send one alert cycle; a light that is switched off cannot blink and is skipped."""
        try:
            await self.set_light(light_id, ALERT_BLINK)
        except HueApiError as exc:
            if exc.error_type != HUE_ERROR_DEVICE_OFF:
                raise
            _logger.debug("Light %s is off, not blinking", light_id)
