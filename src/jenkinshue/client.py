"""High-level async entry point wiring Jenkins, the Hue bridge and the coordinator."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from jenkinshue.config import JenkinsHueConfig
from jenkinshue.coordinator import LightCoordinator
from jenkinshue.exceptions import JenkinsHueConfigError, NotInitializedError
from jenkinshue.hue import HueBridge
from jenkinshue.jenkins import JenkinsClient
from jenkinshue.models.light import LightState, LightStateTable

_logger = logging.getLogger(__name__)


class JenkinsHue:
    """Async client lighting Hue lights after Jenkins build states.

    Usage::

        async with JenkinsHue(config) as jenkins_hue:
            await jenkins_hue.update_for_job(3, "nightly")
    """

    def __init__(
        self,
        config: JenkinsHueConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        if config.jenkins is None:
            raise JenkinsHueConfigError("No configuration for Jenkins CI server found.")
        if config.hue is None:
            raise JenkinsHueConfigError("No configuration for Hue Bridge found.")
        self._config = config
        self._light_states = LightStateTable.with_overrides(config.hue_light_states)
        self._external_session = session is not None
        self._http_session = session
        self._coordinator: LightCoordinator | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> JenkinsHue:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        assert self._config.jenkins is not None  # noqa: S101
        assert self._config.hue is not None  # noqa: S101
        timeout = self._config.request_timeout
        jenkins = JenkinsClient.from_session(self._config.jenkins, self._http_session, timeout=timeout)
        bridge = HueBridge.from_session(self._config.hue, self._http_session, timeout=timeout)
        self._coordinator = LightCoordinator(jenkins, bridge, light_states=self._light_states)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        coordinator = self._coordinator
        self._coordinator = None
        if coordinator is not None:
            await coordinator.wait_idle()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def config(self) -> JenkinsHueConfig:
        return self._config

    @property
    def light_states(self) -> LightStateTable:
        return self._light_states

    @property
    def coordinator(self) -> LightCoordinator:
        return self._require_coordinator()

    async def update_for_job(self, light_id: str | int, job_name: str) -> asyncio.Task[None] | None:
        return await self._require_coordinator().update_for_job(light_id, job_name)

    async def update_for_view(self, light_id: str | int) -> asyncio.Task[None] | None:
        return await self._require_coordinator().update_for_view(light_id)

    async def switch_off(self, light_id: str | int) -> asyncio.Task[None] | None:
        return await self._require_coordinator().switch_off(light_id)

    async def blink_light(self, light_id: str | int) -> None:
        await self._require_coordinator().blink_light(light_id)

    async def is_light_on(self, light_id: str | int) -> bool:
        return await self._require_coordinator().is_light_on(light_id)

    def get_current_light_state(self, light_id: str | int) -> LightState | None:
        return self._require_coordinator().get_current_light_state(light_id)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_coordinator(self) -> LightCoordinator:
        if self._coordinator is None:
            raise NotInitializedError("Client not initialized. Use 'async with JenkinsHue(...) as client:'")
        return self._coordinator
