"""Decide when a light needs a new state and push it.

:class:`LightCoordinator` keeps a desired-state cache per light. A state
is pushed (and followed by a blink) only when it differs from the cached
one, except that a light found physically off always gets the push again
so a manually switched-off indicator comes back on.

Updates for the same light are serialized with a per-light lock, and
pushes to the same light are chained so the device sees them in the
order they were decided. Lights never wait on each other.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Mapping
from typing import Any, Protocol

from pydantic import ValidationError

from jenkinshue.classifier import classify
from jenkinshue.exceptions import InvalidArgumentError, JenkinsHueConfigError, MissingStateError
from jenkinshue.models.build import BuildColor
from jenkinshue.models.light import HueLightStatus, LightState, LightStateTable
from jenkinshue.state.store import LightStateCache, normalize_light_id

_logger = logging.getLogger(__name__)


class CIStatusProvider(Protocol):
    """Source of raw build colors."""

    async def get_job_color(self, job_name: str) -> BuildColor | str:
        ...

    async def get_view_color(self) -> BuildColor | str:
        ...


class LightDevice(Protocol):
    """A bridge able to set, query and blink lights."""

    async def set_light(self, light_id: str, encoded_state: Mapping[str, Any]) -> Any:
        ...

    async def get_light_status(self, light_id: str) -> Mapping[str, Any]:
        ...

    async def blink(self, light_id: str) -> Any:
        ...


class LightCoordinator:
    """Map build colors onto lights without redundant pushes.

    Parameters
    ----------
    ci : CIStatusProvider
        Where job and view colors come from.
    device : LightDevice
        The bridge driving the lights.
    light_states : LightStateTable or None
        Device encoding of each :class:`LightState`. Defaults to the
        built-in table.
    """

    def __init__(
        self,
        ci: CIStatusProvider | None,
        device: LightDevice | None,
        *,
        light_states: LightStateTable | None = None,
    ) -> None:
        if ci is None:
            raise JenkinsHueConfigError("No configuration for Jenkins CI server found.")
        if device is None:
            raise JenkinsHueConfigError("No configuration for Hue Bridge found.")
        self._ci = ci
        self._device = device
        self._light_states = light_states if light_states is not None else LightStateTable()
        self._cache = LightStateCache()
        self._locks: dict[str, asyncio.Lock] = {}
        self._pushes: dict[str, asyncio.Task[None]] = {}

    @property
    def light_states(self) -> LightStateTable:
        return self._light_states

    # ------------------------------------------------------------------
    # Update entry points
    # ------------------------------------------------------------------

    async def update_for_job(self, light_id: str | int, job_name: str) -> asyncio.Task[None] | None:
        """Show the status of *job_name* on *light_id*.

        Returns the push task started by :meth:`apply`, or ``None`` when
        the light already shows that state.
        """
        if not light_id or not isinstance(job_name, str) or not job_name.strip():
            raise InvalidArgumentError("Parameter is missing: light id and job name are required")
        key = normalize_light_id(light_id)
        color = await self._ci.get_job_color(job_name.strip())
        state = classify(color)
        _logger.debug("Job %s is %s -> %s on light %s", job_name, color, state, key)
        return await self.apply(key, state)

    async def update_for_view(self, light_id: str | int) -> asyncio.Task[None] | None:
        """Show the aggregate status of the configured view on *light_id*."""
        key = normalize_light_id(light_id)
        color = await self._ci.get_view_color()
        state = classify(color)
        _logger.debug("View is %s -> %s on light %s", color, state, key)
        return await self.apply(key, state)

    async def apply(self, light_id: str | int, state: LightState) -> asyncio.Task[None] | None:
        """Record *state* for *light_id* and push it if it changed.

        The cache is written before the push completes. The returned task
        resolves once the push and the following blink went through, and
        re-raises their failure; ``None`` means nothing was pushed.
        """
        key = normalize_light_id(light_id)
        async with self._lock(key):
            if not await self.is_light_on(key):
                # A dark light shows nothing, so whatever comes next is a change.
                self._cache.reset(key)
            return self._record(key, state)

    async def switch_off(self, light_id: str | int) -> asyncio.Task[None] | None:
        """Push the ``OFF`` encoding unless ``OFF`` is already recorded."""
        key = normalize_light_id(light_id)
        async with self._lock(key):
            return self._record(key, LightState.OFF)

    async def blink_light(self, light_id: str | int) -> None:
        """Send a single alert cycle to *light_id*."""
        await self._device.blink(normalize_light_id(light_id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def is_light_on(self, light_id: str | int) -> bool:
        """Ask the device whether *light_id* is powered on."""
        key = normalize_light_id(light_id)
        status = await self._device.get_light_status(key)
        try:
            parsed = HueLightStatus.model_validate(status)
        except ValidationError as exc:
            raise MissingStateError(f"No light state found for light {key}", light_id=key) from exc
        return parsed.state.on

    def get_current_light_state(self, light_id: str | int) -> LightState | None:
        """Return the desired state last recorded for *light_id*, if any."""
        return self._cache.get(light_id)

    async def wait_idle(self) -> None:
        """Wait until every started push has finished (successfully or not)."""
        while True:
            pending = [task for task in self._pushes.values() if not task.done()]
            if not pending:
                return
            await asyncio.wait(pending)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _lock(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    def _record(self, key: str, state: LightState) -> asyncio.Task[None] | None:
        push: asyncio.Task[None] | None = None
        if self._cache.differs(key, state):
            push = self._start_push(key, state)
        self._cache.set(key, state)
        return push

    def _start_push(self, key: str, state: LightState) -> asyncio.Task[None]:
        previous = self._pushes.get(key)
        task = asyncio.create_task(
            self._push_and_blink(key, state, previous),
            name=f"jenkinshue-push-{key}",
        )
        self._pushes[key] = task
        task.add_done_callback(functools.partial(self._on_push_done, key))
        return task

    async def _push_and_blink(
        self,
        key: str,
        state: LightState,
        previous: asyncio.Task[None] | None,
    ) -> None:
        if previous is not None and not previous.done():
            await asyncio.wait([previous])
        _logger.info("Setting light %s to %s", key, state)
        await self._device.set_light(key, self._light_states[state].to_payload())
        await self.blink_light(key)

    def _on_push_done(self, key: str, task: asyncio.Task[None]) -> None:
        if self._pushes.get(key) is task:
            del self._pushes[key]
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.warning("Pushing state to light %s failed: %s", key, exc)
