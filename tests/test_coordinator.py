from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

import pytest

from jenkinshue.coordinator import LightCoordinator
from jenkinshue.exceptions import (
    HueTransportError,
    InvalidArgumentError,
    JenkinsHueConfigError,
    JenkinsTransportError,
    MissingStateError,
)
from jenkinshue.models.build import BuildColor
from jenkinshue.models.light import DEFAULT_LIGHT_STATES, LightState, LightStateTable


class _FakeJenkins:
    def __init__(self, *job_colors: str, view_color: str = "blue") -> None:
        self.job_colors = list(job_colors)
        self.view_color = view_color
        self.job_calls: list[str] = []
        self.error: Exception | None = None

    async def get_job_color(self, job_name: str) -> str:
        self.job_calls.append(job_name)
        if self.error is not None:
            raise self.error
        return self.job_colors.pop(0)

    async def get_view_color(self) -> str:
        if self.error is not None:
            raise self.error
        return self.view_color


class _FakeBridge:
    def __init__(self, *, on: bool = True) -> None:
        self.on = on
        self.status: Any = None
        self.status_error: Exception | None = None
        self.push_error: Exception | None = None
        self.status_calls: list[str] = []
        self.pushes: list[tuple[str, dict[str, Any]]] = []
        self.blinks: list[str] = []

    async def get_light_status(self, light_id: str) -> Any:
        self.status_calls.append(light_id)
        if self.status_error is not None:
            raise self.status_error
        if self.status is not None:
            return self.status
        return {"name": f"Hue light {light_id}", "state": {"on": self.on, "bri": 254, "reachable": True}}

    async def set_light(self, light_id: str, encoded_state: Mapping[str, Any]) -> None:
        if self.push_error is not None:
            raise self.push_error
        self.pushes.append((light_id, dict(encoded_state)))

    async def blink(self, light_id: str) -> None:
        self.blinks.append(light_id)


def _encoding(state: LightState) -> dict[str, Any]:
    return DEFAULT_LIGHT_STATES[state].to_payload()


def _make(*job_colors: str, on: bool = True) -> tuple[LightCoordinator, _FakeJenkins, _FakeBridge]:
    jenkins = _FakeJenkins(*job_colors)
    bridge = _FakeBridge(on=on)
    return LightCoordinator(jenkins, bridge), jenkins, bridge


def test_construction_requires_both_collaborators() -> None:
    with pytest.raises(JenkinsHueConfigError, match="Jenkins"):
        LightCoordinator(None, _FakeBridge())
    with pytest.raises(JenkinsHueConfigError, match="Hue"):
        LightCoordinator(_FakeJenkins(), None)


def test_unknown_light_has_no_state() -> None:
    coordinator, _, _ = _make()
    assert coordinator.get_current_light_state(3) is None


@pytest.mark.asyncio
@pytest.mark.parametrize(("light_id", "job_name"), [(None, "nightly"), ("", "nightly"), (3, ""), (3, "   "), (3, None)])
async def test_update_for_job_rejects_missing_parameters(light_id: Any, job_name: Any) -> None:
    coordinator, jenkins, bridge = _make("blue")

    with pytest.raises(InvalidArgumentError):
        await coordinator.update_for_job(light_id, job_name)

    assert jenkins.job_calls == []
    assert bridge.status_calls == []


@pytest.mark.asyncio
async def test_update_for_job_saves_state_for_light() -> None:
    coordinator, jenkins, _ = _make("green")

    await coordinator.update_for_job(3, "jruby-dist-1_7")

    assert jenkins.job_calls == ["jruby-dist-1_7"]
    assert coordinator.get_current_light_state(3) is LightState.PASSED


@pytest.mark.asyncio
async def test_changed_state_pushes_then_blinks_once() -> None:
    coordinator, _, bridge = _make("green")

    push = await coordinator.update_for_job(3, "jruby-dist-1_7")
    assert push is not None
    await push

    assert bridge.pushes == [("3", _encoding(LightState.PASSED))]
    assert bridge.blinks == ["3"]


@pytest.mark.asyncio
async def test_unchanged_state_does_not_push_again() -> None:
    coordinator, _, bridge = _make("green", "blue")

    await coordinator.update_for_job(3, "jruby-dist-1_7")
    second = await coordinator.update_for_job(3, "jruby-dist-1_7")
    await coordinator.wait_idle()

    assert second is None
    assert len(bridge.pushes) == 1
    assert bridge.blinks == ["3"]
    assert coordinator.get_current_light_state(3) is LightState.PASSED


@pytest.mark.asyncio
async def test_light_found_off_is_reasserted_with_same_state() -> None:
    coordinator, _, bridge = _make()
    await coordinator.apply(3, LightState.PASSED)
    await coordinator.wait_idle()

    bridge.on = False
    push = await coordinator.apply(3, LightState.PASSED)
    await coordinator.wait_idle()

    assert push is not None
    assert bridge.pushes == [("3", _encoding(LightState.PASSED))] * 2
    assert bridge.blinks == ["3", "3"]
    assert coordinator.get_current_light_state(3) is LightState.PASSED


@pytest.mark.asyncio
async def test_cache_is_written_before_push_completes() -> None:
    gate = asyncio.Event()

    class _SlowBridge(_FakeBridge):
        async def set_light(self, light_id: str, encoded_state: Mapping[str, Any]) -> None:
            await gate.wait()
            await super().set_light(light_id, encoded_state)

    bridge = _SlowBridge()
    coordinator = LightCoordinator(_FakeJenkins(), bridge)

    push = await coordinator.apply(3, LightState.FAILED)

    assert push is not None and not push.done()
    assert coordinator.get_current_light_state(3) is LightState.FAILED
    assert bridge.pushes == []
    assert bridge.blinks == []

    gate.set()
    await push
    assert bridge.pushes == [("3", _encoding(LightState.FAILED))]
    assert bridge.blinks == ["3"]


@pytest.mark.asyncio
async def test_failed_push_skips_blink_and_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    coordinator, _, bridge = _make()
    bridge.push_error = HueTransportError("bridge unreachable")

    with caplog.at_level(logging.WARNING, logger="jenkinshue.coordinator"):
        push = await coordinator.apply(3, LightState.PASSED)
        assert push is not None
        with pytest.raises(HueTransportError):
            await push

    assert bridge.blinks == []
    # The desired state stays recorded even though the bridge never got it.
    assert coordinator.get_current_light_state(3) is LightState.PASSED
    assert "Pushing state to light 3 failed" in caplog.text


@pytest.mark.asyncio
async def test_status_query_failure_aborts_without_touching_cache() -> None:
    coordinator, _, bridge = _make()
    bridge.status_error = HueTransportError("timeout")

    with pytest.raises(HueTransportError):
        await coordinator.apply(3, LightState.PASSED)

    assert coordinator.get_current_light_state(3) is None
    assert bridge.pushes == []


@pytest.mark.asyncio
async def test_jenkins_failure_propagates_unchanged() -> None:
    coordinator, jenkins, bridge = _make()
    error = JenkinsTransportError("HTTP 404", status_code=404)
    jenkins.error = error

    with pytest.raises(JenkinsTransportError) as exc_info:
        await coordinator.update_for_job(3, "missing-job")

    assert exc_info.value is error
    assert bridge.status_calls == []


@pytest.mark.asyncio
async def test_update_for_view_returns_push_like_job_path() -> None:
    coordinator, jenkins, bridge = _make()
    jenkins.view_color = BuildColor.RED

    push = await coordinator.update_for_view(1)
    assert push is not None
    await push

    assert coordinator.get_current_light_state(1) is LightState.FAILED
    assert bridge.pushes == [("1", _encoding(LightState.FAILED))]
    assert await coordinator.update_for_view(1) is None


@pytest.mark.asyncio
async def test_switch_off_pushes_off_once_without_status_query() -> None:
    coordinator, _, bridge = _make()
    assert coordinator.get_current_light_state(3) is not LightState.OFF

    await coordinator.switch_off(3)
    assert coordinator.get_current_light_state(3) is LightState.OFF
    await coordinator.switch_off(3)
    await coordinator.wait_idle()

    assert bridge.status_calls == []
    assert bridge.pushes == [("3", {"on": False})]
    assert bridge.blinks == ["3"]


@pytest.mark.asyncio
async def test_blink_light_does_not_touch_cache() -> None:
    coordinator, _, bridge = _make()

    await coordinator.blink_light(5)

    assert bridge.blinks == ["5"]
    assert coordinator.get_current_light_state(5) is None


@pytest.mark.asyncio
async def test_is_light_on_reports_power_state() -> None:
    coordinator, _, bridge = _make(on=True)
    assert await coordinator.is_light_on(1) is True

    bridge.on = False
    assert await coordinator.is_light_on(2) is False


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [{"name": "Hue light 2"}, {"state": {}}, {"state": None}, None, []])
async def test_is_light_on_without_state_raises_missing_state(status: Any) -> None:
    coordinator, _, bridge = _make()
    bridge.status = status if status is not None else {}

    with pytest.raises(MissingStateError) as exc_info:
        await coordinator.is_light_on(2)

    assert exc_info.value.light_id == "2"


@pytest.mark.asyncio
async def test_overridden_encoding_is_pushed() -> None:
    table = LightStateTable.with_overrides({"PASSED": {"on": True, "hue": 30000, "bri": 120}})
    bridge = _FakeBridge()
    coordinator = LightCoordinator(_FakeJenkins("blue"), bridge, light_states=table)

    await coordinator.update_for_job(4, "nightly")
    await coordinator.wait_idle()

    assert bridge.pushes == [("4", {"on": True, "hue": 30000, "bri": 120})]


@pytest.mark.asyncio
async def test_concurrent_updates_for_one_light_are_ordered() -> None:
    coordinator, _, bridge = _make()

    await asyncio.gather(
        coordinator.apply(3, LightState.PASSED),
        coordinator.apply(3, LightState.FAILED),
    )
    await coordinator.wait_idle()

    assert [encoded for _, encoded in bridge.pushes] == [
        _encoding(LightState.PASSED),
        _encoding(LightState.FAILED),
    ]
    assert coordinator.get_current_light_state(3) is LightState.FAILED


@pytest.mark.asyncio
async def test_lights_are_tracked_independently() -> None:
    coordinator, _, bridge = _make()

    await coordinator.apply(1, LightState.PASSED)
    await coordinator.apply("2", LightState.INSTABLE)
    await coordinator.apply("1", LightState.PASSED)
    await coordinator.wait_idle()

    assert coordinator.get_current_light_state("1") is LightState.PASSED
    assert coordinator.get_current_light_state(2) is LightState.INSTABLE
    assert sorted(light for light, _ in bridge.pushes) == ["1", "2"]
