from __future__ import annotations

from typing import Any

import pytest

from jenkinshue import cli
from jenkinshue.exceptions import JenkinsHueConfigError
from jenkinshue.models.light import LightState


class _FakeJenkinsHue:
    instances: list[_FakeJenkinsHue] = []

    def __init__(self, config: Any) -> None:
        self.config = config
        self.calls: list[tuple[str, Any]] = []
        _FakeJenkinsHue.instances.append(self)

    async def __aenter__(self) -> _FakeJenkinsHue:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None

    async def update_for_job(self, light_id: str, job_name: str) -> None:
        self.calls.append(("job", (light_id, job_name)))

    async def update_for_view(self, light_id: str) -> None:
        self.calls.append(("view", light_id))

    async def switch_off(self, light_id: str) -> None:
        self.calls.append(("off", light_id))

    async def blink_light(self, light_id: str) -> None:
        self.calls.append(("blink", light_id))

    async def is_light_on(self, light_id: str) -> bool:
        self.calls.append(("status", light_id))
        return True

    def get_current_light_state(self, light_id: str) -> LightState:
        return LightState.PASSED


@pytest.fixture
def fake_client(monkeypatch: pytest.MonkeyPatch) -> type[_FakeJenkinsHue]:
    _FakeJenkinsHue.instances = []
    monkeypatch.setattr(cli, "JenkinsHue", _FakeJenkinsHue)
    monkeypatch.delenv("JENKINS_HOST", raising=False)
    monkeypatch.delenv("HUE_HOST", raising=False)
    return _FakeJenkinsHue


@pytest.mark.parametrize(
    ("argv", "expected"),
    [
        (["job", "3", "nightly"], ("job", ("3", "nightly"))),
        (["view", "1"], ("view", "1")),
        (["off", "2"], ("off", "2")),
        (["blink", "2"], ("blink", "2")),
    ],
)
def test_commands_dispatch(fake_client: type[_FakeJenkinsHue], argv: list[str], expected: tuple[str, Any]) -> None:
    assert cli.main(argv) == 0
    assert fake_client.instances[0].calls == [expected]


def test_status_prints_power_state(fake_client: type[_FakeJenkinsHue], capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main(["status", "4"]) == 0
    assert "light 4: on" in capsys.readouterr().out


def test_config_errors_exit_non_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    def _broken(_path: str | None) -> None:
        raise JenkinsHueConfigError("No configuration for Jenkins CI server found.")

    monkeypatch.setattr(cli, "load_config", _broken)
    assert cli.main(["view", "1"]) == 1


def test_parser_requires_command() -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_interval_is_a_global_option() -> None:
    args = cli.build_parser().parse_args(["--config", "c.json", "--interval", "30", "job", "3", "nightly"])
    assert args.config == "c.json"
    assert args.interval == 30.0


def test_interval_before_view_command() -> None:
    args = cli.build_parser().parse_args(["--interval", "60", "view", "1"])
    assert (args.command, args.light, args.interval) == ("view", "1", 60.0)
    assert cli.build_parser().parse_args(["view", "1"]).interval is None


def test_bad_timeout_in_environment_exits_non_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JENKINS_HOST", "http://ci.jruby.org")
    monkeypatch.setenv("HUE_HOST", "192.168.178.210")
    monkeypatch.setenv("HUE_USERNAME", "newdeveloper")
    monkeypatch.setenv("JENKINSHUE_REQUEST_TIMEOUT", "ten")
    assert cli.main(["view", "1"]) == 1
