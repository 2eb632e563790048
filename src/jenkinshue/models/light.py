"""Light states, their Hue encodings and the light status response."""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from jenkinshue.exceptions import JenkinsHueConfigError
from jenkinshue.models._base import JenkinsHueBaseModel

_logger = logging.getLogger(__name__)


class LightState(enum.StrEnum):
    """Symbolic indicator state, independent of any device encoding.

    ``OFF`` means "explicitly deactivated"; a light that was never set
    has no state at all (``None`` in the cache).
    """

    PASSED = "PASSED"
    FAILED = "FAILED"
    INSTABLE = "INSTABLE"
    DISABLED = "DISABLED"
    OFF = "OFF"


class HueLightState(BaseModel):
    """Body of a Hue ``PUT /lights/<id>/state`` call.

    Unset fields are left out of the request so the bridge keeps their
    current value.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    on: bool | None = None
    bri: int | None = Field(default=None, ge=1, le=254)
    hue: int | None = Field(default=None, ge=0, le=65535)
    sat: int | None = Field(default=None, ge=0, le=254)
    xy: tuple[float, float] | None = None
    ct: int | None = Field(default=None, ge=153, le=500)
    effect: str | None = None
    alert: str | None = None
    transitiontime: int | None = Field(default=None, ge=0)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


DEFAULT_LIGHT_STATES: Mapping[LightState, HueLightState] = {
    LightState.PASSED: HueLightState(on=True, hue=25500, bri=254, sat=254),
    LightState.FAILED: HueLightState(on=True, hue=0, bri=254, sat=254),
    LightState.INSTABLE: HueLightState(on=True, hue=12750, bri=254, sat=254),
    LightState.DISABLED: HueLightState(on=True, hue=46920, bri=100, sat=0),
    LightState.OFF: HueLightState(on=False),
}


class LightStateTable(Mapping[LightState, HueLightState]):
    """Read-only mapping of every :class:`LightState` to its Hue encoding."""

    def __init__(self, encodings: Mapping[LightState, HueLightState] | None = None) -> None:
        merged = dict(DEFAULT_LIGHT_STATES)
        if encodings:
            merged.update(encodings)
        self._encodings: dict[LightState, HueLightState] = merged

    @classmethod
    def with_overrides(cls, overrides: Mapping[str, Any] | None) -> LightStateTable:
        """Build a table from the defaults plus a ``hueLightStates`` block.

        Only names of known :class:`LightState` members are applied; any
        other key is ignored. An override replaces the whole encoding of
        its state.
        """
        encodings: dict[LightState, HueLightState] = {}
        for name, value in (overrides or {}).items():
            if name not in LightState.__members__:
                _logger.debug("Ignoring light state override for unknown state %r", name)
                continue
            state = LightState[name]
            try:
                encodings[state] = (
                    value if isinstance(value, HueLightState) else HueLightState.model_validate(value)
                )
            except ValidationError as exc:
                raise JenkinsHueConfigError(f"Invalid Hue encoding for light state {name}: {exc}") from exc
        return cls(encodings)

    def __getitem__(self, state: LightState) -> HueLightState:
        return self._encodings[state]

    def __iter__(self) -> Iterator[LightState]:
        return iter(self._encodings)

    def __len__(self) -> int:
        return len(self._encodings)

    def __repr__(self) -> str:
        return f"LightStateTable({self._encodings!r})"


class HuePowerState(JenkinsHueBaseModel):
    """The ``state`` object of a light status response (only ``on`` is required)."""

    on: bool
    reachable: bool | None = None


class HueLightStatus(JenkinsHueBaseModel):
    """Response of ``GET /api/<username>/lights/<id>``."""

    name: str | None = None
    state: HuePowerState
