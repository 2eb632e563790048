"""Translate Jenkins build colors into light states."""

from __future__ import annotations

from jenkinshue.models.build import BuildColor
from jenkinshue.models.light import LightState

_COLOR_TO_LIGHT_STATE: dict[BuildColor, LightState] = {
    BuildColor.GREEN: LightState.PASSED,
    BuildColor.GREEN_ANIME: LightState.PASSED,
    BuildColor.BLUE: LightState.PASSED,
    BuildColor.BLUE_ANIME: LightState.PASSED,
    BuildColor.RED: LightState.FAILED,
    BuildColor.RED_ANIME: LightState.FAILED,
    BuildColor.YELLOW: LightState.INSTABLE,
    BuildColor.YELLOW_ANIME: LightState.INSTABLE,
}

#: Disabled, aborted, grey, not built and unrecognized colors.
DEFAULT_LIGHT_STATE = LightState.DISABLED


def classify(color: BuildColor | str | None) -> LightState:
    """Return the light state for a build color.

    Total over its input: any color outside the passing, failing and
    unstable families, including tokens Jenkins may add in the future,
    maps to :data:`DEFAULT_LIGHT_STATE`.
    """
    if color is None:
        return DEFAULT_LIGHT_STATE
    build_color = color if isinstance(color, BuildColor) else BuildColor(str(color))
    return _COLOR_TO_LIGHT_STATE.get(build_color, DEFAULT_LIGHT_STATE)
