"""Data models for Jenkins and Hue payloads."""

from jenkinshue.models._base import JenkinsHueBaseModel, TokenEnum
from jenkinshue.models.build import BuildColor, JenkinsJob, JenkinsView
from jenkinshue.models.light import (
    DEFAULT_LIGHT_STATES,
    HueLightState,
    HueLightStatus,
    HuePowerState,
    LightState,
    LightStateTable,
)

__all__ = [
    "DEFAULT_LIGHT_STATES",
    "BuildColor",
    "HueLightState",
    "HueLightStatus",
    "HuePowerState",
    "JenkinsHueBaseModel",
    "JenkinsJob",
    "JenkinsView",
    "LightState",
    "LightStateTable",
    "TokenEnum",
]
