"""jenkinshue - Show Jenkins build states on Philips Hue lights."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("jenkinshue")
except PackageNotFoundError:
    __version__ = "0+local"
from jenkinshue.classifier import classify
from jenkinshue.client import JenkinsHue
from jenkinshue.config import HueConfig, JenkinsConfig, JenkinsHueConfig
from jenkinshue.coordinator import CIStatusProvider, LightCoordinator, LightDevice
from jenkinshue.exceptions import (
    HueApiError,
    HueTransportError,
    InvalidArgumentError,
    JenkinsHueConfigError,
    JenkinsHueError,
    JenkinsTransportError,
    MissingStateError,
    NotInitializedError,
    UpstreamError,
)
from jenkinshue.hue import HueBridge
from jenkinshue.jenkins import JenkinsClient
from jenkinshue.models import BuildColor, HueLightState, LightState, LightStateTable

__all__ = [
    "__version__",
    "BuildColor",
    "CIStatusProvider",
    "HueApiError",
    "HueBridge",
    "HueConfig",
    "HueLightState",
    "HueTransportError",
    "InvalidArgumentError",
    "JenkinsClient",
    "JenkinsConfig",
    "JenkinsHue",
    "JenkinsHueConfig",
    "JenkinsHueConfigError",
    "JenkinsHueError",
    "JenkinsTransportError",
    "LightCoordinator",
    "LightDevice",
    "LightState",
    "LightStateTable",
    "MissingStateError",
    "NotInitializedError",
    "UpstreamError",
    "classify",
]
