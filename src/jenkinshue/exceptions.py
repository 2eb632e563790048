"""Custom exception hierarchy for jenkinshue."""

from __future__ import annotations


class JenkinsHueError(Exception):
    """Base exception for all jenkinshue errors."""


class JenkinsHueConfigError(JenkinsHueError):
    """Invalid or missing configuration."""


class NotInitializedError(JenkinsHueError):
    """Operation invoked before the collaborators were set up."""


class InvalidArgumentError(JenkinsHueError, ValueError):
    """Missing or empty light id / job name."""


class MissingStateError(JenkinsHueError):
    """Light status response lacks a recognizable ``state.on`` field."""

    def __init__(self, message: str, *, light_id: str = "") -> None:
        self.light_id = light_id
        super().__init__(message)


class UpstreamError(JenkinsHueError):
    """Failure reported by the Jenkins server or the Hue bridge."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class JenkinsTransportError(UpstreamError):
    """HTTP-level failure talking to Jenkins (network, non-2xx, invalid JSON)."""


class HueTransportError(UpstreamError):
    """HTTP-level failure talking to the Hue bridge."""


class HueApiError(UpstreamError):
    """Hue bridge answered with an error object.

    The bridge reports application errors with HTTP 200 and a body like
    ``[{"error": {"type": 3, "address": "/lights/9", "description": "..."}}]``.
    """

    def __init__(
        self,
        message: str,
        *,
        error_type: int | None = None,
        address: str = "",
        url: str = "",
    ) -> None:
        self.error_type = error_type
        self.address = address
        super().__init__(message, url=url)
