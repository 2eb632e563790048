"""Client configuration for jenkinshue."""

from __future__ import annotations

import dataclasses
import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jenkinshue._constants import DEFAULT_REQUEST_TIMEOUT
from jenkinshue.exceptions import JenkinsHueConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _require_str(block: Mapping[str, Any], key: str, section: str) -> str:
    value = block.get(key)
    if not isinstance(value, str) or not value.strip():
        raise JenkinsHueConfigError(f"'{section}.{key}' must be a non-empty string")
    return value.strip()


@dataclasses.dataclass(frozen=True)
class JenkinsConfig:
    """Jenkins server connection settings.

    Parameters
    ----------
    host : str
        Base URL of the Jenkins server, e.g. ``"https://ci.example.org"``.
    strict_ssl : bool
        Verify the server certificate. Set to ``False`` for self-signed
        certificates.
    view : str or None
        View aggregated by :meth:`JenkinsClient.get_view_color`. ``None``
        aggregates over all jobs of the server root.
    user : str or None
        User name for HTTP basic auth.
    api_token : str or None
        API token (or password) for HTTP basic auth.
    """

    host: str
    strict_ssl: bool = True
    view: str | None = None
    user: str | None = None
    api_token: str | None = None

    @property
    def base_url(self) -> str:
        return self.host.rstrip("/")


@dataclasses.dataclass(frozen=True)
class HueConfig:
    """Hue bridge connection settings.

    Parameters
    ----------
    host : str
        Bridge IP address or host name. ``http://`` is assumed when no
        scheme is given.
    username : str
        Whitelisted bridge username (the v1 API key).
    """

    host: str
    username: str

    @property
    def base_url(self) -> str:
        host = self.host.rstrip("/")
        if "://" not in host:
            host = f"http://{host}"
        return host


@dataclasses.dataclass(frozen=True)
class JenkinsHueConfig:
    """Top-level configuration.

    ``jenkins`` and ``hue`` are optional here so that a partially filled
    configuration can be loaded and inspected; :class:`jenkinshue.client.JenkinsHue`
    refuses to start without both.
    """

    jenkins: JenkinsConfig | None = None
    hue: HueConfig | None = None
    hue_light_states: Mapping[str, Any] | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> JenkinsHueConfig:
        """Build configuration from the JSON file layout.

        Expected shape::

            {
              "jenkins": {"host": "...", "strictSSL": false, "view": "...",
                          "user": "...", "apiToken": "..."},
              "hue": {"host": "...", "username": "..."},
              "hueLightStates": {"PASSED": {"on": true, "hue": 25500}}
            }
        """
        if not isinstance(data, Mapping):
            raise JenkinsHueConfigError("Configuration must be a JSON object")

        jenkins: JenkinsConfig | None = None
        jenkins_block = data.get("jenkins")
        if isinstance(jenkins_block, Mapping):
            strict_ssl = jenkins_block.get("strictSSL", True)
            jenkins = JenkinsConfig(
                host=_require_str(jenkins_block, "host", "jenkins"),
                # Only an explicit false disables verification.
                strict_ssl=strict_ssl is not False,
                view=jenkins_block.get("view") or None,
                user=jenkins_block.get("user") or None,
                api_token=jenkins_block.get("apiToken") or None,
            )

        hue: HueConfig | None = None
        hue_block = data.get("hue")
        if isinstance(hue_block, Mapping):
            hue = HueConfig(
                host=_require_str(hue_block, "host", "hue"),
                username=_require_str(hue_block, "username", "hue"),
            )

        states = data.get("hueLightStates")
        if states is not None and not isinstance(states, Mapping):
            raise JenkinsHueConfigError("'hueLightStates' must be an object")

        timeout = data.get("requestTimeout", DEFAULT_REQUEST_TIMEOUT)
        try:
            request_timeout = float(timeout)
        except (TypeError, ValueError) as exc:
            raise JenkinsHueConfigError(f"'requestTimeout' must be a number, got {timeout!r}") from exc

        return cls(
            jenkins=jenkins,
            hue=hue,
            hue_light_states=dict(states) if states else None,
            request_timeout=request_timeout,
        )

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> JenkinsHueConfig:
        """Load a JSON configuration file."""
        file_path = Path(path).expanduser()
        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise JenkinsHueConfigError(f"Cannot read configuration file {file_path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise JenkinsHueConfigError(f"Configuration file {file_path} is not valid JSON: {exc}") from exc
        return cls.from_mapping(data)

    @classmethod
    def from_env(cls, **overrides: Any) -> JenkinsHueConfig:
        """Create configuration from environment variables.

        Reads ``JENKINS_HOST``, ``JENKINS_STRICT_SSL``, ``JENKINS_VIEW``,
        ``JENKINS_USER``, ``JENKINS_API_TOKEN``, ``HUE_HOST``,
        ``HUE_USERNAME`` and ``JENKINSHUE_REQUEST_TIMEOUT``. A block is
        only created when its host variable is set. Explicit keyword
        arguments override environment values.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}

        jenkins_host = env.get("JENKINS_HOST")
        if jenkins_host:
            config_kwargs["jenkins"] = JenkinsConfig(
                host=jenkins_host,
                strict_ssl=_env_bool(env.get("JENKINS_STRICT_SSL"), True),
                view=env.get("JENKINS_VIEW") or None,
                user=env.get("JENKINS_USER") or None,
                api_token=env.get("JENKINS_API_TOKEN") or None,
            )

        hue_host = env.get("HUE_HOST")
        if hue_host:
            hue_username = (env.get("HUE_USERNAME") or "").strip()
            if not hue_username:
                raise JenkinsHueConfigError("HUE_USERNAME must be set when HUE_HOST is set")
            config_kwargs["hue"] = HueConfig(host=hue_host, username=hue_username)

        timeout_env = env.get("JENKINSHUE_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise JenkinsHueConfigError(
                    f"JENKINSHUE_REQUEST_TIMEOUT must be a number, got {timeout_env!r}"
                ) from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
