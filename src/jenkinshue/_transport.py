"""HTTP transport for the Jenkins and Hue JSON APIs."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from jenkinshue._constants import USER_AGENT
from jenkinshue._redact import redact_for_log, redact_url
from jenkinshue.exceptions import UpstreamError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`JsonTransport`) concrete.
    """

    async def get_json(self, url: str, *, params: Mapping[str, str] | None = None) -> Any:
        ...

    async def put_json(self, url: str, body: Mapping[str, Any]) -> Any:
        ...


class JsonTransport:
    """aiohttp-backed transport that decodes JSON and maps failures.

    Every failure (network, non-2xx status, undecodable body) is raised as
    *error_cls*, so callers can tell Jenkins and Hue failures apart.
    """

    def __init__(
        self,
        http_session: aiohttp.ClientSession,
        *,
        error_cls: type[UpstreamError] = UpstreamError,
        auth: aiohttp.BasicAuth | None = None,
        verify_ssl: bool = True,
        timeout: float | None = None,
    ) -> None:
        self._http = http_session
        self._error_cls = error_cls
        self._auth = auth
        self._ssl: bool | None = None if verify_ssl else False
        self._timeout = aiohttp.ClientTimeout(total=timeout) if timeout else None

    async def get_json(self, url: str, *, params: Mapping[str, str] | None = None) -> Any:
        return await self._request("GET", url, params=params)

    async def put_json(self, url: str, body: Mapping[str, Any]) -> Any:
        return await self._request("PUT", url, body=body)

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> Any:
        safe_url = redact_url(url)
        headers = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        kwargs: dict[str, Any] = {"headers": headers}
        if params:
            kwargs["params"] = dict(params)
        if body is not None:
            kwargs["data"] = json.dumps(body, separators=(",", ":"))
            headers["content-type"] = "application/json"
        if self._auth is not None:
            kwargs["auth"] = self._auth
        if self._ssl is not None:
            kwargs["ssl"] = self._ssl
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        _logger.debug("%s %s body=%s", method, safe_url, redact_for_log(body))

        try:
            async with self._http.request(method, url, **kwargs) as resp:
                text = await resp.text()
                if resp.status < 200 or resp.status >= 300:
                    raise self._error_cls(
                        f"HTTP {resp.status} from {safe_url}: {text[:200]}",
                        status_code=resp.status,
                        url=safe_url,
                    )
        except UpstreamError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise self._error_cls(
                f"Request to {safe_url} failed: {exc!r}",
                url=safe_url,
            ) from exc

        try:
            result = json.loads(text)
        except json.JSONDecodeError as exc:
            raise self._error_cls(
                f"Invalid JSON from {safe_url}: {text[:200]}",
                status_code=resp.status,
                url=safe_url,
            ) from exc

        _logger.debug("%s %s -> %s", method, safe_url, redact_for_log(result, max_string=128))
        return result
