"""Jenkins status client."""

from __future__ import annotations

import logging

import aiohttp

from jenkinshue._api.jenkins import aggregate_view_color, fetch_job, fetch_view
from jenkinshue._transport import JsonTransport, Transport
from jenkinshue.config import JenkinsConfig
from jenkinshue.exceptions import JenkinsTransportError
from jenkinshue.models.build import BuildColor

_logger = logging.getLogger(__name__)


class JenkinsClient:
    """Look up job and view colors on a Jenkins server.

    Usage::

        async with aiohttp.ClientSession() as http:
            jenkins = JenkinsClient.from_session(config.jenkins, http)
            color = await jenkins.get_job_color("nightly")
    """

    def __init__(self, config: JenkinsConfig, transport: Transport) -> None:
        self._config = config
        self._transport = transport

    @classmethod
    def from_session(
        cls,
        config: JenkinsConfig,
        http_session: aiohttp.ClientSession,
        *,
        timeout: float | None = None,
    ) -> JenkinsClient:
        auth = None
        if config.user:
            auth = aiohttp.BasicAuth(config.user, config.api_token or "")
        transport = JsonTransport(
            http_session,
            error_cls=JenkinsTransportError,
            auth=auth,
            verify_ssl=config.strict_ssl,
            timeout=timeout,
        )
        return cls(config, transport)

    @property
    def config(self) -> JenkinsConfig:
        return self._config

    async def get_job_color(self, job_name: str) -> BuildColor:
        job = await fetch_job(self._config, self._transport, job_name)
        _logger.debug("Job %s color=%s", job_name, job.color)
        return job.color

    async def get_view_color(self) -> BuildColor:
        """Aggregate color of the configured view (see :func:`aggregate_view_color`)."""
        view = await fetch_view(self._config, self._transport)
        return aggregate_view_color(view)
