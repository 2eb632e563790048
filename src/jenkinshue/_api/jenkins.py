"""Jenkins remote access API endpoints.

Endpoints:
  - /job/<name>/api/json
  - /view/<name>/api/json (or /api/json for the server root)
"""

from __future__ import annotations

import logging
from urllib.parse import quote

from jenkinshue._constants import JOB_PATH, JOB_TREE, ROOT_PATH, VIEW_PATH, VIEW_TREE
from jenkinshue._transport import Transport
from jenkinshue.config import JenkinsConfig
from jenkinshue.exceptions import JenkinsTransportError
from jenkinshue.models.build import BuildColor, JenkinsJob, JenkinsView

_logger = logging.getLogger(__name__)


def _job_path(job_name: str) -> str:
    # Jobs inside folders are addressed as "folder/job" -> /job/folder/job/job.
    segments = [quote(part, safe="") for part in job_name.strip("/").split("/") if part]
    return JOB_PATH.format(job="/job/".join(segments))


async def fetch_job(config: JenkinsConfig, transport: Transport, job_name: str) -> JenkinsJob:
    """Fetch name and color of a single job."""
    url = f"{config.base_url}{_job_path(job_name)}"
    decoded = await transport.get_json(url, params={"tree": JOB_TREE})
    if not isinstance(decoded, dict):
        raise JenkinsTransportError(f"Unexpected job payload for {job_name!r}", url=url)
    return JenkinsJob.model_validate(decoded)


async def fetch_view(config: JenkinsConfig, transport: Transport) -> JenkinsView:
    """Fetch the job list of the configured view, or of the server root."""
    path = VIEW_PATH.format(view=quote(config.view, safe="")) if config.view else ROOT_PATH
    url = f"{config.base_url}{path}"
    decoded = await transport.get_json(url, params={"tree": VIEW_TREE})
    if not isinstance(decoded, dict):
        raise JenkinsTransportError("Unexpected view payload", url=url)
    view = JenkinsView.model_validate(decoded)
    _logger.debug("View %s lists %d jobs", config.view or "<root>", len(view.jobs))
    return view


def aggregate_view_color(view: JenkinsView) -> BuildColor:
    """Red when any job is failing, green otherwise.

    An empty view has nothing to report and yields ``notbuilt``.
    """
    if not view.jobs:
        return BuildColor.NOTBUILT
    if any(job.color.is_failing for job in view.jobs):
        return BuildColor.RED
    return BuildColor.GREEN
