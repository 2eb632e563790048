"""Jenkins build status models."""

from __future__ import annotations

from pydantic import Field, field_validator

from jenkinshue.models._base import JenkinsHueBaseModel, TokenEnum


class BuildColor(TokenEnum):
    """Ball color Jenkins reports for a job.

    ``_anime`` variants mean a build is currently running on top of the
    last result.
    """

    BLUE = "blue"
    BLUE_ANIME = "blue_anime"
    GREEN = "green"
    GREEN_ANIME = "green_anime"
    RED = "red"
    RED_ANIME = "red_anime"
    YELLOW = "yellow"
    YELLOW_ANIME = "yellow_anime"
    GREY = "grey"
    GREY_ANIME = "grey_anime"
    DISABLED = "disabled"
    DISABLED_ANIME = "disabled_anime"
    ABORTED = "aborted"
    ABORTED_ANIME = "aborted_anime"
    NOTBUILT = "notbuilt"
    NOTBUILT_ANIME = "notbuilt_anime"
    UNKNOWN = "unknown"

    @property
    def is_failing(self) -> bool:
        return self in (BuildColor.RED, BuildColor.RED_ANIME)


class JenkinsJob(JenkinsHueBaseModel):
    """Subset of ``/job/<name>/api/json`` used here."""

    name: str = ""
    color: BuildColor = BuildColor.UNKNOWN

    @field_validator("color", mode="before")
    @classmethod
    def _coerce_color(cls, value: object) -> BuildColor:
        return BuildColor(value) if isinstance(value, str) else BuildColor.UNKNOWN


class JenkinsView(JenkinsHueBaseModel):
    """Job list of a view (or of the server root)."""

    jobs: list[JenkinsJob] = Field(default_factory=list)
