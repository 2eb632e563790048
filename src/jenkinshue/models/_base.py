"""Base model and enum for Jenkins and Hue payloads.

Every response model inherits from :class:`JenkinsHueBaseModel` which
provides:

* frozen instances that ignore unknown keys,
* ``populate_by_name`` so camelCase API keys and snake_case names both work,
* a ``raw`` dict that captures the original payload.

Token enums inherit from :class:`TokenEnum` which resolves any value
without a mapped member to ``UNKNOWN`` instead of raising ``ValueError``.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TokenEnum(enum.StrEnum):
    """Base for string token enums.

    Every subclass **must** define ``UNKNOWN``. Tokens the server sends
    that have no mapped member resolve to ``UNKNOWN``; lookups are
    case-insensitive and ignore surrounding whitespace.
    """

    @classmethod
    def _missing_(cls, value: object) -> TokenEnum:
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        # pylint: disable=no-member
        unknown: TokenEnum = cls.UNKNOWN  # type: ignore[attr-defined]
        return unknown


class JenkinsHueBaseModel(BaseModel):
    """Base for Jenkins and Hue response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        """Keep the original payload unless ``raw`` was passed explicitly."""
        if not isinstance(values, dict):
            return values
        if "raw" in values:
            return values
        return {**values, "raw": dict(values)}
