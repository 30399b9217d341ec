"""Plugin configuration model."""

from __future__ import annotations

from re import Pattern
from typing import Any, Dict, List, Mapping, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from critical_css_plugin.core.config import settings
from critical_css_plugin.models.job import JobRequest
from critical_css_plugin.services.slug import webalize

# Filled in per job from the job URL and the aggregated build CSS.
RESERVED_EXTRACTION_KEYS = frozenset({"url", "css", "css_string", "cssString"})


def default_extraction_config() -> Dict[str, Any]:
    return {
        "width": settings.default_viewport_width,
        "height": settings.default_viewport_height,
    }


def sanitize_extraction_config(config: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``config`` without the keys injected per job."""

    return {key: value for key, value in config.items() if key not in RESERVED_EXTRACTION_KEYS}


class PluginOptions(BaseModel):
    """Options accepted by :class:`CriticalCssPlugin`.

    Field names mirror the original webpack plugin through aliases, so
    ``urls``, ``filename``, ``css_match`` and ``penthouse`` are accepted too.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    job_requests: Dict[str, Optional[str]] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("job_requests", "urls"),
        description="Ordered mapping of logical page name to URL.",
    )
    filename_template: str = Field(
        default_factory=lambda: settings.default_filename_template,
        validation_alias=AliasChoices("filename_template", "filename"),
        description="Output filename template; supports [name] and [hash].",
    )
    match_pattern: Optional[Pattern[str]] = Field(
        default=None,
        validation_alias=AliasChoices("match_pattern", "css_match", "cssMatch"),
        description="Only stylesheet assets whose name matches are aggregated.",
    )
    extraction_config: Dict[str, Any] = Field(
        default_factory=default_extraction_config,
        validation_alias=AliasChoices("extraction_config", "penthouse"),
        description="Passed through to the extractor for every job.",
    )

    @field_validator("job_requests", mode="before")
    @classmethod
    def _none_means_no_jobs(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("match_pattern", mode="before")
    @classmethod
    def _false_means_no_pattern(cls, value: Any) -> Any:
        if value is False or value == "":
            return None
        return value

    @field_validator("extraction_config", mode="before")
    @classmethod
    def _merge_extraction_defaults(cls, value: Any) -> Any:
        if value is None:
            return default_extraction_config()
        if not isinstance(value, Mapping):
            return value
        return {**default_extraction_config(), **sanitize_extraction_config(dict(value))}

    @model_validator(mode="after")
    def _unique_output_names(self) -> "PluginOptions":
        seen: Dict[str, str] = {}
        for name in self.job_requests:
            slug = webalize(name)
            if slug in seen:
                raise ValueError(
                    f"Pages {seen[slug]!r} and {name!r} both resolve to the output name {slug!r}"
                )
            seen[slug] = name
        return self

    @property
    def jobs(self) -> List[JobRequest]:
        """Configured jobs in declaration order; missing URLs become empty strings."""

        return [JobRequest(name=name, url=url or "") for name, url in self.job_requests.items()]
