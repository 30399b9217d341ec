"""Per-build state threaded through the lifecycle phases."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from critical_css_plugin.services.job_ledger import JobLedger


class SkipReason(str, Enum):
    """Why extraction was not attempted for a build."""

    no_job_requests = "no_job_requests"
    no_stylesheets = "no_stylesheets"


class BuildContext(BaseModel):
    """Everything one build cycle learns between phases.

    A fresh context is created in the graph-construction phase and discarded
    after the post-emit phase, so two builds never share state.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    reserved_files: List[str] = Field(default_factory=list)
    css_source: Optional[str] = None
    skipped: Optional[SkipReason] = None
    ledger: JobLedger = Field(default_factory=JobLedger)

    @property
    def should_extract(self) -> bool:
        return self.skipped is None and bool(self.css_source)
