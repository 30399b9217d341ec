"""Per-page extraction job models."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class JobStatus(str, Enum):
    """Possible states of a single extraction job within one build."""

    queued = "queued"
    processing = "processing"
    completed = "completed"
    skipped = "skipped"
    failed = "failed"


class JobRequest(BaseModel):
    """One configured page: logical name plus the URL to extract from."""

    name: str
    url: str

    @property
    def is_complete(self) -> bool:
        return bool(self.name) and bool(self.url)


class ExtractionJob(BaseModel):
    """State of an extraction job during a build."""

    name: str
    url: str
    status: JobStatus = JobStatus.queued
    output_path: Optional[str] = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)
    error: Optional[str] = None

    def with_status(self, status: JobStatus) -> "ExtractionJob":
        """Return a copy with an updated status."""

        return self.model_copy(update={"status": status, "updated_at": _now()})

    def with_output(self, output_path: str) -> "ExtractionJob":
        """Return a copy marked completed with the written output path."""

        return self.model_copy(
            update={"output_path": output_path, "status": JobStatus.completed, "updated_at": _now()}
        )

    def with_error(self, message: str) -> "ExtractionJob":
        """Return a copy with an error message and failed status."""

        return self.model_copy(
            update={
                "error": message,
                "status": JobStatus.failed,
                "updated_at": _now(),
            }
        )
