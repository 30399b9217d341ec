"""Build-scoped registry of extraction jobs."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Dict, Optional

from critical_css_plugin.models.job import ExtractionJob, JobStatus


class JobLedger:
    """Tracks every job of one build. Jobs run on a single event loop, so no locking."""

    def __init__(self) -> None:
        self._jobs: Dict[str, ExtractionJob] = {}

    def create_job(self, name: str, url: str) -> ExtractionJob:
        """Register a job in queued state."""

        job = ExtractionJob(name=name, url=url)
        self._jobs[name] = job
        return job

    def get_job(self, name: str) -> Optional[ExtractionJob]:
        return self._jobs.get(name)

    def all_jobs(self) -> Mapping[str, ExtractionJob]:
        return dict(self._jobs)

    def with_status(self, status: JobStatus) -> list[ExtractionJob]:
        return [job for job in self._jobs.values() if job.status is status]

    def _update(self, name: str, job: ExtractionJob) -> ExtractionJob:
        if name not in self._jobs:
            raise KeyError(f"Job {name} not found")
        self._jobs[name] = job
        return job

    def _require(self, name: str) -> ExtractionJob:
        job = self._jobs.get(name)
        if job is None:
            raise KeyError(f"Job {name} not found")
        return job

    def mark_processing(self, name: str) -> ExtractionJob:
        """Mark job as in-flight."""

        return self._update(name, self._require(name).with_status(JobStatus.processing))

    def mark_skipped(self, name: str) -> ExtractionJob:
        """Mark job as skipped because its name or URL is missing."""

        return self._update(name, self._require(name).with_status(JobStatus.skipped))

    def mark_completed(self, name: str, output_path: str) -> ExtractionJob:
        """Mark job as completed with the file it wrote."""

        return self._update(name, self._require(name).with_output(output_path))

    def mark_failed(self, name: str, message: str) -> ExtractionJob:
        """Mark job as failed."""

        return self._update(name, self._require(name).with_error(message))
