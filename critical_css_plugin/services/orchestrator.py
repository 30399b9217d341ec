"""Concurrent per-page critical CSS extraction."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Dict, List, Mapping, Optional, Protocol

from critical_css_plugin.core.logging import get_logger
from critical_css_plugin.models.job import JobRequest
from critical_css_plugin.services.job_ledger import JobLedger
from critical_css_plugin.services.namer import resolve_output_filename
from critical_css_plugin.services.output_files import write_text_atomic

logger = get_logger(__name__)


class Extractor(Protocol):
    """Computes critical CSS for ``options["url"]`` from ``options["css_string"]``."""

    def __call__(self, options: Dict[str, Any]) -> Awaitable[str]: ...


class ExtractionError(RuntimeError):
    """The extractor failed for one page."""

    def __init__(self, job_name: str, url: str, message: str) -> None:
        super().__init__(f"Critical CSS extraction failed for {job_name!r} ({url}): {message}")
        self.job_name = job_name
        self.url = url


async def extract_one(
    job: JobRequest,
    css_source: str,
    extract: Extractor,
    *,
    filename_template: str,
    build_hash: str,
    output_path: str,
    extraction_config: Mapping[str, Any],
    ledger: JobLedger,
) -> Optional[str]:
    """Run a single job and return the filename it wrote, or None if skipped."""

    ledger.create_job(job.name, job.url)
    if not job.is_complete:
        ledger.mark_skipped(job.name)
        logger.debug("critical_css_job_skipped", job=job.name, url=job.url)
        return None

    ledger.mark_processing(job.name)
    logger.info("critical_css_job_started", job=job.name, url=job.url)
    try:
        critical_css = await extract({**extraction_config, "url": job.url, "css_string": css_source})
    except Exception as exc:
        ledger.mark_failed(job.name, str(exc))
        logger.exception("critical_css_job_failed", job=job.name, url=job.url, error=str(exc))
        raise ExtractionError(job.name, job.url, str(exc)) from exc

    filename = resolve_output_filename(job.name, filename_template, build_hash)
    write_text_atomic(Path(output_path) / filename, critical_css)
    ledger.mark_completed(job.name, filename)
    logger.info("critical_css_job_completed", job=job.name, path=filename)
    return filename


async def run_extraction(
    jobs: List[JobRequest],
    css_source: Optional[str],
    extract: Extractor,
    *,
    filename_template: str,
    build_hash: str,
    output_path: str,
    extraction_config: Mapping[str, Any],
    ledger: JobLedger,
) -> List[ExtractionError]:
    """Extract every page concurrently and report the build-level error, if any.

    All jobs are started before any is awaited and every outcome is collected.
    Only the first failure (in job order) is returned; the rest are logged and
    kept on the ledger. Filesystem errors are not caught.
    """

    if not css_source:
        return []

    tasks = [
        asyncio.create_task(
            extract_one(
                job,
                css_source,
                extract,
                filename_template=filename_template,
                build_hash=build_hash,
                output_path=output_path,
                extraction_config=extraction_config,
                ledger=ledger,
            ),
            name=f"critical-css:{job.name}",
        )
        for job in jobs
    ]
    outcomes = await asyncio.gather(*tasks, return_exceptions=True)

    failures: List[ExtractionError] = []
    for outcome in outcomes:
        if isinstance(outcome, ExtractionError):
            failures.append(outcome)
        elif isinstance(outcome, BaseException):
            raise outcome

    if len(failures) > 1:
        logger.warning(
            "critical_css_additional_failures",
            reported=failures[0].job_name,
            suppressed=[failure.job_name for failure in failures[1:]],
        )
    return failures[:1]
