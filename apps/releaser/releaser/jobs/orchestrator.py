"""Matrix Orchestrator.

Fans one Platform Job out per platform and runs them concurrently, one
asyncio task each. Jobs share nothing mutable: each has its own
workspace and artifact, and each writes a distinct asset name to the
release, so no locking is needed.

Each task hands back a JobReport. The orchestrator finishes when every
job is terminal; it does not fold the reports into a single verdict.
"""

import asyncio
from typing import Awaitable, Callable, Iterable, Optional

import structlog

from releaser.core.config import Credential, Settings
from releaser.core.logging import bind_platform
from releaser.jobs.runner import create_job, run_platform_job
from releaser.jobs.types import JobReport, JobState, PlatformJob
from releaser.platforms.table import all_platforms, get_profile
from releaser.platforms.types import Platform
from releaser.publish.release import Release

logger = structlog.get_logger(__name__)

JobRunner = Callable[[PlatformJob, Release, Credential, Settings], Awaitable[JobReport]]


async def run_matrix(
    release: Release,
    binary: str,
    settings: Settings,
    credential: Credential,
    platforms: Optional[Iterable[Platform]] = None,
    job_runner: JobRunner = run_platform_job,
) -> list[JobReport]:
    """Run one job per platform in parallel and collect their reports.

    Reports come back in platform order regardless of finishing order.
    """
    selected = list(platforms) if platforms else all_platforms()

    logger.info(
        "matrix.started",
        release_id=release.id,
        tag=release.tag_name,
        platforms=[platform.value for platform in selected],
    )

    reports = await asyncio.gather(
        *(
            run_isolated_job(platform, binary, release, credential, settings, job_runner)
            for platform in selected
        )
    )

    logger.info(
        "matrix.finished",
        release_id=release.id,
        succeeded=[r.platform.value for r in reports if r.is_success],
        failed=[r.platform.value for r in reports if not r.is_success],
    )
    return list(reports)


async def run_isolated_job(
    platform: Platform,
    binary: str,
    release: Release,
    credential: Credential,
    settings: Settings,
    job_runner: JobRunner = run_platform_job,
) -> JobReport:
    """Create and run one job, turning anything that escapes into a failed report.

    The workspace is prepared here, inside the job's own task, so a
    platform whose workspace cannot be created fails alone.

    gather() wraps each coroutine in its own task, so the platform bound
    here stays local to this job.
    """
    bind_platform(platform.value)
    try:
        job = create_job(platform, binary, settings)
    except OSError as exc:
        logger.exception("job.not_started", error_type=exc.__class__.__name__)
        return JobReport.not_started(platform, get_profile(platform).asset_name(binary), exc)

    try:
        return await job_runner(job, release, credential, settings)
    except Exception as exc:
        logger.exception("job.crashed", error_type=exc.__class__.__name__)
        if not job.is_terminal:
            job.advance(JobState.FAILED)
        return JobReport.failed(job, exc)
