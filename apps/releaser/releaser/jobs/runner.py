"""Platform Job runner.

Runs bootstrap -> build -> publish for one platform, strictly in order.
Bootstrap and build are blocking subprocess work and run in a worker
thread; the upload runs on the event loop.

A JobStepError at any step moves the job to `failed` and ends it there.
Any other exception does the same and is logged with its traceback. The
error is returned in the JobReport, never raised, so a failing job cannot
disturb the jobs running next to it.
"""

import asyncio

import structlog

from releaser.bootstrap.bootstrapper import bootstrap_platform
from releaser.build.compiler import build_release
from releaser.core.config import Credential, Settings
from releaser.core.logging import bind_platform
from releaser.errors import JobStepError
from releaser.jobs.types import JobReport, JobState, PlatformJob
from releaser.platforms.table import get_profile, host_platform
from releaser.platforms.types import Platform
from releaser.publish.release import Release
from releaser.publish.uploader import upload_asset
from releaser.sandbox.workspace import prepare_workspace

logger = structlog.get_logger(__name__)


def create_job(platform: Platform, binary: str, settings: Settings) -> PlatformJob:
    """Build a pending job with its own workspace."""
    profile = get_profile(platform)
    workspace = prepare_workspace(
        profile.platform.value,
        source_dir=settings.source_dir,
        workspace_root=settings.workspace_root,
    )
    return PlatformJob(
        profile=profile,
        binary=binary,
        workspace=workspace,
        cross=profile.platform != host_platform(),
    )


async def run_platform_job(
    job: PlatformJob,
    release: Release,
    credential: Credential,
    settings: Settings,
) -> JobReport:
    """Drive one job to a terminal state and report it."""
    bind_platform(job.platform.value)
    log = logger.bind(asset_name=job.asset_name, release_id=release.id)

    try:
        job.advance(JobState.BOOTSTRAPPING)
        log.info("job.bootstrapping", cross=job.cross)
        job.steps.extend(
            await asyncio.to_thread(
                bootstrap_platform,
                job.profile,
                job.workspace,
                settings.bootstrap_timeout,
                cross=job.cross,
            )
        )

        job.advance(JobState.BUILDING)
        log.info("job.building", cross=job.cross)
        artifact, build_step = await asyncio.to_thread(
            build_release,
            job.profile,
            job.binary,
            job.workspace,
            job.cross,
            settings.build_command,
            settings.build_timeout,
        )
        job.artifact = artifact
        job.steps.append(build_step)

        job.advance(JobState.PUBLISHING)
        log.info("job.publishing", path=str(artifact.path))
        asset = await upload_asset(
            release,
            artifact,
            credential,
            timeout=settings.upload_timeout,
            platform=job.platform.value,
        )

        job.advance(JobState.SUCCEEDED)
        log.info("job.succeeded", asset_id=asset.id, size=asset.size)
        return JobReport.succeeded(job, asset)

    except JobStepError as exc:
        job.advance(JobState.FAILED)
        log.error(
            "job.failed",
            step=exc.step,
            error_type=exc.__class__.__name__,
            error=str(exc),
        )
        return JobReport.failed(job, exc)

    except Exception as exc:
        if not job.is_terminal:
            job.advance(JobState.FAILED)
        log.exception("job.crashed", error_type=exc.__class__.__name__)
        return JobReport.failed(job, exc)
