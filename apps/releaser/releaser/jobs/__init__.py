"""Platform Jobs and the Matrix Orchestrator.

Public API:
    create_job(platform, binary, settings) -> PlatformJob
    run_platform_job(job, release, credential, settings) -> JobReport
    run_isolated_job(platform, binary, release, credential, settings) -> JobReport
    run_matrix(release, binary, settings, credential) -> list[JobReport]
"""

from releaser.jobs.orchestrator import run_isolated_job, run_matrix
from releaser.jobs.runner import create_job, run_platform_job
from releaser.jobs.types import (
    TERMINAL_STATES,
    JobReport,
    JobState,
    PlatformJob,
    can_transition,
)

__all__ = [
    "TERMINAL_STATES",
    "JobReport",
    "JobState",
    "PlatformJob",
    "can_transition",
    "create_job",
    "run_isolated_job",
    "run_matrix",
    "run_platform_job",
]
