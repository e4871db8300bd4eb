"""Platform Job state machine and the report a job sends back.

State machine:
    pending -> bootstrapping -> building -> publishing -> succeeded
    any non-terminal state -> failed

Terminal states have no outgoing edges. There are no edges between jobs.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Optional

from releaser.build.compiler import Artifact
from releaser.errors import (
    BootstrapError,
    BuildError,
    InvalidTransition,
    JobStepError,
    PublishError,
)
from releaser.platforms.types import Platform, PlatformProfile
from releaser.publish.types import PublishedAsset
from releaser.sandbox.workspace import JobWorkspace
from releaser.steps.types import StepResult


class JobState(StrEnum):
    PENDING = "pending"
    BOOTSTRAPPING = "bootstrapping"
    BUILDING = "building"
    PUBLISHING = "publishing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


TERMINAL_STATES = frozenset({JobState.SUCCEEDED, JobState.FAILED})

# Step names used in reports, keyed by the state a job was in when it failed.
STEP_FOR_STATE: dict[JobState, str] = {
    JobState.BOOTSTRAPPING: BootstrapError.step,
    JobState.BUILDING: BuildError.step,
    JobState.PUBLISHING: PublishError.step,
}

# Failure before the job existed: its workspace could not be prepared.
WORKSPACE_STEP = "workspace"

_FORWARD: dict[JobState, JobState] = {
    JobState.PENDING: JobState.BOOTSTRAPPING,
    JobState.BOOTSTRAPPING: JobState.BUILDING,
    JobState.BUILDING: JobState.PUBLISHING,
    JobState.PUBLISHING: JobState.SUCCEEDED,
}


def can_transition(current: JobState, new: JobState) -> bool:
    if current in TERMINAL_STATES:
        return False
    if new == JobState.FAILED:
        return True
    return _FORWARD.get(current) == new


@dataclass
class PlatformJob:
    """The bootstrap-build-publish sequence for one platform.

    Owns its workspace and, once built, its Artifact. Nothing here is
    shared with other jobs.
    """

    profile: PlatformProfile
    binary: str
    workspace: JobWorkspace
    cross: bool = False
    state: JobState = JobState.PENDING
    artifact: Optional[Artifact] = None
    steps: list[StepResult] = field(default_factory=list)
    history: list[JobState] = field(default_factory=lambda: [JobState.PENDING])

    @property
    def platform(self) -> Platform:
        return self.profile.platform

    @property
    def asset_name(self) -> str:
        return self.profile.asset_name(self.binary)

    @property
    def content_type(self) -> str:
        return self.profile.content_type

    @property
    def output_path(self) -> Optional[Path]:
        return self.artifact.path if self.artifact else None

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def advance(self, new: JobState) -> None:
        if not can_transition(self.state, new):
            raise InvalidTransition(
                f"{self.platform}: cannot move from {self.state} to {new}"
            )
        self.state = new
        self.history.append(new)


@dataclass
class JobReport:
    """Terminal status message a job returns to the orchestrator."""

    platform: Platform
    state: JobState
    asset_name: str
    asset: Optional[PublishedAsset] = None
    failed_step: Optional[str] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    failure_reason: Optional[str] = None
    steps: list[StepResult] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return self.state == JobState.SUCCEEDED

    @classmethod
    def succeeded(cls, job: PlatformJob, asset: PublishedAsset) -> "JobReport":
        return cls(
            platform=job.platform,
            state=job.state,
            asset_name=job.asset_name,
            asset=asset,
            steps=list(job.steps),
        )

    @classmethod
    def failed(cls, job: PlatformJob, exc: Exception) -> "JobReport":
        if isinstance(exc, JobStepError):
            step = exc.step
        else:
            step = STEP_FOR_STATE.get(job.history[-2]) if len(job.history) > 1 else None
        return cls(
            platform=job.platform,
            state=job.state,
            asset_name=job.asset_name,
            failed_step=step,
            error=str(exc),
            error_type=exc.__class__.__name__,
            failure_reason=str(exc.reason) if isinstance(exc, PublishError) else None,
            steps=list(job.steps),
        )

    @classmethod
    def not_started(cls, platform: Platform, asset_name: str, exc: Exception) -> "JobReport":
        """Report for a job whose workspace could not be prepared."""
        return cls(
            platform=platform,
            state=JobState.FAILED,
            asset_name=asset_name,
            failed_step=WORKSPACE_STEP,
            error=str(exc),
            error_type=exc.__class__.__name__,
        )

    def to_dict(self) -> dict:
        return {
            "platform": self.platform.value,
            "state": self.state.value,
            "asset_name": self.asset_name,
            "asset": self.asset.to_dict() if self.asset else None,
            "failed_step": self.failed_step,
            "error": self.error,
            "error_type": self.error_type,
            "failure_reason": self.failure_reason,
            "steps": [s.to_dict() for s in self.steps],
        }
