"""Error taxonomy for release jobs.

Every JobStepError is local to the Platform Job that raised it. The job
runner catches it, marks the job failed and reports it; it is never
re-raised into sibling jobs and never retried.
"""

from enum import StrEnum
from typing import Optional


class ReleaserError(Exception):
    """Base class for all releaser errors."""


class EventError(ReleaserError):
    """Raised when the release trigger payload is unreadable or invalid."""


class InvalidTransition(ReleaserError):
    """Raised when a Platform Job is moved along an edge it does not have."""


class JobStepError(ReleaserError):
    """A failure that halts one Platform Job at one step.

    Carries the platform and step name so reports can say where the job
    stopped. step_result is attached when a subprocess produced the failure.
    """

    step = "job"

    def __init__(self, message: str, platform: str = "", step_result=None):
        self.platform = platform
        self.step_result = step_result
        super().__init__(message)


class BootstrapError(JobStepError):
    """A platform prerequisite could not be installed."""

    step = "bootstrap"


class BuildError(JobStepError):
    """The compiler invocation failed or produced no output."""

    step = "build"


class PublishFailure(StrEnum):
    """Normalized reasons an upload can fail."""

    AUTH = "auth"
    NETWORK = "network"
    COLLISION = "collision"
    ENDPOINT = "endpoint"


class PublishError(JobStepError):
    """The artifact could not be attached to the release."""

    step = "publish"

    def __init__(
        self,
        message: str,
        reason: PublishFailure = PublishFailure.ENDPOINT,
        platform: str = "",
        status_code: Optional[int] = None,
    ):
        self.reason = reason
        self.status_code = status_code
        super().__init__(message, platform=platform)
