"""Types for subprocess steps."""

from dataclasses import dataclass


@dataclass
class StepResult:
    """Result of a single subprocess step (a bootstrap command, the build).

    A step is successful if exit_code == 0. exit_code is -1 on timeout and
    -2 when the process could not be started at all.
    """

    name: str
    command: str
    exit_code: int
    duration_seconds: float
    stdout: str = ""
    stderr: str = ""
    skipped: bool = False

    @property
    def is_success(self) -> bool:
        return self.exit_code == 0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "command": self.command,
            "exit_code": self.exit_code,
            "duration_seconds": round(self.duration_seconds, 3),
            "skipped": self.skipped,
            "is_success": self.is_success,
        }
