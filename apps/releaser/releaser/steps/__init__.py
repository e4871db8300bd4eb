"""Subprocess step execution shared by the bootstrapper and the build."""

from releaser.steps.executor import run_step, toolchain_env, truncate_output
from releaser.steps.types import StepResult

__all__ = ["StepResult", "run_step", "toolchain_env", "truncate_output"]
