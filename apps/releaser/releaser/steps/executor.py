"""Subprocess step execution.

Every command the pipeline runs (toolchain installers, the build tool)
goes through run_step(). It never raises: callers inspect the returned
StepResult and decide which error to raise for their own step.

Steps run in worker threads while other jobs are in flight, so no
preexec_fn is passed to subprocess. The wall-clock timeout is the only
guard on a runaway command.

Upload credentials are stripped from every step's environment; only the
publisher ever sees the token.
"""

import logging
import os
import subprocess
import time
from pathlib import Path
from typing import Optional

from releaser.steps.types import StepResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 900

CREDENTIAL_ENV_VARS = frozenset({"GITHUB_TOKEN", "GH_TOKEN", "MY_GITHUB_TOKEN"})


def toolchain_env(overrides: Optional[dict] = None) -> dict:
    """Copy of os.environ without upload credentials, plus overrides."""
    env = {
        key: value
        for key, value in os.environ.items()
        if key.upper() not in CREDENTIAL_ENV_VARS
    }
    if overrides:
        env.update(overrides)
    return env


def run_step(
    name: str,
    command: str,
    cwd: Path,
    timeout: int = DEFAULT_TIMEOUT,
    env: Optional[dict] = None,
) -> StepResult:
    """Execute a single step as a subprocess.

    Captures stdout, stderr, exit code, and duration.
    Timeout is enforced to prevent runaway processes.
    Without an explicit env the step gets toolchain_env().
    """
    logger.info("Running step '%s': %s (cwd=%s)", name, command, cwd)
    start = time.monotonic()

    try:
        result = subprocess.run(
            command,
            shell=True,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            timeout=timeout,
            env=env if env is not None else toolchain_env(),
        )
        step_result = StepResult(
            name=name,
            command=command,
            exit_code=result.returncode,
            duration_seconds=time.monotonic() - start,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    except subprocess.TimeoutExpired:
        step_result = StepResult(
            name=name,
            command=command,
            exit_code=-1,
            duration_seconds=time.monotonic() - start,
            stderr=f"Timed out after {timeout} seconds",
        )

    except OSError as exc:
        step_result = StepResult(
            name=name,
            command=command,
            exit_code=-2,
            duration_seconds=time.monotonic() - start,
            stderr=str(exc),
        )

    status = "OK" if step_result.is_success else "FAILED"
    logger.info(
        "Step '%s' %s (exit=%d, %.1fs)",
        name, status, step_result.exit_code, step_result.duration_seconds,
    )
    if not step_result.is_success and step_result.stderr:
        logger.warning(
            "Step '%s' stderr (tail):\n%s",
            name,
            truncate_output(step_result.stderr),
        )

    return step_result


def truncate_output(text: str, max_lines: int = 60, max_chars: int = 4000) -> str:
    """Return a concise tail of command output for logs and reports."""
    if not text:
        return ""
    lines = text.splitlines()
    joined = "\n".join(lines[-max_lines:])
    if len(joined) > max_chars:
        joined = joined[-max_chars:]
    return joined
