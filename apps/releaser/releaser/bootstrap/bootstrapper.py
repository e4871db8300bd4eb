"""Platform Bootstrapper.

Installs the prerequisites a platform needs before `cargo build` can
succeed. Requirements come from the platform table; a platform with none
is a no-op.

A cross job (target differs from the host) runs the host-side
requirements from cross_target_requirements() instead. The target's own
requirements belong to its runner and are skipped.

Re-running is safe:
  - a requirement whose `creates` marker exists is skipped;
  - an installer already downloaded is not fetched again;
  - the commands themselves tolerate re-runs (`rustup component add` and
    `rustup target add` on an installed component, `7z x -y`).

Any failure raises BootstrapError, which stops this job only.
"""

import logging
from typing import Callable

import httpx

from releaser.bootstrap.fetch import fetch_archive
from releaser.errors import BootstrapError
from releaser.platforms.table import cross_target_requirements
from releaser.platforms.types import BootstrapRequirement, PlatformProfile
from releaser.sandbox.workspace import JobWorkspace
from releaser.steps.executor import DEFAULT_TIMEOUT, run_step, toolchain_env
from releaser.steps.types import StepResult

logger = logging.getLogger(__name__)

StepRunner = Callable[..., StepResult]


def bootstrap_platform(
    profile: PlatformProfile,
    workspace: JobWorkspace,
    timeout: int = DEFAULT_TIMEOUT,
    step_runner: StepRunner = run_step,
    cross: bool = False,
) -> list[StepResult]:
    """Install every bootstrap requirement of a platform, in order.

    Returns one StepResult per requirement (skipped ones included).
    """
    results: list[StepResult] = []
    if cross:
        if profile.bootstrap:
            logger.info(
                "Cross build for %s: skipping %d target-runner requirement(s)",
                profile.platform, len(profile.bootstrap),
            )
        requirements = cross_target_requirements(profile)
    else:
        requirements = profile.bootstrap

    if not requirements:
        logger.info("No bootstrap requirements for %s", profile.platform)
        return results

    env = toolchain_env()
    for requirement in requirements:
        results.append(
            _install_requirement(profile, requirement, workspace, timeout, step_runner, env)
        )

    logger.info(
        "Bootstrap complete for %s (%d requirement(s))",
        profile.platform, len(results),
    )
    return results


def _install_requirement(
    profile: PlatformProfile,
    requirement: BootstrapRequirement,
    workspace: JobWorkspace,
    timeout: int,
    step_runner: StepRunner,
    env: dict,
) -> StepResult:
    name = f"bootstrap:{requirement.name}"

    if requirement.creates is not None and requirement.creates.exists():
        logger.info(
            "Requirement '%s' already satisfied (%s exists)",
            requirement.name, requirement.creates,
        )
        return StepResult(
            name=name,
            command=requirement.command,
            exit_code=0,
            duration_seconds=0.0,
            skipped=True,
        )

    if requirement.download_url:
        dest = workspace.downloads_dir / (requirement.download_to or requirement.name)
        try:
            fetch_archive(requirement.download_url, dest)
        except httpx.HTTPError as exc:
            raise BootstrapError(
                f"Download of {requirement.download_url} failed: {exc}",
                platform=profile.platform,
            ) from exc

    result = step_runner(
        name,
        requirement.command,
        workspace.downloads_dir,
        timeout=timeout,
        env=env,
    )
    if not result.is_success:
        raise BootstrapError(
            f"Requirement '{requirement.name}' failed with exit code {result.exit_code}",
            platform=profile.platform,
            step_result=result,
        )
    return result
