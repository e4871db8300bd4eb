"""Compiler Invoker.

Runs the build tool in release mode against the source tree and returns
the one Artifact it produced.

Output layout (cargo conventions):
  native build  <target_dir>/release/<binary>[.exe]
  cross build   <target_dir>/<triple>/release/<binary>[.exe]

CARGO_TARGET_DIR points at the job's own workspace so parallel jobs
sharing one source tree never share build output.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from releaser.build.cargo import detect_binary_name
from releaser.errors import BuildError
from releaser.platforms.types import PlatformProfile
from releaser.sandbox.workspace import JobWorkspace
from releaser.steps.executor import run_step, toolchain_env
from releaser.steps.types import StepResult

logger = logging.getLogger(__name__)

DEFAULT_BUILD_COMMAND = "cargo build --release"
DEFAULT_BUILD_TIMEOUT = 3600

StepRunner = Callable[..., StepResult]


@dataclass(frozen=True)
class Artifact:
    """The compiled binary for one platform."""

    path: Path
    name: str
    content_type: str

    @property
    def size(self) -> int:
        return self.path.stat().st_size


@dataclass(frozen=True)
class BuildPlan:
    """Concrete command and expected output for one build."""

    command: str
    output_path: Path
    env: dict


def plan_build(
    profile: PlatformProfile,
    binary: str,
    workspace: JobWorkspace,
    cross: bool = False,
    build_command: str = DEFAULT_BUILD_COMMAND,
) -> BuildPlan:
    """Work out the build command, environment and output path."""
    command = build_command
    release_dir = workspace.target_dir / "release"
    if cross:
        command = f"{build_command} --target {profile.target_triple}"
        release_dir = workspace.target_dir / profile.target_triple / "release"

    env = toolchain_env({"CARGO_TARGET_DIR": str(workspace.target_dir)})

    return BuildPlan(
        command=command,
        output_path=release_dir / profile.executable_name(binary),
        env=env,
    )


def build_release(
    profile: PlatformProfile,
    binary: str,
    workspace: JobWorkspace,
    cross: bool = False,
    build_command: str = DEFAULT_BUILD_COMMAND,
    timeout: int = DEFAULT_BUILD_TIMEOUT,
    step_runner: StepRunner = run_step,
) -> tuple[Artifact, StepResult]:
    """Build the binary and return the Artifact plus the step result.

    Raises BuildError if the build exits non-zero, times out, or leaves
    no file at the expected output path.
    """
    plan = plan_build(profile, binary, workspace, cross=cross, build_command=build_command)

    result = step_runner(
        "build",
        plan.command,
        workspace.source_dir,
        timeout=timeout,
        env=plan.env,
    )
    if not result.is_success:
        raise BuildError(
            f"Build failed with exit code {result.exit_code}",
            platform=profile.platform,
            step_result=result,
        )

    if not plan.output_path.is_file():
        raise BuildError(
            f"Build succeeded but produced no binary at {plan.output_path}",
            platform=profile.platform,
            step_result=result,
        )

    artifact = Artifact(
        path=plan.output_path,
        name=profile.asset_name(binary),
        content_type=profile.content_type,
    )
    logger.info("Built %s (%d bytes)", artifact.path, artifact.size)
    return artifact, result


def resolve_binary_name(configured: str, source_dir: Path) -> str:
    """Use the configured binary name, else the one from Cargo.toml."""
    name: Optional[str] = configured.strip() if configured else None
    if not name:
        name = detect_binary_name(source_dir)
    if not name:
        raise BuildError(
            f"No binary name configured and none found in {Path(source_dir) / 'Cargo.toml'}"
        )
    return name
