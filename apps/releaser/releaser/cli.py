"""Command line entry point.

    releaser job --platform macos     run one Platform Job on this host
    releaser matrix                   run every platform in parallel
    releaser plan --binary NAME       print the platform table as JSON

`job` is what each CI matrix runner executes; `matrix` runs the
orchestrator in a single process. Both read the triggering release event
from GITHUB_EVENT_PATH unless --event is given. Events other than a
release creation exit 0 without building.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import click

from releaser import __version__
from releaser.build.compiler import resolve_binary_name
from releaser.core.config import Credential, Settings, get_settings
from releaser.core.logging import configure_structlog
from releaser.errors import BuildError, EventError
from releaser.jobs.orchestrator import run_isolated_job, run_matrix
from releaser.jobs.runner import run_platform_job
from releaser.jobs.types import JobReport
from releaser.platforms.table import host_platform, matrix_include, resolve_platform
from releaser.platforms.types import Platform
from releaser.publish.release import ReleaseEvent, load_release_event

EXIT_JOB_FAILED = 1
EXIT_USER_ERROR = 2


class CLIError(click.ClickException):
    """User-facing error with an explicit exit code."""

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def _parse_platform(ctx: click.Context, param: click.Parameter, value):
    if value is None:
        return None
    if isinstance(value, tuple):
        return tuple(_parse_platform(ctx, param, v) for v in value)
    try:
        return resolve_platform(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


def _load_event(settings: Settings, event_path: Optional[Path]) -> Optional[ReleaseEvent]:
    path = event_path or settings.github_event_path
    if path is None:
        raise CLIError("No release event: pass --event or set GITHUB_EVENT_PATH")
    try:
        event = load_release_event(path)
    except EventError as exc:
        raise CLIError(str(exc)) from exc

    if not event.triggers_build:
        click.echo(f"Ignoring release event with action '{event.action}'")
        return None
    return event


def _binary_name(settings: Settings, override: Optional[str]) -> str:
    try:
        return resolve_binary_name(override or settings.binary_name, settings.source_dir)
    except BuildError as exc:
        raise CLIError(str(exc)) from exc


def _echo_report(report: JobReport) -> None:
    if report.is_success:
        click.echo(f"{report.platform.value}: {report.state.value} -> {report.asset_name}")
    else:
        click.echo(
            f"{report.platform.value}: {report.state.value} at {report.failed_step} "
            f"({report.error_type}: {report.error})",
            err=True,
        )


@click.group()
@click.version_option(version=__version__, prog_name="releaser")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Build and attach release binaries for macOS, Linux and Windows."""
    settings = get_settings()
    configure_structlog(debug=settings.debug)
    ctx.obj = settings


@cli.command()
@click.option(
    "--platform",
    "platform",
    envvar="RUNNER_OS",
    callback=_parse_platform,
    help="Platform to build (default: RUNNER_OS, then this host).",
)
@click.option("--event", "event_path", type=click.Path(path_type=Path), help="Release event JSON.")
@click.option("--binary", default=None, help="Binary name (default: from Cargo.toml).")
@click.option("--json", "as_json", is_flag=True, help="Print the job report as JSON.")
@click.pass_obj
def job(
    settings: Settings,
    platform: Optional[Platform],
    event_path: Optional[Path],
    binary: Optional[str],
    as_json: bool,
) -> None:
    """Run one Platform Job (bootstrap, build, publish) on this host."""
    event = _load_event(settings, event_path)
    if event is None:
        return

    name = _binary_name(settings, binary)
    credential = Credential.from_settings(settings)

    report = asyncio.run(
        run_isolated_job(
            platform or host_platform(),
            name,
            event.release,
            credential,
            settings,
            job_runner=run_platform_job,
        )
    )

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _echo_report(report)
    if not report.is_success:
        click.get_current_context().exit(EXIT_JOB_FAILED)


@cli.command()
@click.option(
    "--platform",
    "platforms",
    multiple=True,
    callback=_parse_platform,
    help="Restrict the matrix to these platforms (repeatable).",
)
@click.option("--event", "event_path", type=click.Path(path_type=Path), help="Release event JSON.")
@click.option("--binary", default=None, help="Binary name (default: from Cargo.toml).")
@click.option("--json", "as_json", is_flag=True, help="Print all job reports as JSON.")
@click.pass_obj
def matrix(
    settings: Settings,
    platforms: tuple[Platform, ...],
    event_path: Optional[Path],
    binary: Optional[str],
    as_json: bool,
) -> None:
    """Run one job per platform in parallel."""
    event = _load_event(settings, event_path)
    if event is None:
        return

    name = _binary_name(settings, binary)
    credential = Credential.from_settings(settings)

    reports = asyncio.run(
        run_matrix(event.release, name, settings, credential, platforms=platforms or None)
    )

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in reports], indent=2))
    else:
        for report in reports:
            _echo_report(report)
    if not all(r.is_success for r in reports):
        click.get_current_context().exit(EXIT_JOB_FAILED)


@cli.command()
@click.option("--binary", default=None, help="Binary name used to render asset names.")
@click.pass_obj
def plan(settings: Settings, binary: Optional[str]) -> None:
    """Print the platform table as a CI matrix."""
    name = binary or settings.binary_name or ""
    if not name and (Path(settings.source_dir) / "Cargo.toml").exists():
        name = _binary_name(settings, None)
    click.echo(json.dumps({"include": matrix_include(name)}, indent=2))

