"""Structured logging via structlog.

Configures structlog once at process startup. Library modules keep using
`logging.getLogger(__name__)`; the job runner and orchestrator use
`structlog.get_logger()` for lifecycle events.

Renderer selection:
  debug=True: `ConsoleRenderer` with colours for local runs.
  debug=False: `JSONRenderer` for CI logs.

ContextVar injection:
  The `platform` field is injected into every structlog line from a
  ContextVar. Each job runs in its own asyncio task, which gets its own
  copy of the context, so parallel jobs never see each other's value.
  asyncio.to_thread() carries that context into the worker thread, so
  PlatformLogFilter stamps the same platform on stdlib records from the
  bootstrap, build and upload modules.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar

import structlog

_platform_var: ContextVar[str] = ContextVar("platform", default="")


def get_platform_context() -> str:
    """Return the platform of the job running in this context, or ''."""
    return _platform_var.get()


def bind_platform(platform: str) -> None:
    """Tag all structlog output of the current task with a platform."""
    _platform_var.set(platform)


def _inject_context_vars(
    logger: logging.Logger,
    method: str,
    event_dict: dict,
) -> dict:
    """Structlog processor: inject platform from the ContextVar."""
    platform = get_platform_context()
    if platform:
        event_dict["platform"] = platform
    return event_dict


class PlatformLogFilter(logging.Filter):
    """Stdlib filter: add `platform` from the ContextVar to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.platform = get_platform_context() or "-"
        return True


def configure_structlog(debug: bool = True) -> None:
    """Configure structlog for the process lifetime.

    Call once from the CLI entry point. Calling multiple times is safe.
    """
    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _inject_context_vars,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    # Bridge stdlib logging so library modules (and httpx) share stdout.
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(PlatformLogFilter())
    logging.basicConfig(
        format="%(asctime)s %(levelname)s [%(platform)s] %(name)s: %(message)s",
        handlers=[handler],
        level=logging.DEBUG if debug else logging.INFO,
    )
