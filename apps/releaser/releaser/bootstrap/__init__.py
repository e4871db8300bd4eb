"""Platform Bootstrapper: per-platform prerequisite installation."""

from releaser.bootstrap.bootstrapper import bootstrap_platform
from releaser.bootstrap.fetch import fetch_archive

__all__ = ["bootstrap_platform", "fetch_archive"]
