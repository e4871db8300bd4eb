"""Types for the platform table."""

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Optional


class Platform(StrEnum):
    """Target platforms of the release matrix."""

    MACOS = "macos"
    LINUX = "linux"
    WINDOWS = "windows"


@dataclass(frozen=True)
class BootstrapRequirement:
    """One prerequisite a platform needs before it can build.

    If download_url is set, the file is fetched to download_to (relative
    to the job workspace) before command runs. creates is a marker path:
    when it already exists the requirement is considered satisfied and
    skipped.
    """

    name: str
    command: str
    download_url: Optional[str] = None
    download_to: Optional[str] = None
    creates: Optional[Path] = None


@dataclass(frozen=True)
class PlatformProfile:
    """One row of the platform table.

    asset_template is formatted with the binary name to get the release
    asset name. content_type is the label declared on upload.
    """

    platform: Platform
    runner_label: str
    target_triple: str
    asset_template: str
    content_type: str
    executable_suffix: str = ""
    bootstrap: tuple[BootstrapRequirement, ...] = field(default_factory=tuple)

    def asset_name(self, binary: str) -> str:
        return self.asset_template.format(binary=binary)

    def executable_name(self, binary: str) -> str:
        return f"{binary}{self.executable_suffix}"
