"""Fixed platform table: prerequisites, asset names and content types.

Public API:
    get_profile(platform) -> PlatformProfile
    resolve_platform(value) -> Platform
    host_platform() -> Platform
    cross_target_requirements(profile) -> tuple[BootstrapRequirement, ...]
    matrix_include(binary) -> list[dict]
"""

from releaser.platforms.table import (
    ASSET_CONTENT_TYPE,
    PLATFORM_TABLE,
    all_platforms,
    cross_target_requirements,
    get_profile,
    host_platform,
    matrix_include,
    resolve_platform,
)
from releaser.platforms.types import BootstrapRequirement, Platform, PlatformProfile

__all__ = [
    "ASSET_CONTENT_TYPE",
    "PLATFORM_TABLE",
    "BootstrapRequirement",
    "Platform",
    "PlatformProfile",
    "all_platforms",
    "cross_target_requirements",
    "get_profile",
    "host_platform",
    "matrix_include",
    "resolve_platform",
]
