"""The fixed platform table.

All per-platform policy (prerequisites, asset naming, content type,
runner label) lives in PLATFORM_TABLE. Nothing else in the package
branches on a platform identifier.

Every asset is declared as application/zip, raw executables included.
Existing consumers of the release assets depend on that label.
"""

import sys
from pathlib import Path

from releaser.platforms.types import BootstrapRequirement, Platform, PlatformProfile

ASSET_CONTENT_TYPE = "application/zip"

LLVM_INSTALLER_URL = "https://releases.llvm.org/9.0.0/LLVM-9.0.0-win64.exe"
LLVM_INSTALL_DIR = "C:/Program Files/LLVM"

PLATFORM_TABLE: dict[Platform, PlatformProfile] = {
    Platform.MACOS: PlatformProfile(
        platform=Platform.MACOS,
        runner_label="macOS-latest",
        target_triple="x86_64-apple-darwin",
        asset_template="{binary}_mac",
        content_type=ASSET_CONTENT_TYPE,
        bootstrap=(
            BootstrapRequirement(
                name="rustfmt",
                command="rustup component add rustfmt --toolchain stable-x86_64-apple-darwin",
            ),
        ),
    ),
    Platform.LINUX: PlatformProfile(
        platform=Platform.LINUX,
        runner_label="ubuntu-latest",
        target_triple="x86_64-unknown-linux-gnu",
        asset_template="{binary}_linux",
        content_type=ASSET_CONTENT_TYPE,
    ),
    Platform.WINDOWS: PlatformProfile(
        platform=Platform.WINDOWS,
        runner_label="windows-latest",
        target_triple="x86_64-pc-windows-msvc",
        asset_template="{binary}.exe",
        content_type=ASSET_CONTENT_TYPE,
        executable_suffix=".exe",
        bootstrap=(
            BootstrapRequirement(
                name="llvm",
                command=f'7z x LLVM9.exe -y -o"{LLVM_INSTALL_DIR}"',
                download_url=LLVM_INSTALLER_URL,
                download_to="LLVM9.exe",
                creates=Path(LLVM_INSTALL_DIR) / "bin" / "clang.exe",
            ),
        ),
    ),
}

# Aliases accepted by resolve_platform(): runner labels, RUNNER_OS values
# and sys.platform values, all lowercased.
_ALIASES: dict[str, Platform] = {
    "darwin": Platform.MACOS,
    "mac": Platform.MACOS,
    "osx": Platform.MACOS,
    "win32": Platform.WINDOWS,
    "win": Platform.WINDOWS,
    "ubuntu": Platform.LINUX,
}
for _profile in PLATFORM_TABLE.values():
    _ALIASES[_profile.platform.value] = _profile.platform
    _ALIASES[_profile.runner_label.lower()] = _profile.platform


def get_profile(platform: Platform | str) -> PlatformProfile:
    """Return the table row for a platform identifier."""
    try:
        return PLATFORM_TABLE[Platform(platform)]
    except ValueError:
        raise ValueError(f"Unknown platform '{platform}'") from None


def resolve_platform(value: str) -> Platform:
    """Map any common spelling of a platform to a Platform.

    Accepts identifiers ("macos"), runner labels ("macOS-latest"),
    RUNNER_OS values ("Linux") and sys.platform values ("win32").
    """
    key = (value or "").strip().lower()
    if key in _ALIASES:
        return _ALIASES[key]
    raise ValueError(f"Unknown platform '{value}'")


def host_platform() -> Platform:
    """Platform of the running interpreter."""
    return resolve_platform(sys.platform)


def cross_target_requirements(profile: PlatformProfile) -> tuple[BootstrapRequirement, ...]:
    """Host-side prerequisites for building profile's target from another platform.

    profile.bootstrap installs into the target runner's own toolchain and
    is not run on a foreign host.
    """
    return (
        BootstrapRequirement(
            name=f"target-{profile.target_triple}",
            command=f"rustup target add {profile.target_triple}",
        ),
    )


def all_platforms() -> list[Platform]:
    return list(PLATFORM_TABLE)


def matrix_include(binary: str = "") -> list[dict]:
    """Rows for a CI `strategy.matrix.include` block."""
    rows = []
    for profile in PLATFORM_TABLE.values():
        row = {"platform": profile.platform.value, "runner": profile.runner_label}
        if binary:
            row["asset_name"] = profile.asset_name(binary)
            row["content_type"] = profile.content_type
        rows.append(row)
    return rows
