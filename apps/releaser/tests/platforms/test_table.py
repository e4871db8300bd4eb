"""Tests for the fixed platform table."""

from pathlib import Path
from unittest.mock import patch

import pytest

from releaser.platforms import (
    ASSET_CONTENT_TYPE,
    PLATFORM_TABLE,
    Platform,
    all_platforms,
    get_profile,
    host_platform,
    matrix_include,
    resolve_platform,
)


class TestAssetNaming:
    @pytest.mark.parametrize(
        "platform,expected",
        [
            (Platform.MACOS, "mybinary_mac"),
            (Platform.LINUX, "mybinary_linux"),
            (Platform.WINDOWS, "mybinary.exe"),
        ],
    )
    def test_asset_name_matches_policy(self, platform, expected):
        assert get_profile(platform).asset_name("mybinary") == expected

    def test_every_platform_declares_zip_content_type(self):
        for profile in PLATFORM_TABLE.values():
            assert profile.content_type == "application/zip"
        assert ASSET_CONTENT_TYPE == "application/zip"

    def test_windows_executable_has_exe_suffix(self):
        assert get_profile(Platform.WINDOWS).executable_name("mybinary") == "mybinary.exe"

    def test_unix_executables_have_no_suffix(self):
        assert get_profile(Platform.MACOS).executable_name("mybinary") == "mybinary"
        assert get_profile(Platform.LINUX).executable_name("mybinary") == "mybinary"

    def test_asset_names_are_distinct_per_platform(self):
        names = {p.asset_name("mybinary") for p in PLATFORM_TABLE.values()}
        assert len(names) == len(PLATFORM_TABLE)


class TestBootstrapRequirements:
    def test_linux_needs_nothing(self):
        assert get_profile(Platform.LINUX).bootstrap == ()

    def test_macos_adds_rustfmt(self):
        (req,) = get_profile(Platform.MACOS).bootstrap
        assert req.name == "rustfmt"
        assert req.command == "rustup component add rustfmt --toolchain stable-x86_64-apple-darwin"
        assert req.download_url is None

    def test_windows_fetches_and_extracts_llvm(self):
        (req,) = get_profile(Platform.WINDOWS).bootstrap
        assert req.download_url == "https://releases.llvm.org/9.0.0/LLVM-9.0.0-win64.exe"
        assert req.download_to == "LLVM9.exe"
        assert req.command.startswith("7z x LLVM9.exe -y")
        assert req.creates == Path("C:/Program Files/LLVM") / "bin" / "clang.exe"


class TestResolvePlatform:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("macos", Platform.MACOS),
            ("macOS-latest", Platform.MACOS),
            ("macOS", Platform.MACOS),
            ("darwin", Platform.MACOS),
            ("Linux", Platform.LINUX),
            ("ubuntu-latest", Platform.LINUX),
            ("Windows", Platform.WINDOWS),
            ("windows-latest", Platform.WINDOWS),
            ("win32", Platform.WINDOWS),
            ("  LINUX ", Platform.LINUX),
        ],
    )
    def test_known_spellings(self, value, expected):
        assert resolve_platform(value) == expected

    def test_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown platform"):
            resolve_platform("solaris")

    def test_get_profile_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown platform"):
            get_profile("beos")

    def test_host_platform_follows_sys_platform(self):
        with patch("releaser.platforms.table.sys.platform", "darwin"):
            assert host_platform() == Platform.MACOS
        with patch("releaser.platforms.table.sys.platform", "win32"):
            assert host_platform() == Platform.WINDOWS


class TestMatrixInclude:
    def test_rows_for_all_platforms(self):
        rows = matrix_include()
        assert [r["platform"] for r in rows] == ["macos", "linux", "windows"]
        assert {r["runner"] for r in rows} == {"macOS-latest", "ubuntu-latest", "windows-latest"}
        assert all("asset_name" not in r for r in rows)

    def test_rows_include_asset_names_when_binary_given(self):
        rows = {r["platform"]: r for r in matrix_include("mybinary")}
        assert rows["windows"]["asset_name"] == "mybinary.exe"
        assert rows["linux"]["content_type"] == "application/zip"

    def test_all_platforms_is_fixed_set(self):
        assert all_platforms() == [Platform.MACOS, Platform.LINUX, Platform.WINDOWS]
