"""Tests for Cargo.toml binary name detection."""

from releaser.build.cargo import detect_binary_name, parse_cargo


class TestDetectBinaryName:
    def test_package_name(self, tmp_path):
        (tmp_path / "Cargo.toml").write_text('[package]\nname = "chubaodb"\nversion = "0.1.0"\n')
        assert detect_binary_name(tmp_path) == "chubaodb"

    def test_bin_target_wins(self, tmp_path):
        (tmp_path / "Cargo.toml").write_text(
            '[package]\nname = "lib-crate"\n\n[[bin]]\nname = "server"\npath = "src/main.rs"\n'
        )
        assert detect_binary_name(tmp_path) == "server"

    def test_missing_manifest(self, tmp_path):
        assert detect_binary_name(tmp_path) is None

    def test_workspace_without_package(self, tmp_path):
        (tmp_path / "Cargo.toml").write_text('[workspace]\nmembers = ["a", "b"]\n')
        assert detect_binary_name(tmp_path) is None

    def test_invalid_toml_returns_empty(self, tmp_path):
        (tmp_path / "Cargo.toml").write_text("[package\nname = ")
        assert parse_cargo(tmp_path) == {}
        assert detect_binary_name(tmp_path) is None
