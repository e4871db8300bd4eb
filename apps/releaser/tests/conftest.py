"""Shared fixtures for the releaser test suite.

No test runs a real toolchain or talks to GitHub: subprocess and httpx
are mocked, and workspaces live under pytest's tmp_path.
"""

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from releaser.core.config import Credential, Settings
from releaser.publish.release import Release

UPLOAD_URL = "https://uploads.github.com/repos/acme/mybinary/releases/42/assets{?name,label}"


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def release() -> Release:
    return Release(
        id=42,
        tag_name="v1.2.0",
        upload_url=UPLOAD_URL,
        html_url="https://github.com/acme/mybinary/releases/tag/v1.2.0",
    )


@pytest.fixture
def event_payload() -> dict:
    return {
        "action": "created",
        "release": {
            "id": 42,
            "tag_name": "v1.2.0",
            "upload_url": UPLOAD_URL,
            "html_url": "https://github.com/acme/mybinary/releases/tag/v1.2.0",
            "draft": False,
        },
        "repository": {"full_name": "acme/mybinary"},
    }


@pytest.fixture
def event_file(tmp_path: Path, event_payload: dict) -> Path:
    path = tmp_path / "event.json"
    path.write_text(json.dumps(event_payload), encoding="utf-8")
    return path


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    src = tmp_path / "src"
    src.mkdir()
    (src / "Cargo.toml").write_text(
        '[package]\nname = "mybinary"\nversion = "0.1.0"\n',
        encoding="utf-8",
    )
    return src


@pytest.fixture
def settings(tmp_path: Path, source_dir: Path) -> Settings:
    return Settings(
        _env_file=None,
        github_token="ghs_test_token",
        binary_name="mybinary",
        source_dir=source_dir,
        workspace_root=tmp_path / "work",
    )


@pytest.fixture
def credential() -> Credential:
    return Credential(token="ghs_test_token")


def _make_async_client(response=None, side_effect=None) -> AsyncMock:
    """An httpx.AsyncClient stand-in usable as `async with`."""
    client = AsyncMock()
    if side_effect is not None:
        client.post.side_effect = side_effect
    else:
        client.post.return_value = response
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


def _make_response(status_code: int, body: dict | None = None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = body or {}
    return response


@pytest.fixture
def make_async_client():
    return _make_async_client


@pytest.fixture
def make_response():
    return _make_response
