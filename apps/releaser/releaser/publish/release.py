"""Release trigger payload.

The trigger is a GitHub `release` webhook event, delivered to Actions
runners as a JSON file at GITHUB_EVENT_PATH. Only the fields the pipeline
reads are modelled; everything else in the payload is ignored.
"""

import json
import logging
import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from releaser.errors import EventError

logger = logging.getLogger(__name__)

# "https://uploads.github.com/repos/o/r/releases/1/assets{?name,label}"
_URI_TEMPLATE_SUFFIX = re.compile(r"\{[^}]*\}$")


class Release(BaseModel):
    """The release that triggered the matrix. Read-only for the whole run."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    tag_name: str
    upload_url: str
    html_url: str = ""
    name: str | None = None


class ReleaseEvent(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    action: str
    release: Release

    @property
    def triggers_build(self) -> bool:
        return self.action == "created"


def parse_release_event(payload: dict) -> ReleaseEvent:
    """Validate a decoded event payload."""
    try:
        return ReleaseEvent.model_validate(payload)
    except ValidationError as exc:
        raise EventError(f"Not a release event: {exc}") from exc


def load_release_event(path: Path) -> ReleaseEvent:
    """Read and validate the event file GitHub Actions writes for a job."""
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise EventError(f"Event file not found: {path}") from exc
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise EventError(f"Cannot read event file {path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise EventError(f"Event file {path} does not hold a JSON object")

    event = parse_release_event(payload)
    logger.info(
        "Loaded release event: action=%s release=%s tag=%s",
        event.action, event.release.id, event.release.tag_name,
    )
    return event


def expand_upload_url(upload_url: str) -> str:
    """Drop the RFC 6570 query template GitHub appends to upload_url.

    The asset name is passed separately as a query parameter.
    """
    return _URI_TEMPLATE_SUFFIX.sub("", upload_url.strip())
