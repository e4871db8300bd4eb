"""Artifact Publisher and release trigger parsing.

Public API:
    load_release_event(path) -> ReleaseEvent
    upload_asset(release, artifact, credential) -> PublishedAsset
"""

from releaser.publish.release import (
    Release,
    ReleaseEvent,
    expand_upload_url,
    load_release_event,
    parse_release_event,
)
from releaser.publish.types import PublishedAsset
from releaser.publish.uploader import upload_asset

__all__ = [
    "PublishedAsset",
    "Release",
    "ReleaseEvent",
    "expand_upload_url",
    "load_release_event",
    "parse_release_event",
    "upload_asset",
]
