"""Tests for release event parsing."""

import json

import pytest
from pydantic import ValidationError

from releaser.errors import EventError
from releaser.publish.release import (
    expand_upload_url,
    load_release_event,
    parse_release_event,
)


class TestLoadReleaseEvent:
    def test_loads_created_event(self, event_file):
        event = load_release_event(event_file)

        assert event.triggers_build is True
        assert event.release.id == 42
        assert event.release.tag_name == "v1.2.0"
        assert event.release.upload_url.endswith("{?name,label}")

    def test_other_actions_do_not_trigger(self, event_payload):
        event_payload["action"] = "published"
        assert parse_release_event(event_payload).triggers_build is False

    def test_missing_file(self, tmp_path):
        with pytest.raises(EventError, match="not found"):
            load_release_event(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "event.json"
        path.write_text("{not json")
        with pytest.raises(EventError, match="Cannot read"):
            load_release_event(path)

    def test_non_object_payload(self, tmp_path):
        path = tmp_path / "event.json"
        path.write_text(json.dumps([1, 2]))
        with pytest.raises(EventError, match="JSON object"):
            load_release_event(path)

    def test_push_event_is_rejected(self):
        with pytest.raises(EventError, match="Not a release event"):
            parse_release_event({"ref": "refs/heads/main", "commits": []})

    def test_release_is_immutable(self, event_payload):
        event = parse_release_event(event_payload)
        with pytest.raises(ValidationError):
            event.release.upload_url = "https://evil.example/"


class TestExpandUploadUrl:
    def test_strips_uri_template(self):
        url = "https://uploads.github.com/repos/o/r/releases/1/assets{?name,label}"
        assert expand_upload_url(url) == "https://uploads.github.com/repos/o/r/releases/1/assets"

    def test_plain_url_unchanged(self):
        url = "https://uploads.github.com/repos/o/r/releases/1/assets"
        assert expand_upload_url(url) == url
