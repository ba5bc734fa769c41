"""Unit tests for the package.json lookup."""

import json
from pathlib import Path

from report_sender.inputs.manifest import manifest_display_name, read_manifest


def _write_pkg(directory: Path, data) -> None:
    (directory / "package.json").write_text(json.dumps(data))


class TestReadManifest:
    def test_reads_object(self, tmp_path):
        _write_pkg(tmp_path, {"name": "widgets"})
        assert read_manifest(tmp_path) == {"name": "widgets"}

    def test_missing_file_returns_none(self, tmp_path):
        assert read_manifest(tmp_path) is None

    def test_invalid_json_returns_none(self, tmp_path):
        (tmp_path / "package.json").write_text("not json {{")
        assert read_manifest(tmp_path) is None

    def test_non_object_returns_none(self, tmp_path):
        _write_pkg(tmp_path, ["not", "an", "object"])
        assert read_manifest(tmp_path) is None

    def test_undecodable_bytes_return_none(self, tmp_path):
        (tmp_path / "package.json").write_bytes(b"\xff\xfe\x00garbage")
        assert read_manifest(tmp_path) is None


class TestManifestDisplayName:
    def test_prefers_display_name(self):
        assert manifest_display_name({"displayName": "Widgets", "name": "widgets"}) == "Widgets"

    def test_falls_back_to_name(self):
        assert manifest_display_name({"name": "widgets"}) == "widgets"

    def test_blank_display_name_is_ignored(self):
        assert manifest_display_name({"displayName": "  ", "name": "widgets"}) == "widgets"

    def test_non_string_values_are_ignored(self):
        assert manifest_display_name({"displayName": 3, "name": None}) is None

    def test_none_manifest(self):
        assert manifest_display_name(None) is None
