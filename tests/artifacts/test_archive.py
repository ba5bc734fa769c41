"""Unit tests for zip packaging and the name marker."""

import hashlib
import json
import zipfile

import pytest

from report_sender.artifacts.archive import (
    MARKER_FILENAME,
    archive_entry_name,
    build_archive,
    write_name_marker,
)
from report_sender.core.errors import ArtifactUploadError


class TestWriteNameMarker:
    def test_writes_strict_json(self, report_dir):
        marker = write_name_marker(report_dir, "Widgets Coverage")
        assert marker == report_dir / MARKER_FILENAME
        assert json.loads(marker.read_text()) == {"name": "Widgets Coverage"}

    def test_quotes_are_escaped(self, report_dir):
        marker = write_name_marker(report_dir, 'say "hi"')
        assert json.loads(marker.read_text())["name"] == 'say "hi"'

    def test_overwrites_existing_marker(self, report_dir):
        (report_dir / MARKER_FILENAME).write_text("{name:old}")
        write_name_marker(report_dir, "new")
        assert json.loads((report_dir / MARKER_FILENAME).read_text()) == {"name": "new"}


class TestArchiveEntryName:
    def test_relative_to_root(self, report_dir):
        entry = archive_entry_name(report_dir / "nested" / "junit.xml", report_dir.parent)
        assert entry == "reports/nested/junit.xml"

    def test_file_outside_root_raises(self, report_dir, tmp_path):
        outside = tmp_path / "elsewhere.txt"
        with pytest.raises(ArtifactUploadError, match="not in the root directory"):
            archive_entry_name(outside, report_dir)

    def test_invalid_characters_raise(self, report_dir):
        with pytest.raises(ArtifactUploadError, match="invalid characters"):
            archive_entry_name(report_dir / "what?.txt", report_dir.parent)


class TestBuildArchive:
    def test_contains_every_file_with_relative_names(self, report_dir):
        files = [report_dir / "index.html", report_dir / "nested" / "junit.xml"]
        archive = build_archive(files, report_dir.parent)
        try:
            with zipfile.ZipFile(archive.file) as zf:
                names = sorted(zf.namelist())
                assert zf.read("reports/index.html") == b"<html></html>"
        finally:
            archive.close()

        assert names == ["reports/index.html", "reports/nested/junit.xml"]
        assert archive.entry_count == 2

    def test_size_and_digest_match_content(self, report_dir):
        archive = build_archive([report_dir / "index.html"], report_dir.parent)
        try:
            archive.file.seek(0)
            content = archive.file.read()
        finally:
            archive.close()

        assert archive.size == len(content)
        assert archive.sha256 == hashlib.sha256(content).hexdigest()
        assert archive.digest == f"sha256:{archive.sha256}"

    def test_invalid_path_fails_before_writing(self, report_dir, tmp_path):
        with pytest.raises(ArtifactUploadError):
            build_archive([tmp_path / "elsewhere.txt"], report_dir)
