"""Zip packaging for artifact uploads.

Entry names are paths relative to the archive root, so uploading
``/ws/reports/a.xml`` with root ``/ws`` stores ``reports/a.xml``.

The uploaded directory also receives an ``info.json`` marker holding the
page name; the test-report site reads it to title the page.
"""

import hashlib
import json
import logging
import os
import tempfile
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from report_sender.core.errors import ArtifactUploadError

logger = logging.getLogger(__name__)

MARKER_FILENAME = "info.json"

# Characters the artifact service refuses in file paths
INVALID_PATH_CHARACTERS: tuple[str, ...] = ('"', ":", "<", ">", "|", "*", "?", "\r", "\n")

_CHUNK_SIZE = 1024 * 1024


@dataclass
class ArchiveFile:
    """A finished zip on disk together with its size and digest."""

    file: IO[bytes]
    size: int
    sha256: str
    entry_count: int

    @property
    def digest(self) -> str:
        return f"sha256:{self.sha256}"

    def close(self) -> None:
        self.file.close()


def write_name_marker(directory: Path, page_name: str) -> Path:
    """Write ``info.json`` with the page name into *directory*."""
    marker = directory / MARKER_FILENAME
    marker.write_text(json.dumps({"name": page_name}), encoding="utf-8")
    logger.debug("Wrote name marker %s", marker)
    return marker


def archive_entry_name(path: Path, root_dir: Path) -> str:
    """Return the zip entry name for *path* relative to *root_dir*."""
    relative = os.path.relpath(os.path.abspath(path), os.path.abspath(root_dir))
    if relative == os.curdir or relative.startswith(os.pardir + os.sep) or relative == os.pardir:
        raise ArtifactUploadError(
            f"The file {path} is not in the root directory {root_dir}"
        )

    entry = Path(relative).as_posix()
    bad = [repr(ch) for ch in INVALID_PATH_CHARACTERS if ch in entry]
    if bad:
        raise ArtifactUploadError(
            f"File path is not valid: {entry!r}. "
            f"Contains the following invalid characters: {', '.join(bad)}"
        )
    return entry


def build_archive(files: list[Path], root_dir: Path) -> ArchiveFile:
    """Zip *files* into a temporary file and hash the result.

    The caller owns the returned file and must close it.
    """
    entries = [(path, archive_entry_name(path, root_dir)) for path in files]

    tmp = tempfile.TemporaryFile()
    try:
        with zipfile.ZipFile(tmp, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for path, entry in entries:
                zf.write(path, arcname=entry)

        digest = hashlib.sha256()
        tmp.seek(0)
        for chunk in iter(lambda: tmp.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
        size = tmp.tell()
        tmp.seek(0)
    except Exception:
        tmp.close()
        raise

    logger.debug("Built archive with %d entries (%d bytes)", len(entries), size)
    return ArchiveFile(file=tmp, size=size, sha256=digest.hexdigest(), entry_count=len(entries))
