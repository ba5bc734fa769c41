"""File collection for the report directory.

Walks the directory tree without following directory symlinks. Symlinks
that point at files are listed as themselves; dangling links are skipped.
"""

import logging
import os
from pathlib import Path

from report_sender.core.errors import NoFilesFoundError

logger = logging.getLogger(__name__)


def collect_files(root: Path) -> list[Path]:
    """Collect every file under *root*, recursively, in sorted order.

    Raises:
        NoFilesFoundError: If nothing was found, including when *root* does
            not exist or is not a directory.
    """
    files: list[Path] = []

    if root.is_dir():
        for dirpath, _dirnames, filenames in os.walk(root, followlinks=False):
            for filename in filenames:
                path = Path(dirpath) / filename
                if not path.is_file():
                    logger.debug("Skipping %s: not a regular file", path)
                    continue
                files.append(path)
    else:
        logger.debug("%s is not a directory", root)

    if not files:
        raise NoFilesFoundError(f"No files found in {root}")

    files.sort()
    logger.info("📋 Found %d files to upload", len(files))
    logger.debug("Files: %s", ", ".join(str(f) for f in files))
    return files
