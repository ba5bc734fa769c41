"""Artifact packaging and upload.

Public API:
    write_name_marker(directory, page_name) -> Path
    ArtifactClient.from_environment(env).upload_artifact(name, files, root_dir) -> ArtifactHandle
"""

from report_sender.artifacts.archive import MARKER_FILENAME, write_name_marker
from report_sender.artifacts.client import ArtifactClient
from report_sender.artifacts.types import RETENTION_DAYS, ArtifactHandle

__all__ = [
    "ArtifactClient",
    "ArtifactHandle",
    "MARKER_FILENAME",
    "RETENTION_DAYS",
    "write_name_marker",
]
