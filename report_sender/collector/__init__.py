"""Report file collection.

Public API:
    collect_files(root) -> list[Path]
"""

from report_sender.collector.files import collect_files

__all__ = ["collect_files"]
