"""package.json lookup for the optional page name.

The manifest is a convenience source only: a missing, unreadable or
malformed file means "no value", never a failure.
"""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "package.json"


def read_manifest(directory: Path) -> dict | None:
    """Return the parsed manifest in *directory*, or None."""
    manifest_path = directory / MANIFEST_FILENAME
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.debug("No %s found at %s", MANIFEST_FILENAME, manifest_path)
        return None
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.debug("Ignoring unreadable %s: %s", manifest_path, exc)
        return None

    if not isinstance(data, dict):
        logger.debug("Ignoring %s: top-level value is not an object", manifest_path)
        return None
    return data


def manifest_display_name(manifest: dict | None) -> str | None:
    """Pick ``displayName``, then ``name``. Only non-empty strings count."""
    if not manifest:
        return None
    for key in ("displayName", "name"):
        value = manifest.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None
