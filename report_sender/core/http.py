"""Helpers for turning httpx responses into action errors.

Callers invoke these right after the request so HttpStatusError is the
only shape downstream code sees.
"""

import httpx

from report_sender.core.errors import HttpStatusError


def error_message(response: httpx.Response, fallback: str) -> str:
    """Extract a human-readable message from an error response body.

    GitHub REST errors carry ``message``; twirp errors carry ``msg``.
    """
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, dict):
        for key in ("message", "msg"):
            value = data.get(key)
            if isinstance(value, str) and value:
                return value

    reason = getattr(response, "reason_phrase", "")
    if isinstance(reason, str) and reason:
        return f"{fallback} ({reason})"
    return fallback


def raise_for_status(response: httpx.Response, fallback: str) -> None:
    if response.status_code >= 400:
        raise HttpStatusError(response.status_code, error_message(response, fallback))
