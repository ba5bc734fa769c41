"""Log output via structlog.

Configures structlog once at startup. Modules keep using
``logging.getLogger(__name__)``; records are rendered by a
``structlog.stdlib.ProcessorFormatter`` attached to the root logger.

Renderer selection:
  annotate=True  — `WorkflowCommandRenderer`, which turns levels into GitHub
                   workflow commands (``::debug::``, ``::warning::``,
                   ``::error::``) so the runner shows them as annotations.
  annotate=False — `ConsoleRenderer` for local runs.

Debug lines are always emitted inside Actions; the runner hides them
unless step debug logging is enabled.
"""

from __future__ import annotations

import logging
import sys

import structlog

from report_sender.reporting.commands import escape_data

_COMMAND_BY_LEVEL = {
    "debug": "debug",
    "warning": "warning",
    "error": "error",
    "critical": "error",
    "exception": "error",
}


class WorkflowCommandRenderer:
    """Structlog renderer producing one workflow-command line per event."""

    def __call__(self, logger, method_name: str, event_dict: dict) -> str:
        level = event_dict.pop("level", method_name)
        message = str(event_dict.pop("event", ""))
        exc = event_dict.pop("exception", None)
        event_dict.pop("timestamp", None)
        event_dict.pop("logger", None)

        if event_dict:
            extras = " ".join(f"{key}={value}" for key, value in sorted(event_dict.items()))
            message = f"{message} {extras}"
        if exc:
            message = f"{message}\n{exc}"

        command = _COMMAND_BY_LEVEL.get(level)
        if command is None:
            return message
        return f"::{command}::{escape_data(message)}"


def configure_structlog(annotate: bool = True, debug: bool = False) -> None:
    """Configure structlog and the stdlib bridge for the process lifetime.

    Calling multiple times is safe; the root handlers are replaced.
    """
    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if annotate:
        renderer = WorkflowCommandRenderer()
    else:
        shared_processors.insert(1, structlog.processors.TimeStamper(fmt="iso"))
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG if (annotate or debug) else logging.INFO)

    # Request lines would carry the signed blob upload URL
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
