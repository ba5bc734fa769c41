"""Tests for the structlog configuration.

structlog's own suite covers rendering in general; these check that log
levels reach the runner as the right workflow commands.
"""

import logging

import pytest
import structlog

from report_sender.core.logging import WorkflowCommandRenderer, configure_structlog


@pytest.fixture(autouse=True)
def restore_root_handlers():
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
    structlog.reset_defaults()


class TestWorkflowCommandRenderer:
    def test_debug_becomes_debug_command(self) -> None:
        line = WorkflowCommandRenderer()(None, "debug", {"event": "hello", "level": "debug"})
        assert line == "::debug::hello"

    def test_warning_becomes_warning_command(self) -> None:
        line = WorkflowCommandRenderer()(None, "warning", {"event": "careful", "level": "warning"})
        assert line == "::warning::careful"

    def test_info_is_plain(self) -> None:
        line = WorkflowCommandRenderer()(None, "info", {"event": "plain text", "level": "info"})
        assert line == "plain text"

    def test_multiline_messages_are_escaped(self) -> None:
        line = WorkflowCommandRenderer()(None, "error", {"event": "a\nb 100%", "level": "error"})
        assert line == "::error::a%0Ab 100%25"

    def test_extra_keys_are_appended(self) -> None:
        line = WorkflowCommandRenderer()(
            None, "info", {"event": "uploaded", "level": "info", "artifact_id": 7},
        )
        assert line == "uploaded artifact_id=7"


class TestConfigureStructlog:
    def test_configure_does_not_raise_in_actions_mode(self) -> None:
        configure_structlog(annotate=True)

    def test_configure_does_not_raise_in_local_mode(self) -> None:
        configure_structlog(annotate=False, debug=True)

    def test_configure_multiple_times_keeps_one_handler(self) -> None:
        configure_structlog(annotate=True)
        configure_structlog(annotate=False)
        configure_structlog(annotate=True)
        assert len(logging.getLogger().handlers) == 1

    def test_stdlib_records_render_as_commands(self, capsys) -> None:
        configure_structlog(annotate=True)

        logging.getLogger("report_sender.test").warning("disk %s", "full")

        assert "::warning::disk full" in capsys.readouterr().out

    def test_structlog_logger_usable_after_configure(self) -> None:
        configure_structlog(annotate=True)
        structlog.get_logger("test").info("test message", key="value")
