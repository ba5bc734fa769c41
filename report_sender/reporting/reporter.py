"""Terminal reporting for one action run.

On success the reporter publishes step outputs; on failure it turns the
exception into a single error annotation and a failing exit code.
"""

import logging
import traceback

from report_sender.artifacts.types import ArtifactHandle
from report_sender.core.errors import HttpStatusError
from report_sender.inputs.types import Provenance
from report_sender.reporting import commands

logger = logging.getLogger(__name__)


def format_failure(exc: BaseException) -> str:
    """Return the user-facing message for a failure.

    HTTP failures read ``HTTP Error <status>: <message>``; anything else is
    reported by its message text.
    """
    if isinstance(exc, HttpStatusError):
        return f"HTTP Error {exc.status}: {exc.message}"
    return str(exc) or type(exc).__name__


class ResultReporter:
    """Collects the outcome of a run and emits it to the runner."""

    def __init__(self, output_file: str = "") -> None:
        self.output_file = output_file
        self.outputs: dict[str, str] = {}
        self.failure_message: str | None = None

    @property
    def failed(self) -> bool:
        return self.failure_message is not None

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def set_output(self, name: str, value: str) -> None:
        commands.set_output(name, value, output_file=self.output_file)
        self.outputs[name] = value
        logger.debug("Output %s=%s", name, value)

    def publish_outputs(self, handle: ArtifactHandle, provenance: Provenance) -> None:
        self.set_output("artifact-id", str(handle.id))
        self.set_output("artifact-name", handle.name)
        self.set_output("source-repository", provenance.repository)

    def fail(self, exc: BaseException) -> None:
        """Mark the run failed. Only the first failure is reported."""
        if self.failed:
            logger.debug("Ignoring additional failure: %r", exc)
            return

        message = format_failure(exc)
        self.failure_message = message
        commands.error(message)

        trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        logger.debug("Stack trace: %s", trace)
