"""Error types raised across the action.

Every failure reaching the top-level handler is one of these, or an
unexpected exception reported by its message. HttpStatusError is the only
variant that carries a status code; it is created where the httpx call is
made so downstream code never inspects response objects.
"""


class ActionError(Exception):
    """Base class for failures the action knows how to describe."""


class ConfigurationError(ActionError):
    """Raised when inputs or the runner environment are missing or invalid."""


class NoFilesFoundError(ConfigurationError):
    """Raised when the source directory yields no files to publish."""


class ArtifactUploadError(ActionError):
    """Raised when the artifact service does not confirm an upload."""


class DispatchError(ActionError):
    """Raised when the workflow dispatch request cannot be delivered."""


class HttpStatusError(ActionError):
    """An HTTP call returned a failing (or unexpected) status code."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status
        self.message = message

    def __str__(self) -> str:
        return f"HTTP Error {self.status}: {self.message}"
