"""Types for the artifact publisher."""

from dataclasses import dataclass

# Days the artifact service keeps the uploaded bundle
RETENTION_DAYS = 30


@dataclass(frozen=True)
class ArtifactHandle:
    """Reference to an uploaded artifact.

    id is the numeric identifier the artifact service assigns on
    finalize; it is forwarded verbatim to the downstream workflow.
    """

    id: int
    name: str
    retention_days: int = RETENTION_DAYS
    size: int = 0
    digest: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "retention_days": self.retention_days,
            "size": self.size,
            "digest": self.digest,
        }
