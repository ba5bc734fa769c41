"""Types for the downstream workflow trigger."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DispatchTarget:
    """The workflow started after every upload."""

    owner: str
    repo: str
    workflow_id: int
    ref: str = "main"

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.repo}"


# The test-report site that renders uploaded artifacts
DEFAULT_TARGET = DispatchTarget(
    owner="VSC-NeuroPilot",
    repo="unit-tests",
    workflow_id=175007698,
    ref="main",
)


@dataclass(frozen=True)
class DispatchRequest:
    """A single workflow_dispatch call. Sent once, never retried."""

    target: DispatchTarget
    inputs: dict[str, str] = field(default_factory=dict)

    @property
    def path(self) -> str:
        return (
            f"/repos/{self.target.owner}/{self.target.repo}"
            f"/actions/workflows/{self.target.workflow_id}/dispatches"
        )

    def to_payload(self) -> dict:
        return {"ref": self.target.ref, "inputs": dict(self.inputs)}
