"""Types for the input resolver."""

from dataclasses import dataclass
from pathlib import Path

from report_sender.core.config import RunnerEnvironment
from report_sender.core.errors import ConfigurationError


@dataclass(frozen=True)
class RunConfig:
    """Resolved configuration for one invocation. Built once at start."""

    source_dir: Path
    artifact_name: str
    page_name: str
    token: str

    @property
    def has_token(self) -> bool:
        return bool(self.token)


@dataclass(frozen=True)
class Provenance:
    """Identifies the run that produced the artifact.

    Forwarded to the downstream workflow so it can link results back to
    the source repository, run and commit.
    """

    owner: str
    repo: str
    run_id: str = ""
    sha: str = ""

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_environment(cls, env: RunnerEnvironment) -> "Provenance":
        owner, _, repo = env.github_repository.partition("/")
        if not owner or not repo or "/" in repo:
            raise ConfigurationError(
                "GITHUB_REPOSITORY must be set to 'owner/repo' "
                f"(got {env.github_repository!r})"
            )
        return cls(owner=owner, repo=repo, run_id=env.github_run_id, sha=env.github_sha)
