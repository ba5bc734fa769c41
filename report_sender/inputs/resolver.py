"""Input resolution.

Turns raw action inputs plus the runner environment into a RunConfig,
applying the documented fallbacks:

    artifact name <- artifact-name input -> repository name
    page name     <- page-name input -> package.json displayName
                     -> package.json name -> artifact name
    token         <- github-token input -> GITHUB_TOKEN
"""

import logging
import os
from pathlib import Path

from report_sender.core.config import ActionInputs, RunnerEnvironment
from report_sender.core.errors import ConfigurationError
from report_sender.inputs.manifest import manifest_display_name, read_manifest
from report_sender.inputs.types import RunConfig

logger = logging.getLogger(__name__)

# Characters the artifact service refuses in artifact names
INVALID_ARTIFACT_NAME_CHARACTERS: tuple[str, ...] = (
    '"', ":", "<", ">", "|", "*", "?", "\r", "\n", "\\", "/",
)


def validate_artifact_name(name: str) -> None:
    if not name:
        raise ConfigurationError("Artifact name must not be empty")
    bad = [repr(ch) for ch in INVALID_ARTIFACT_NAME_CHARACTERS if ch in name]
    if bad:
        raise ConfigurationError(
            f"Artifact name is not valid: {name!r}. "
            f"Contains the following invalid characters: {', '.join(bad)}"
        )


def resolve_page_name(
    explicit: str,
    manifest: dict | None,
    artifact_name: str,
) -> str:
    if explicit:
        return explicit

    from_manifest = manifest_display_name(manifest)
    if from_manifest:
        return from_manifest

    logger.warning("No name provided! Falling back to artifact name!")
    return artifact_name


def resolve_run_config(
    inputs: ActionInputs,
    env: RunnerEnvironment,
    manifest_dir: Path | None = None,
) -> RunConfig:
    """Build the RunConfig for this invocation.

    Raises ConfigurationError when the directory input is missing or the
    artifact name cannot be determined. Reads package.json from
    *manifest_dir* (default: the working directory) only when no page name
    was given.
    """
    if not inputs.directory:
        raise ConfigurationError("Input required and not supplied: dir")

    repo_name = env.github_repository.partition("/")[2]
    artifact_name = inputs.artifact_name or repo_name
    if not artifact_name:
        raise ConfigurationError(
            "No artifact name: set the artifact-name input or GITHUB_REPOSITORY"
        )
    validate_artifact_name(artifact_name)

    manifest = None
    if not inputs.page_name:
        manifest = read_manifest(manifest_dir or Path.cwd())
    page_name = resolve_page_name(inputs.page_name, manifest, artifact_name)

    token = inputs.github_token or env.github_token

    return RunConfig(
        source_dir=Path(os.path.abspath(inputs.directory)),
        artifact_name=artifact_name,
        page_name=page_name,
        token=token,
    )
