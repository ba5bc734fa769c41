"""The action's run sequence.

    inputs -> collect files -> upload artifact -> set outputs -> dispatch

Each step runs inside a log group. Any exception ends the run through the
single handler in run_action; nothing is retried and an uploaded artifact
is kept even when the dispatch fails.
"""

import logging
from pathlib import Path

from report_sender.artifacts import RETENTION_DAYS, ArtifactClient, write_name_marker
from report_sender.collector import collect_files
from report_sender.core.config import ActionInputs, RunnerEnvironment, get_environment, get_inputs
from report_sender.core.errors import ConfigurationError
from report_sender.dispatch import (
    DEFAULT_TARGET,
    DispatchTarget,
    build_dispatch_request,
    create_workflow_dispatch,
)
from report_sender.inputs import Provenance, resolve_run_config
from report_sender.reporting import ResultReporter, commands

logger = logging.getLogger(__name__)


async def run_pipeline(
    inputs: ActionInputs,
    env: RunnerEnvironment,
    reporter: ResultReporter,
    target: DispatchTarget = DEFAULT_TARGET,
    manifest_dir: Path | None = None,
) -> None:
    """Run every step in order. Raises on the first failure."""
    with commands.group("🔧 Getting inputs and configuration"):
        config = resolve_run_config(inputs, env, manifest_dir=manifest_dir)
        provenance = Provenance.from_environment(env)
        if not config.has_token:
            raise ConfigurationError(
                "No GitHub token available: set the github-token input or GITHUB_TOKEN"
            )
        artifact_client = ArtifactClient.from_environment(env)

        logger.info("📁 Folder path: %s", config.source_dir)
        logger.info("🏷️  Artifact name: %s", config.artifact_name)
        logger.info("📄 Page name: %s", config.page_name)
        logger.debug("🎯 Target workflow: %s", target.workflow_id)
        logger.debug("📦 Target repository: %s", target.repository)
        logger.debug("🔑 Token provided: %s", "Yes" if config.has_token else "No")

    with commands.group("📤 Uploading artifact"):
        logger.info("🔍 Scanning for files to upload...")
        files = collect_files(config.source_dir)

        marker = write_name_marker(config.source_dir, config.page_name)
        if marker not in files:
            files.append(marker)

        handle = await artifact_client.upload_artifact(
            config.artifact_name,
            files,
            config.source_dir.parent,
            retention_days=RETENTION_DAYS,
        )
        logger.info("✅ Artifact uploaded successfully. ID: %d", handle.id)
        commands.notice(f'Artifact "{handle.name}" uploaded with ID: {handle.id}')

    with commands.group("📊 Setting outputs"):
        reporter.publish_outputs(handle, provenance)
        logger.debug("📂 Source repository: %s", provenance.repository)

    with commands.group("🚀 Triggering target workflow"):
        request = build_dispatch_request(target, handle, provenance)
        logger.info("🎯 Triggering workflow %s in %s", target.workflow_id, target.repository)
        logger.info("📡 Sending workflow dispatch request...")
        await create_workflow_dispatch(config.token, request, api_url=env.github_api_url)
        logger.info("✅ Workflow dispatch successful.")
        commands.notice(
            f"Successfully triggered workflow {target.workflow_id} in {target.repository}"
        )


async def run_action(
    inputs: ActionInputs | None = None,
    env: RunnerEnvironment | None = None,
    target: DispatchTarget = DEFAULT_TARGET,
    manifest_dir: Path | None = None,
) -> int:
    """Run the action and return the process exit code."""
    env = env if env is not None else get_environment()
    reporter = ResultReporter(output_file=env.github_output)

    try:
        inputs = inputs if inputs is not None else get_inputs()
        await run_pipeline(inputs, env, reporter, target=target, manifest_dir=manifest_dir)
    except Exception as exc:
        with commands.group("❌ Error handling"):
            reporter.fail(exc)

    return reporter.exit_code
