"""Shared test fixtures.

Runner variables are scrubbed from the process environment for every test
so the suite behaves the same locally and inside a workflow run.
"""

import os

import jwt
import pytest

from report_sender.core.config import ActionInputs, RunnerEnvironment

STUB_RUN_BACKEND_ID = "run-backend-1"
STUB_JOB_BACKEND_ID = "job-backend-1"
STUB_RESULTS_URL = "https://results.example.test/"

_SCRUBBED_PREFIXES = ("INPUT_", "GITHUB_", "ACTIONS_", "RUNNER_")


def make_runtime_token(scope: str | None = None) -> str:
    """Mint a runtime token carrying an scp claim. Its signature is never checked."""
    if scope is None:
        scope = (
            "Actions.ExampleScope "
            f"Actions.Results:{STUB_RUN_BACKEND_ID}:{STUB_JOB_BACKEND_ID}"
        )
    return jwt.encode({"scp": scope}, "test-secret-for-unit-tests-0123456789abcdef", algorithm="HS256")


@pytest.fixture(autouse=True)
def clean_runner_env(monkeypatch):
    for key in list(os.environ):
        if key.upper().startswith(_SCRUBBED_PREFIXES):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def runner_env(tmp_path) -> RunnerEnvironment:
    """A runner environment as seen inside a workflow job."""
    return RunnerEnvironment(
        github_repository="octo-org/widgets",
        github_run_id="4242",
        github_sha="deadbeef",
        github_token="ambient-token",
        github_output=str(tmp_path / "github_output"),
        github_actions=True,
        actions_results_url=STUB_RESULTS_URL,
        actions_runtime_token=make_runtime_token(),
    )


@pytest.fixture
def report_dir(tmp_path):
    """A workspace containing reports/ with two report files."""
    reports = tmp_path / "workspace" / "reports"
    (reports / "nested").mkdir(parents=True)
    (reports / "index.html").write_text("<html></html>")
    (reports / "nested" / "junit.xml").write_text("<testsuite/>")
    return reports


_INPUT_ALIASES = {
    "directory": "INPUT_DIR",
    "artifact_name": "INPUT_ARTIFACT-NAME",
    "page_name": "INPUT_PAGE-NAME",
    "github_token": "INPUT_GITHUB-TOKEN",
}


def make_inputs(**kwargs) -> ActionInputs:
    """Build ActionInputs the way the runner names them."""
    return ActionInputs(**{_INPUT_ALIASES[key]: value for key, value in kwargs.items()})
