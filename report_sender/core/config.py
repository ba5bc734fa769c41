from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

GITHUB_API_BASE = "https://api.github.com"


class ActionInputs(BaseSettings):
    """Action inputs as the runner exposes them to the step process.

    GitHub sets one ``INPUT_<NAME>`` variable per input, upper-casing the
    name but keeping hyphens (``INPUT_ARTIFACT-NAME``). The underscore
    spelling is accepted too so the inputs can be exported from a shell.
    Values are trimmed; an empty value means the input was not supplied.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    directory: str = Field(
        default="",
        validation_alias="INPUT_DIR",
    )
    artifact_name: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_ARTIFACT-NAME", "INPUT_ARTIFACT_NAME"),
    )
    page_name: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_PAGE-NAME", "INPUT_PAGE_NAME"),
    )
    github_token: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_GITHUB-TOKEN", "INPUT_GITHUB_TOKEN"),
    )

    @field_validator("*", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v


class RunnerEnvironment(BaseSettings):
    """Default environment variables of a GitHub-hosted or self-hosted runner.

    ACTIONS_RESULTS_URL and ACTIONS_RUNTIME_TOKEN are only visible to
    JavaScript actions by default; the composite action.yml forwards them.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    # Provenance of the triggering run
    github_repository: str = ""
    github_run_id: str = ""
    github_sha: str = ""

    # Ambient credential used when the github-token input is empty
    github_token: str = ""

    github_output: str = ""
    github_api_url: str = GITHUB_API_BASE
    github_actions: bool = False
    runner_debug: bool = False

    # Results service (artifact storage)
    actions_results_url: str = ""
    actions_runtime_token: str = ""


def get_inputs() -> ActionInputs:
    return ActionInputs()


def get_environment() -> RunnerEnvironment:
    return RunnerEnvironment()
