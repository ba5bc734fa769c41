"""GitHub REST client for workflow dispatch.

Uses httpx for the async HTTP call. GitHub answers a successful dispatch
with 204 No Content; anything else is turned into HttpStatusError here,
at the call site.
"""

import logging

import httpx

from report_sender.artifacts.types import ArtifactHandle
from report_sender.core.config import GITHUB_API_BASE
from report_sender.core.errors import DispatchError, HttpStatusError
from report_sender.core.http import error_message
from report_sender.dispatch.types import DispatchRequest, DispatchTarget
from report_sender.inputs.types import Provenance

logger = logging.getLogger(__name__)

# Timeout for API calls
API_TIMEOUT = 30


def build_dispatch_request(
    target: DispatchTarget,
    handle: ArtifactHandle,
    provenance: Provenance,
) -> DispatchRequest:
    """Build the dispatch inputs the report site's workflow expects."""
    return DispatchRequest(
        target=target,
        inputs={
            "artifact-id": str(handle.id),
            "artifact-name": handle.name,
            "source-repository": provenance.repository,
            "source-run-id": provenance.run_id,
            "source-sha": provenance.sha,
        },
    )


async def create_workflow_dispatch(
    token: str,
    request: DispatchRequest,
    api_url: str = GITHUB_API_BASE,
) -> None:
    """POST /repos/{owner}/{repo}/actions/workflows/{id}/dispatches

    Raises:
        HttpStatusError: Any status other than 204.
        DispatchError: The request could not be sent.
    """
    url = f"{api_url.rstrip('/')}{request.path}"
    logger.debug("Workflow inputs: %s", request.inputs)

    try:
        async with httpx.AsyncClient(timeout=API_TIMEOUT) as client:
            response = await client.post(
                url,
                headers=_auth_headers(token),
                json=request.to_payload(),
            )
    except httpx.TransportError as exc:
        raise DispatchError(f"Workflow dispatch request failed: {exc}") from exc

    logger.debug("API response status: %s", response.status_code)

    if response.status_code != 204:
        if response.status_code < 400:
            logger.warning("⚠️  Unexpected response status: %s", response.status_code)
        raise HttpStatusError(
            response.status_code,
            error_message(response, "Something went wrong while dispatching the workflow!"),
        )


def _auth_headers(token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }
