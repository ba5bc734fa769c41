"""Artifact upload through the GitHub Actions Results service.

The service speaks twirp (JSON over HTTP POST). An upload is three calls:

1. CreateArtifact   — registers the name and returns a signed blob URL
2. PUT <signed url> — stores the zip in blob storage
3. FinalizeArtifact — records size and hash, returns the artifact id

The runtime token is a JWT whose ``scp`` claim carries the workflow run
and job backend ids as ``Actions.Results:<run>:<job>``.
"""

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import AsyncIterator

import httpx
import jwt

from report_sender.artifacts.archive import ArchiveFile, build_archive
from report_sender.artifacts.types import RETENTION_DAYS, ArtifactHandle
from report_sender.core.config import RunnerEnvironment
from report_sender.core.errors import ArtifactUploadError, ConfigurationError
from report_sender.core.http import raise_for_status

logger = logging.getLogger(__name__)

ARTIFACT_SERVICE = "github.actions.results.api.v1.ArtifactService"
ARTIFACT_VERSION = 4
USER_AGENT = "send-test-report-action"

# Timeout for twirp calls
API_TIMEOUT = 30
# Timeout for the blob PUT, which carries the whole archive
UPLOAD_TIMEOUT = 300

_UPLOAD_CHUNK_SIZE = 8 * 1024 * 1024


def backend_ids_from_token(runtime_token: str) -> tuple[str, str]:
    """Return ``(workflow_run_backend_id, workflow_job_run_backend_id)``.

    The token is only read, never verified; the service checks it.
    """
    try:
        claims = jwt.decode(runtime_token, options={"verify_signature": False})
    except jwt.PyJWTError as exc:
        raise ConfigurationError(f"ACTIONS_RUNTIME_TOKEN is not a valid JWT: {exc}") from exc

    scopes = claims.get("scp") or ""
    for scope in str(scopes).split(" "):
        parts = scope.split(":")
        if parts[0] != "Actions.Results":
            continue
        if len(parts) != 3:
            raise ConfigurationError(f"Malformed Actions.Results scope in runtime token: {scope}")
        return parts[1], parts[2]

    raise ConfigurationError("Runtime token has no Actions.Results scope")


class ArtifactClient:
    """Uploads one zip artifact per call to the Results service."""

    def __init__(
        self,
        results_url: str,
        runtime_token: str,
        workflow_run_backend_id: str,
        workflow_job_run_backend_id: str,
    ) -> None:
        self.results_url = results_url.rstrip("/")
        self.runtime_token = runtime_token
        self.workflow_run_backend_id = workflow_run_backend_id
        self.workflow_job_run_backend_id = workflow_job_run_backend_id

    @classmethod
    def from_environment(cls, env: RunnerEnvironment) -> "ArtifactClient":
        if not env.actions_results_url:
            raise ConfigurationError(
                "Unable to get the ACTIONS_RESULTS_URL env variable; "
                "artifact upload only works inside a workflow run"
            )
        if not env.actions_runtime_token:
            raise ConfigurationError("Unable to get the ACTIONS_RUNTIME_TOKEN env variable")

        run_id, job_id = backend_ids_from_token(env.actions_runtime_token)
        return cls(
            results_url=env.actions_results_url,
            runtime_token=env.actions_runtime_token,
            workflow_run_backend_id=run_id,
            workflow_job_run_backend_id=job_id,
        )

    async def upload_artifact(
        self,
        name: str,
        files: list[Path],
        root_dir: Path,
        retention_days: int = RETENTION_DAYS,
    ) -> ArtifactHandle:
        """Zip *files* relative to *root_dir* and upload them as *name*.

        Raises:
            ArtifactUploadError: The service refused the upload or returned
                no artifact id.
            HttpStatusError: A call returned an error status.
        """
        archive = build_archive(files, root_dir)
        try:
            async with httpx.AsyncClient(timeout=API_TIMEOUT) as client:
                signed_url = await self._create_artifact(client, name, retention_days)
                await self._upload_blob(client, signed_url, archive)
                artifact_id = await self._finalize_artifact(client, name, archive)
        except httpx.TransportError as exc:
            raise ArtifactUploadError(f"Artifact upload failed: {exc}") from exc
        finally:
            archive.close()

        logger.debug("Artifact %s finalized with id %d", name, artifact_id)
        return ArtifactHandle(
            id=artifact_id,
            name=name,
            retention_days=retention_days,
            size=archive.size,
            digest=archive.digest,
        )

    async def _create_artifact(
        self,
        client: httpx.AsyncClient,
        name: str,
        retention_days: int,
    ) -> str:
        expires_at = datetime.now(timezone.utc) + timedelta(days=retention_days)
        data = await self._call(client, "CreateArtifact", {
            "workflow_run_backend_id": self.workflow_run_backend_id,
            "workflow_job_run_backend_id": self.workflow_job_run_backend_id,
            "name": name,
            "version": ARTIFACT_VERSION,
            "expires_at": expires_at.isoformat().replace("+00:00", "Z"),
        })

        if not data.get("ok"):
            raise ArtifactUploadError("CreateArtifact: response from backend was not ok")
        signed_url = data.get("signed_upload_url") or data.get("signedUploadUrl")
        if not signed_url:
            raise ArtifactUploadError("CreateArtifact: no signed upload URL returned")
        return signed_url

    async def _upload_blob(
        self,
        client: httpx.AsyncClient,
        signed_url: str,
        archive: ArchiveFile,
    ) -> None:
        logger.info("⬆️  Starting artifact upload...")
        response = await client.put(
            signed_url,
            headers={
                "x-ms-blob-type": "BlockBlob",
                "Content-Type": "application/zip",
                "Content-Length": str(archive.size),
            },
            content=_iter_file(archive),
            timeout=UPLOAD_TIMEOUT,
        )
        raise_for_status(response, "Blob upload failed")
        logger.debug("Uploaded %d bytes to blob storage", archive.size)

    async def _finalize_artifact(
        self,
        client: httpx.AsyncClient,
        name: str,
        archive: ArchiveFile,
    ) -> int:
        data = await self._call(client, "FinalizeArtifact", {
            "workflow_run_backend_id": self.workflow_run_backend_id,
            "workflow_job_run_backend_id": self.workflow_job_run_backend_id,
            "name": name,
            "size": str(archive.size),
            "hash": archive.digest,
        })

        if not data.get("ok"):
            raise ArtifactUploadError("FinalizeArtifact: response from backend was not ok")

        raw_id = data.get("artifact_id") or data.get("artifactId")
        try:
            artifact_id = int(raw_id)
        except (TypeError, ValueError):
            artifact_id = 0
        if artifact_id <= 0:
            raise ArtifactUploadError("No artifact uploaded!")
        return artifact_id

    async def _call(self, client: httpx.AsyncClient, method: str, payload: dict) -> dict:
        url = f"{self.results_url}/twirp/{ARTIFACT_SERVICE}/{method}"
        logger.debug("Calling %s", method)
        response = await client.post(
            url,
            headers={
                "Authorization": f"Bearer {self.runtime_token}",
                "Content-Type": "application/json",
                "User-Agent": USER_AGENT,
            },
            json=payload,
        )
        raise_for_status(response, f"{method} failed")
        return response.json()


async def _iter_file(archive: ArchiveFile) -> AsyncIterator[bytes]:
    archive.file.seek(0)
    while True:
        chunk = archive.file.read(_UPLOAD_CHUNK_SIZE)
        if not chunk:
            break
        yield chunk
