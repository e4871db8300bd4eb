"""Artifact Publisher: attaches one built binary to the release.

Upload flow (GitHub "upload a release asset" endpoint):
1. Refuse to start without a credential, so a missing token can never
   produce a partial asset.
2. POST the raw file bytes to the release's upload_url with ?name=<asset>
   and the declared content type.
3. Only 201 means the asset is now listed on the release under that name.
   Any other status, or a 201 without a JSON asset body, is a failure.

Failures are mapped to a PublishFailure reason and raised as PublishError.
There is no retry and no rollback.
"""

import logging

import httpx

from releaser.build.compiler import Artifact
from releaser.core.config import Credential
from releaser.errors import PublishError, PublishFailure
from releaser.publish.release import Release, expand_upload_url
from releaser.publish.types import PublishedAsset

logger = logging.getLogger(__name__)

UPLOAD_TIMEOUT = 300.0
GITHUB_API_VERSION = "2022-11-28"

_CREATED_STATUS = 201
_AUTH_STATUSES = {401, 403}
_COLLISION_STATUS = 422


async def upload_asset(
    release: Release,
    artifact: Artifact,
    credential: Credential,
    timeout: float = UPLOAD_TIMEOUT,
    platform: str = "",
) -> PublishedAsset:
    """Upload artifact to release under artifact.name.

    Returns the PublishedAsset described by the service's response.
    Raises PublishError on any failure.
    """
    if not credential.is_present:
        raise PublishError(
            "No upload credential configured (GITHUB_TOKEN is empty)",
            reason=PublishFailure.AUTH,
            platform=platform,
        )

    url = expand_upload_url(release.upload_url)
    try:
        payload = artifact.path.read_bytes()
    except OSError as exc:
        raise PublishError(
            f"Cannot read artifact {artifact.path}: {exc}",
            reason=PublishFailure.ENDPOINT,
            platform=platform,
        ) from exc

    logger.info(
        "Uploading %s as '%s' (%s, %d bytes) to release %s",
        artifact.path, artifact.name, artifact.content_type, len(payload), release.id,
    )

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.post(
                url,
                params={"name": artifact.name},
                headers=_upload_headers(credential, artifact.content_type),
                content=payload,
            )
    except httpx.TransportError as exc:
        raise PublishError(
            f"Upload of '{artifact.name}' failed: {exc.__class__.__name__}: {exc}",
            reason=PublishFailure.NETWORK,
            platform=platform,
        ) from exc

    if response.status_code != _CREATED_STATUS:
        raise _error_for_response(response, artifact.name, platform)

    data = _created_body(response, artifact.name, platform)
    asset = PublishedAsset(
        id=data.get("id"),
        name=data.get("name", artifact.name),
        content_type=data.get("content_type", artifact.content_type),
        size=data.get("size", len(payload)),
        download_url=data.get("browser_download_url", ""),
    )
    logger.info("Published asset '%s' (id=%s)", asset.name, asset.id)
    return asset


def _error_for_response(
    response: httpx.Response,
    asset_name: str,
    platform: str,
) -> PublishError:
    status = response.status_code
    if status in _AUTH_STATUSES:
        reason = PublishFailure.AUTH
    elif status == _COLLISION_STATUS:
        reason = PublishFailure.COLLISION
    else:
        reason = PublishFailure.ENDPOINT

    return PublishError(
        f"Upload of '{asset_name}' rejected: HTTP {status} {_response_message(response)}".rstrip(),
        reason=reason,
        platform=platform,
        status_code=status,
    )


def _created_body(response: httpx.Response, asset_name: str, platform: str) -> dict:
    try:
        body = response.json()
    except ValueError as exc:
        raise PublishError(
            f"Upload of '{asset_name}' returned HTTP 201 without a JSON asset body",
            reason=PublishFailure.ENDPOINT,
            platform=platform,
            status_code=response.status_code,
        ) from exc
    if not isinstance(body, dict):
        raise PublishError(
            f"Upload of '{asset_name}' returned HTTP 201 with an unexpected body",
            reason=PublishFailure.ENDPOINT,
            platform=platform,
            status_code=response.status_code,
        )
    return body


def _response_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return ""
    if isinstance(body, dict):
        return str(body.get("message", ""))
    return ""


def _upload_headers(credential: Credential, content_type: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {credential.token}",
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
        "Content-Type": content_type,
    }
