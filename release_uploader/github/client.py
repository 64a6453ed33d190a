"""GitHub API client for release operations.

Uses httpx for async HTTP calls. One AsyncClient is shared by the whole
run so concurrent uploads reuse connections; it carries the auth headers
and API base URL.

Two endpoints are needed:
1. Get a release by its tag name
2. Upload a release asset to the release's upload URL
"""

import re

import httpx

from release_uploader.core.config import Settings
from release_uploader.errors import UploadTransportError

# GitHub returns upload_url as an RFC 6570 template, e.g.
# https://uploads.github.com/repos/o/r/releases/1/assets{?name,label}
_URI_TEMPLATE_QUERY = re.compile(r"\{\?[^}]*\}")


def create_client(settings: Settings) -> httpx.AsyncClient:
    """Build the AsyncClient used for every request in a run."""
    return httpx.AsyncClient(
        base_url=settings.github_api_url,
        headers=_auth_headers(settings.github_token),
        timeout=settings.upload_timeout,
    )


async def get_release_by_tag(
    client: httpx.AsyncClient,
    owner: str,
    repo: str,
    tag: str,
) -> dict | None:
    """GET /repos/{owner}/{repo}/releases/tags/{tag}

    Returns the release record, or None when no release has that tag (404).
    """
    try:
        response = await client.get(f"/repos/{owner}/{repo}/releases/tags/{tag}")
    except httpx.HTTPError as exc:
        raise UploadTransportError(
            f"Release lookup for tag '{tag}' failed: {exc}"
        ) from exc

    if response.status_code == 404:
        return None
    _raise_for_status(response, f"Release lookup for tag '{tag}' failed")
    return _json_object(response, f"Release lookup for tag '{tag}'")


async def upload_release_asset(
    client: httpx.AsyncClient,
    upload_url: str,
    name: str,
    headers: dict[str, str],
    content: bytes,
) -> dict:
    """POST {upload_url}?name={name}

    Sends the raw bytes as the request body. Returns the asset record,
    which includes browser_download_url.
    """
    try:
        response = await client.post(
            expand_upload_url(upload_url),
            params={"name": name},
            headers=headers,
            content=content,
        )
    except httpx.HTTPError as exc:
        raise UploadTransportError(f"Upload of asset '{name}' failed: {exc}") from exc

    _raise_for_status(response, f"Upload of asset '{name}' failed")
    return _json_object(response, f"Upload of asset '{name}'")


def expand_upload_url(upload_url: str) -> str:
    """Drop the URI-template query expression from an upload_url.

    The asset name is sent with httpx params instead.
    """
    return _URI_TEMPLATE_QUERY.sub("", upload_url)


def _raise_for_status(response: httpx.Response, context: str) -> None:
    if response.status_code >= 400:
        raise UploadTransportError(
            f"{context}: HTTP {response.status_code} {_error_message(response)}".rstrip(),
            status_code=response.status_code,
        )


def _json_object(response: httpx.Response, context: str) -> dict:
    """Decode a success body, which must be a JSON object."""
    try:
        data = response.json()
    except ValueError as exc:
        raise UploadTransportError(
            f"{context} returned a non-JSON response (HTTP {response.status_code})",
            status_code=response.status_code,
        ) from exc
    if not isinstance(data, dict):
        raise UploadTransportError(
            f"{context} returned {type(data).__name__}, expected a JSON object",
            status_code=response.status_code,
        )
    return data


def _error_message(response: httpx.Response) -> str:
    """Extract GitHub's `message` field from an error body, if any."""
    try:
        data = response.json()
    except ValueError:
        return ""
    if isinstance(data, dict):
        return str(data.get("message", ""))
    return ""


def _auth_headers(token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }
