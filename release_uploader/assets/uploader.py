"""Asset uploader: attaches local files to a GitHub release.

The upload flow for one file:
1. Read the file through a scoped async handle (closed on every path)
2. POST the raw bytes to the release's upload URL with the asset name
3. Return the browser_download_url from the created asset record

upload_assets() fans out one task per file over a shared client. Results
come back in input order regardless of which upload finishes first. The
first failure cancels the uploads still in flight; assets that already
finished stay on the release, nothing is rolled back.

Each file is read whole before its POST, so a batch holds every asset in
memory at once; peak memory grows with the total size of the artifacts.
"""

import logging
import os

import aiofiles
import httpx

from release_uploader.assets.types import ResolvedAsset
from release_uploader.core.concurrency import gather_or_cancel
from release_uploader.errors import AssetReadError, UploadTransportError
from release_uploader.github.client import upload_release_asset

logger = logging.getLogger(__name__)


async def read_asset(path: str) -> tuple[ResolvedAsset, bytes]:
    """Read *path* fully and describe it as a ResolvedAsset.

    Raises:
        AssetReadError: If the file cannot be opened or read.
    """
    try:
        async with aiofiles.open(path, "rb") as f:
            content = await f.read()
    except OSError as exc:
        raise AssetReadError(path, exc) from exc

    asset = ResolvedAsset(
        path=path,
        name=os.path.basename(path),
        size=len(content),
    )
    return asset, content


async def upload_asset(
    client: httpx.AsyncClient,
    path: str,
    upload_url: str,
) -> str:
    """Upload one file and return its public download URL.

    Raises:
        AssetReadError: If the file cannot be read.
        UploadTransportError: If the request fails or the response has
            no browser_download_url.
    """
    asset, content = await read_asset(path)

    logger.info("Uploading asset %s (%d bytes)", asset.name, asset.size)
    record = await upload_release_asset(
        client,
        upload_url,
        asset.name,
        asset.headers(),
        content,
    )

    download_url = record.get("browser_download_url")
    if not download_url:
        raise UploadTransportError(
            f"Upload of asset '{asset.name}' returned no browser_download_url"
        )
    return download_url


async def upload_assets(
    client: httpx.AsyncClient,
    paths: list[str],
    upload_url: str,
) -> list[str]:
    """Upload every file concurrently.

    Returns download URLs positionally matching *paths*.
    """
    urls = await gather_or_cancel(
        *(upload_asset(client, path, upload_url) for path in paths)
    )

    logger.info("Uploaded %d/%d assets", len(urls), len(paths))
    return urls
