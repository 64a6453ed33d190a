"""Resolve the upload endpoint of the release that triggered the run.

The tag comes from the triggering ref: `refs/tags/v1.10.15` -> `v1.10.15`.
A ref that is not a tag ref (a branch push, a pull request) is rejected
before any request is made.
"""

import logging

import httpx

from release_uploader.errors import InvalidReferenceError, ReleaseNotFoundError
from release_uploader.github.client import get_release_by_tag
from release_uploader.release.types import RepositoryIdentity

logger = logging.getLogger(__name__)

TAG_REF_PREFIX = "refs/tags/"


def tag_from_ref(ref: str) -> str:
    """Strip the `refs/tags/` prefix from a triggering ref.

    Raises:
        InvalidReferenceError: If the ref is not a tag ref.
    """
    if not ref.startswith(TAG_REF_PREFIX):
        raise InvalidReferenceError(
            f"Triggering ref '{ref}' is not a tag (expected '{TAG_REF_PREFIX}<tag>')"
        )
    tag = ref[len(TAG_REF_PREFIX):]
    if not tag:
        raise InvalidReferenceError(f"Triggering ref '{ref}' has an empty tag name")
    return tag


async def locate_upload_endpoint(
    client: httpx.AsyncClient,
    repository: RepositoryIdentity,
    ref: str,
) -> str:
    """Return the upload_url of the release tagged by *ref*.

    Raises:
        InvalidReferenceError: If *ref* is not a tag ref.
        ReleaseNotFoundError: If the repository has no release for the tag.
        UploadTransportError: On any other API or network failure.
    """
    tag = tag_from_ref(ref)
    logger.debug("Looking up release %s in %s", tag, repository.full_name)

    release = await get_release_by_tag(client, repository.owner, repository.name, tag)
    if release is None:
        raise ReleaseNotFoundError(
            tag,
            f"Release not found for tag '{tag}' in {repository.full_name}",
        )

    upload_url = release.get("upload_url")
    if not upload_url:
        raise ReleaseNotFoundError(
            tag,
            f"Release for tag '{tag}' in {repository.full_name} has no upload URL",
        )
    return upload_url
