"""Thin httpx wrapper around the GitHub releases REST API."""

from release_uploader.github.client import (
    create_client,
    get_release_by_tag,
    upload_release_asset,
)

__all__ = ["create_client", "get_release_by_tag", "upload_release_asset"]
