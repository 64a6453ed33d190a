"""Tests for tag derivation and release lookup."""

from unittest.mock import AsyncMock, patch

import pytest

from release_uploader.errors import (
    ConfigurationError,
    InvalidReferenceError,
    ReleaseNotFoundError,
)
from release_uploader.release.locator import locate_upload_endpoint, tag_from_ref
from release_uploader.release.types import RepositoryIdentity

REPO = RepositoryIdentity(owner="octo", name="app")


class TestTagFromRef:
    def test_strips_tag_prefix(self):
        assert tag_from_ref("refs/tags/v2.0.0") == "v2.0.0"

    def test_keeps_slashes_inside_tag(self):
        assert tag_from_ref("refs/tags/release/1.0") == "release/1.0"

    @pytest.mark.parametrize("ref", ["refs/heads/main", "v2.0.0", "", "refs/pull/1/merge"])
    def test_non_tag_ref_rejected(self, ref):
        with pytest.raises(InvalidReferenceError):
            tag_from_ref(ref)

    def test_empty_tag_rejected(self):
        with pytest.raises(InvalidReferenceError, match="empty tag"):
            tag_from_ref("refs/tags/")


class TestLocateUploadEndpoint:
    @pytest.mark.asyncio
    async def test_returns_upload_url(self, fake_github):
        async with fake_github.client() as client:
            url = await locate_upload_endpoint(client, REPO, "refs/tags/v2.0.0")

        assert url.startswith("https://uploads.github.com/repos/octo/app/releases/42/assets")
        assert fake_github.requests[0].url.path == "/repos/octo/app/releases/tags/v2.0.0"

    @pytest.mark.asyncio
    async def test_missing_release_raises_not_found(self, fake_github):
        async with fake_github.client() as client:
            with pytest.raises(ReleaseNotFoundError) as exc_info:
                await locate_upload_endpoint(client, REPO, "refs/tags/v3.0.0")

        assert exc_info.value.tag == "v3.0.0"
        assert "v3.0.0" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_invalid_ref_makes_no_request(self):
        with patch(
            "release_uploader.release.locator.get_release_by_tag", new_callable=AsyncMock
        ) as mock_get:
            with pytest.raises(InvalidReferenceError):
                await locate_upload_endpoint(AsyncMock(), REPO, "refs/heads/main")

        mock_get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_release_without_upload_url_is_not_found(self):
        with patch(
            "release_uploader.release.locator.get_release_by_tag",
            new_callable=AsyncMock,
            return_value={"id": 1},
        ):
            with pytest.raises(ReleaseNotFoundError, match="no upload URL"):
                await locate_upload_endpoint(AsyncMock(), REPO, "refs/tags/v2.0.0")


class TestRepositoryIdentity:
    def test_parse(self):
        repo = RepositoryIdentity.parse("octo/app")
        assert repo.owner == "octo"
        assert repo.name == "app"
        assert repo.full_name == "octo/app"

    @pytest.mark.parametrize("value", ["", "octo", "/app", "octo/", "a/b/c"])
    def test_parse_rejects_malformed(self, value):
        with pytest.raises(ConfigurationError):
            RepositoryIdentity.parse(value)
