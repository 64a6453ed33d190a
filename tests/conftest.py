"""Shared fixtures for the release-uploader test suite.

No test touches the network: GitHub calls go through either an AsyncMock
client or an httpx.MockTransport that records every request.
"""

import httpx
import pytest

from release_uploader.core.config import Settings

UPLOAD_URL = "https://uploads.github.com/repos/octo/app/releases/42/assets{?name,label}"


@pytest.fixture
def make_settings():
    """Factory for Settings that ignores the real process environment."""

    def _make(**overrides) -> Settings:
        values = {
            "github_token": "ghs_test",
            "github_repository": "octo/app",
            "github_ref": "refs/tags/v2.0.0",
            "asset_paths": "dist/app.zip",
            "github_output": "",
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def dist_dir(tmp_path, monkeypatch):
    """A working directory holding dist/app.zip, dist/a.tar.gz, dist/b.tar.gz."""
    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "app.zip").write_bytes(b"PK\x03\x04zip")
    (dist / "b.tar.gz").write_bytes(b"bbbb")
    (dist / "a.tar.gz").write_bytes(b"aa")
    (dist / "nested").mkdir()
    monkeypatch.chdir(tmp_path)
    return dist


class FakeGitHub:
    """Records requests and answers like the releases API.

    Known tags map to release 42. Uploads answer with a download URL built
    from the asset name, unless the name is listed in fail_uploads.
    """

    def __init__(self, tags=("v2.0.0",), fail_uploads=()):
        self.tags = set(tags)
        self.fail_uploads = set(fail_uploads)
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "GET" and "/releases/tags/" in path:
            tag = path.rsplit("/releases/tags/", 1)[1]
            if tag not in self.tags:
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(200, json={"id": 42, "tag_name": tag, "upload_url": UPLOAD_URL})

        if request.method == "POST" and path.endswith("/releases/42/assets"):
            name = request.url.params["name"]
            if name in self.fail_uploads:
                return httpx.Response(422, json={"message": "Validation Failed"})
            return httpx.Response(
                201,
                json={"name": name, "browser_download_url": self.download_url_for(name)},
            )

        return httpx.Response(500, json={"message": f"unexpected {request.method} {path}"})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url="https://api.github.com",
            transport=httpx.MockTransport(self.handler),
        )

    @staticmethod
    def download_url_for(name: str) -> str:
        return f"https://github.com/octo/app/releases/download/v2.0.0/{name}"

    @property
    def uploads(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]


@pytest.fixture
def fake_github():
    return FakeGitHub()
