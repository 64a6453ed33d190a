"""Run orchestrator: release lookup, path expansion, concurrent upload.

A run is:
  1. Parse the asset_paths input (no I/O)
  2. Locate the release upload URL and expand the patterns, concurrently
  3. Upload every resolved file concurrently
  4. Report the download URLs, ordered like the resolved paths

Any error stops the run. run_action() turns that error into a failed
step with the error's message and writes no output.
"""

from __future__ import annotations

import json
import logging
import uuid
from dataclasses import dataclass, field

import httpx

from release_uploader.actions import WorkflowCommands
from release_uploader.assets.resolver import parse_patterns, resolve_asset_paths
from release_uploader.assets.uploader import upload_assets
from release_uploader.core.concurrency import gather_or_cancel
from release_uploader.core.config import Settings
from release_uploader.core.logging import set_run_id
from release_uploader.errors import ReleaseUploaderError
from release_uploader.github.client import create_client
from release_uploader.release.locator import locate_upload_endpoint
from release_uploader.release.types import RepositoryIdentity

logger = logging.getLogger(__name__)

OUTPUT_NAME = "browser_download_urls"


@dataclass
class RunResult:
    """Download URLs of a finished run, positionally matching asset_paths."""

    asset_paths: list[str] = field(default_factory=list)
    download_urls: list[str] = field(default_factory=list)

    def to_output(self) -> str:
        return json.dumps(self.download_urls)


class ReleaseAssetUploader:
    """Uploads the configured assets to the release for the triggering tag.

    All ambient state (token, repository, ref, inputs) comes from
    *settings*. Pass *client* to reuse an existing AsyncClient; it is
    left open. Otherwise one is created for the run and closed after.
    """

    def __init__(
        self,
        settings: Settings,
        client: httpx.AsyncClient | None = None,
        commands: WorkflowCommands | None = None,
    ):
        self.settings = settings
        self._client = client
        self._commands = commands

    async def run(self) -> RunResult:
        self.settings.check_required()
        repository = self.settings.repository()
        patterns = parse_patterns(
            self.settings.asset_paths, self.settings.asset_paths_format
        )

        if self._client is not None:
            return await self._run(self._client, repository, patterns)
        async with create_client(self.settings) as client:
            return await self._run(client, repository, patterns)

    async def _run(
        self,
        client: httpx.AsyncClient,
        repository: RepositoryIdentity,
        patterns: list[str],
    ) -> RunResult:
        upload_url, paths = await gather_or_cancel(
            locate_upload_endpoint(client, repository, self.settings.github_ref),
            resolve_asset_paths(patterns),
        )
        logger.info(
            "Resolved release %s in %s with %d assets",
            self.settings.github_ref,
            repository.full_name,
            len(paths),
        )
        if self._commands is not None:
            self._commands.debug(f"Expanded paths: {', '.join(paths)}")

        urls = await upload_assets(client, paths, upload_url)
        return RunResult(asset_paths=paths, download_urls=urls)


async def run_action(
    settings: Settings,
    commands: WorkflowCommands | None = None,
    client: httpx.AsyncClient | None = None,
) -> int:
    """Run one upload and report it as a GitHub Actions step.

    Returns the process exit code: 0 on success, 1 on failure.
    """
    commands = commands or WorkflowCommands(output_path=settings.github_output)
    set_run_id(uuid.uuid4().hex[:12])

    uploader = ReleaseAssetUploader(settings, client=client, commands=commands)
    try:
        result = await uploader.run()
    except (ReleaseUploaderError, httpx.HTTPError) as exc:
        logger.error("Run failed (%s): %s", type(exc).__name__, exc)
        commands.set_failed(str(exc))
        return commands.exit_code

    commands.set_output(OUTPUT_NAME, result.to_output())
    logger.info("Run succeeded, uploaded %d assets", len(result.download_urls))
    return commands.exit_code
