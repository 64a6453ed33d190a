"""Assets module: path resolution and upload.

Public API:
    parse_patterns(raw, fmt) -> list[str]
    resolve_asset_paths(patterns) -> list[str]
    upload_assets(client, paths, upload_url) -> list[str]
"""

from release_uploader.assets.resolver import parse_patterns, resolve_asset_paths
from release_uploader.assets.uploader import upload_asset, upload_assets

__all__ = ["parse_patterns", "resolve_asset_paths", "upload_asset", "upload_assets"]
