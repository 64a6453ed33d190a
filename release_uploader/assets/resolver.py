"""Expand the asset_paths input into a concrete list of files.

Two input formats are supported and chosen explicitly by configuration:

  lines: one path or glob pattern per line:
      dist/app.zip
      dist/*.tar.gz

  json: a JSON array of paths or glob patterns:
      ["dist/app.zip", "dist/*.tar.gz"]

Patterns are expanded in the order given. Matches within one glob are
sorted so repeated runs upload in the same order. A file matched by more
than one pattern is kept at its first position only.
"""

import asyncio
import glob
import json
import logging
import os
import re

from release_uploader.errors import InvalidPatternSetError, NoAssetsFoundError

logger = logging.getLogger(__name__)

# Same magic characters glob itself recognises
_GLOB_MAGIC = re.compile(r"[*?[]")

PATTERN_FORMATS = ("lines", "json")


def parse_patterns(raw: str, fmt: str = "lines") -> list[str]:
    """Parse the raw asset_paths input into a list of patterns.

    Raises:
        InvalidPatternSetError: If the input is malformed for *fmt* or
            contains no patterns at all.
    """
    if fmt == "lines":
        patterns = [line.strip() for line in raw.splitlines()]
    elif fmt == "json":
        patterns = _parse_json_patterns(raw)
    else:
        raise InvalidPatternSetError(
            f"Unknown asset_paths format '{fmt}' (expected one of: {', '.join(PATTERN_FORMATS)})"
        )

    patterns = [p for p in patterns if p]
    if not patterns:
        raise InvalidPatternSetError("asset_paths must contain at least one path")
    return patterns


def _parse_json_patterns(raw: str) -> list[str]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidPatternSetError(f"asset_paths is not valid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise InvalidPatternSetError(
            f"asset_paths must be a JSON array of strings (got {type(data).__name__})"
        )
    for item in data:
        if not isinstance(item, str):
            raise InvalidPatternSetError(
                f"asset_paths entries must be strings (got {item!r})"
            )
    return [item.strip() for item in data]


def is_glob(pattern: str) -> bool:
    return _GLOB_MAGIC.search(pattern) is not None


def expand_pattern(pattern: str) -> list[str]:
    """Return the regular files a single pattern names, sorted.

    Directories never match. `**` matches across directory levels.
    """
    if not is_glob(pattern):
        return [pattern] if os.path.isfile(pattern) else []
    return sorted(p for p in glob.glob(pattern, recursive=True) if os.path.isfile(p))


def expand_patterns(patterns: list[str]) -> list[str]:
    """Expand every pattern and concatenate, dropping duplicates."""
    resolved: dict[str, None] = {}
    for pattern in patterns:
        matches = expand_pattern(pattern)
        if not matches:
            logger.warning("No files matched %s", pattern)
        for path in matches:
            resolved.setdefault(path, None)
    return list(resolved)


async def resolve_asset_paths(patterns: list[str]) -> list[str]:
    """Expand *patterns* against the filesystem off the event loop.

    Raises:
        NoAssetsFoundError: If no pattern matched any file.
    """
    paths = await asyncio.to_thread(expand_patterns, patterns)
    if not paths:
        raise NoAssetsFoundError(patterns)
    logger.debug("Expanded paths: %s", paths)
    return paths
