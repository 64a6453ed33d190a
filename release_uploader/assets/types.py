"""Types for the assets module."""

from dataclasses import dataclass

ASSET_CONTENT_TYPE = "binary/octet-stream"


@dataclass(frozen=True)
class ResolvedAsset:
    """A file ready to be attached to a release.

    name is the final path segment and becomes the asset's display name.
    """

    path: str
    name: str
    size: int
    content_type: str = ASSET_CONTENT_TYPE

    def headers(self) -> dict[str, str]:
        return {
            "content-type": self.content_type,
            "content-length": str(self.size),
        }
