"""Error taxonomy for a release upload run.

Every error is terminal: the run stops at the first one and its message
becomes the failure reason reported to the workflow.
"""


class ReleaseUploaderError(Exception):
    """Base class for all errors raised during a run."""


class ConfigurationError(ReleaseUploaderError):
    """Raised when required settings are missing or malformed."""


class InvalidReferenceError(ReleaseUploaderError):
    """Raised when the triggering ref does not point at a tag."""


class ReleaseNotFoundError(ReleaseUploaderError):
    """Raised when no release exists for the derived tag."""

    def __init__(self, tag: str, message: str | None = None):
        self.tag = tag
        super().__init__(message or f"Release not found for tag '{tag}'")


class InvalidPatternSetError(ReleaseUploaderError):
    """Raised when the asset_paths input cannot be parsed into patterns."""


class NoAssetsFoundError(ReleaseUploaderError):
    """Raised when the pattern set expands to zero files."""

    def __init__(self, patterns: list[str]):
        self.patterns = patterns
        super().__init__(
            f"Could not find any artifacts with paths: {', '.join(patterns)}"
        )


class AssetReadError(ReleaseUploaderError):
    """Raised when an asset file cannot be opened or read."""

    def __init__(self, path: str, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Could not read asset '{path}': {cause}")


class UploadTransportError(ReleaseUploaderError):
    """Raised when a GitHub API request fails or returns a non-success status.

    Carries the HTTP status code when one was received.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
