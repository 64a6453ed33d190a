"""Upload build artifacts to a GitHub release.

Public API:
    ReleaseAssetUploader(settings).run() -> RunResult
    run_action(settings) -> int
"""

__version__ = "0.1.0"
