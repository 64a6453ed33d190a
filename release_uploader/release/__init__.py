"""Release lookup: tag derivation and upload endpoint resolution.

Submodules are imported directly (release_uploader.release.locator);
core.config depends on release.types, so nothing is re-exported here.
"""
