"""Command-line entry point, as invoked by the action's runs step.

Every value has an environment fallback so the action can run the
command with no arguments; options exist for local use.
"""

from __future__ import annotations

import asyncio

import typer
from pydantic import ValidationError

from release_uploader.actions import WorkflowCommands
from release_uploader.core.config import Settings
from release_uploader.core.logging import configure_structlog
from release_uploader.orchestrator import run_action

app = typer.Typer(
    name="release-uploader",
    help="Upload build artifacts to the GitHub release for the triggering tag.",
    add_completion=False,
)


@app.command()
def upload(
    asset_paths: str | None = typer.Option(
        None, "--asset-paths", "-a", help="Paths or glob patterns (overrides INPUT_ASSET_PATHS)"
    ),
    asset_paths_format: str | None = typer.Option(
        None, "--format", "-f", help="How asset_paths is encoded: lines or json"
    ),
    ref: str | None = typer.Option(
        None, "--ref", help="Triggering ref, e.g. refs/tags/v1.2.3 (overrides GITHUB_REF)"
    ),
    repository: str | None = typer.Option(
        None, "--repository", "-r", help="owner/name (overrides GITHUB_REPOSITORY)"
    ),
    debug: bool = typer.Option(False, "--debug", help="Verbose console logging"),
) -> None:
    """
    Upload assets and write the browser_download_urls output.

    Examples:
        release-uploader
        release-uploader -a 'dist/*.whl' --ref refs/tags/v1.0.0 -r octo/app
    """
    overrides = {
        "asset_paths": asset_paths,
        "asset_paths_format": asset_paths_format,
        "github_ref": ref,
        "github_repository": repository,
    }
    try:
        settings = Settings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as exc:
        commands = WorkflowCommands()
        commands.set_failed(describe_validation_error(exc))
        raise typer.Exit(code=commands.exit_code)
    if debug:
        settings.debug = True

    configure_structlog(debug=settings.debug)
    exit_code = asyncio.run(run_action(settings))
    raise typer.Exit(code=exit_code)


def describe_validation_error(exc: ValidationError) -> str:
    """One-line summary of every invalid setting, e.g. for a bad input value."""
    problems = [
        f"{'.'.join(str(part) for part in error['loc']) or 'settings'}: {error['msg']}"
        for error in exc.errors()
    ]
    return f"Invalid configuration: {'; '.join(problems)}"


def main() -> None:
    app()
