from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from release_uploader.errors import ConfigurationError
from release_uploader.release.types import RepositoryIdentity

GITHUB_API_BASE = "https://api.github.com"


class Settings(BaseSettings):
    """Run settings loaded from the GitHub Actions environment.

    Workflow inputs arrive as ``INPUT_<NAME>`` variables; the triggering
    context (repository, ref) and the API token come from the variables
    the runner sets for every job.

    Accepted asset_paths formats
    ────────────────────────────
    • lines  newline-separated paths or glob patterns (default)
    • json   a JSON array of path strings, e.g. ["dist/*.zip"]

    The format is chosen explicitly; the value is never sniffed.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    # Workflow inputs
    asset_paths: str = Field(
        default="",
        validation_alias=AliasChoices("INPUT_ASSET_PATHS", "asset_paths"),
    )
    asset_paths_format: Literal["lines", "json"] = Field(
        default="lines",
        validation_alias=AliasChoices("INPUT_ASSET_PATHS_FORMAT", "asset_paths_format"),
    )

    # Triggering context
    github_repository: str = ""
    github_ref: str = ""

    # Token for the REST API. The default GITHUB_TOKEN needs
    # `contents: write` on the workflow.
    github_token: str = ""
    github_api_url: str = GITHUB_API_BASE

    # File the runner collects step outputs from. Empty outside Actions.
    github_output: str = ""

    # Seconds; applies to connect, read and write of every request.
    upload_timeout: float = 300.0

    debug: bool = Field(
        default=False,
        validation_alias=AliasChoices("RUNNER_DEBUG", "debug"),
    )

    @field_validator("asset_paths_format", mode="before")
    @classmethod
    def normalise_format(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip().lower() or "lines"
        return v

    @field_validator("github_api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def repository(self) -> RepositoryIdentity:
        return RepositoryIdentity.parse(self.github_repository)

    def check_required(self) -> None:
        """Raise ConfigurationError naming every missing required value."""
        missing = [
            env_name
            for env_name, value in (
                ("GITHUB_TOKEN", self.github_token),
                ("GITHUB_REPOSITORY", self.github_repository),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required environment: {', '.join(missing)}"
            )


def get_settings() -> Settings:
    return Settings()
