"""Types for the release module."""

from dataclasses import dataclass

from release_uploader.errors import ConfigurationError


@dataclass(frozen=True)
class RepositoryIdentity:
    """Owner and name of the repository that owns the release."""

    owner: str
    name: str

    @classmethod
    def parse(cls, full_name: str) -> "RepositoryIdentity":
        """Build an identity from an ``owner/name`` string."""
        owner, sep, name = full_name.strip().partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ConfigurationError(
                f"Repository must be in 'owner/name' form (got '{full_name}')"
            )
        return cls(owner=owner, name=name)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"
