"""Repository-related data models."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Repository:
    """A target repository, identified by its ``owner/name`` full name."""

    full_name: str
    id: int | None = None  # required only for environment-scoped endpoints
    archived: bool = False

    def __post_init__(self) -> None:
        owner, sep, name = self.full_name.partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError(
                f"Repository name must look like 'owner/name', got {self.full_name!r}"
            )

    @property
    def owner(self) -> str:
        return self.full_name.split("/", 1)[0]

    @property
    def name(self) -> str:
        return self.full_name.split("/", 1)[1]

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Repository":
        """Build a Repository from a GitHub repository payload."""
        return cls(
            full_name=data["full_name"],
            id=data.get("id"),
            archived=bool(data.get("archived", False)),
        )


@dataclass(frozen=True)
class PublicKey:
    """Platform-issued sealing key for a repository or environment secret store."""

    key_id: str
    key: str  # base64-encoded curve25519 public key

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "PublicKey":
        return cls(key_id=str(data["key_id"]), key=data["key"])
