"""Audit and batch data models."""

from dataclasses import dataclass, field
from typing import Any

from secrets_sync.types.repos import Repository

SECRET = "secret"
VARIABLE = "variable"

SET = "set"
DELETE = "delete"


@dataclass(frozen=True)
class AuditRecord:
    """
    A non-sensitive summary of one performed (or simulated) mutation.

    ``value_hash`` is a one-way hash of the plaintext; neither the plaintext
    nor the ciphertext is ever stored here.
    """

    repository: str
    target: str  # "actions", "dependabot" or "codespaces"
    kind: str  # "secret" or "variable"
    action: str  # "set" or "delete"
    name: str
    value_hash: str
    environment: str | None
    dry_run: bool

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the record to a JSON-serialisable dictionary.

        Returns:
            Dictionary with the keys emitted in the ``audit_log`` output
        """
        return {
            "repository": self.repository,
            "target": self.target,
            "kind": self.kind,
            "action": self.action,
            "name": self.name,
            "value_hash": self.value_hash,
            "environment": self.environment,
            "dry_run": self.dry_run,
        }


@dataclass(frozen=True)
class UnitOfWork:
    """One create/update/delete of one named value on one repository."""

    repository: Repository
    name: str
    value: str = field(repr=False)
    environment: str | None = None

    def __post_init__(self) -> None:
        if self.environment and self.repository.id is None:
            raise ValueError(
                f"{self.repository.full_name}: a numeric repository id is required "
                f"for environment '{self.environment}'"
            )

    def describe(self) -> str:
        scope = f" ({self.environment})" if self.environment else ""
        return f"{self.name} on {self.repository.full_name}{scope}"


@dataclass
class UnitFailure:
    """A unit of work that raised, with the exception it raised."""

    unit: UnitOfWork
    error: BaseException

    def __str__(self) -> str:
        return f"{self.unit.describe()}: {self.error}"


@dataclass
class BatchResult:
    """Outcome of a dispatched batch once every unit has settled."""

    records: list[AuditRecord] = field(default_factory=list)
    failures: list[UnitFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
