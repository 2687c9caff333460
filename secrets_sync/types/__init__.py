"""secrets-sync type definitions.

This module exports all data model types used by the package.
"""

from secrets_sync.types.audit import (
    DELETE,
    SECRET,
    SET,
    VARIABLE,
    AuditRecord,
    BatchResult,
    UnitFailure,
    UnitOfWork,
)
from secrets_sync.types.repos import PublicKey, Repository

__all__ = [
    # Repository types
    "Repository",
    "PublicKey",
    # Audit and batch types
    "AuditRecord",
    "UnitOfWork",
    "UnitFailure",
    "BatchResult",
    # Kinds and actions
    "SECRET",
    "VARIABLE",
    "SET",
    "DELETE",
]
