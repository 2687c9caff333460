"""secrets-sync - propagate secrets and variables to many GitHub repositories."""

from secrets_sync.action import main, run
from secrets_sync.async_client import AsyncGitHubClient
from secrets_sync.config import Config
from secrets_sync.dispatcher import build_units, dispatch
from secrets_sync.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BatchError,
    ConfigurationError,
    ConflictError,
    NotFoundError,
    RateLimitedError,
    SecretsSyncError,
    ServerError,
    ValidationError,
)
from secrets_sync.keys import PublicKeyCache
from secrets_sync.logging import configure_logging, get_logger
from secrets_sync.operations import SecretOperations, VariableOperations
from secrets_sync.patterns import match
from secrets_sync.resolver import RepositoryResolver
from secrets_sync.transport import RetryConfig
from secrets_sync.types import AuditRecord, BatchResult, PublicKey, Repository, UnitOfWork

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Entry points
    "main",
    "run",
    "Config",
    # Client
    "AsyncGitHubClient",
    "RetryConfig",
    # Engine
    "RepositoryResolver",
    "PublicKeyCache",
    "SecretOperations",
    "VariableOperations",
    "build_units",
    "dispatch",
    "match",
    # Types
    "Repository",
    "PublicKey",
    "AuditRecord",
    "UnitOfWork",
    "BatchResult",
    # Exceptions
    "SecretsSyncError",
    "ConfigurationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "RateLimitedError",
    "ValidationError",
    "ServerError",
    "BatchError",
    # Logging
    "configure_logging",
    "get_logger",
]
