"""secrets-sync async resource clients."""

from secrets_sync.async_clients.repos import AsyncReposClient
from secrets_sync.async_clients.secrets import SECRET_TARGETS, AsyncSecretsClient
from secrets_sync.async_clients.variables import AsyncVariablesClient

__all__ = [
    "AsyncReposClient",
    "AsyncSecretsClient",
    "AsyncVariablesClient",
    "SECRET_TARGETS",
]
