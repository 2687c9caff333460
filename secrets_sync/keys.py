"""
Public-key cache.

Sealing keys are fetched at most once per scope and run. A scope is the
repository together with the environment and the secret-store target:
an environment's key is never served for the repository's default store,
nor the other way round.
"""

from typing import TYPE_CHECKING

from secrets_sync.logging import get_logger
from secrets_sync.types.repos import PublicKey, Repository

if TYPE_CHECKING:
    from secrets_sync.async_clients.secrets import AsyncSecretsClient

logger = get_logger()

CacheKey = tuple[str, str, str]


class PublicKeyCache:
    """
    Run-scoped cache of secret-store public keys.

    Concurrent misses for the same scope may both fetch; the second write
    overwrites the first with an equivalent key.
    """

    def __init__(self, secrets: "AsyncSecretsClient") -> None:
        """
        Initialize an empty cache.

        Args:
            secrets: Secrets client used to fetch keys on a miss
        """
        self._secrets = secrets
        self._keys: dict[CacheKey, PublicKey] = {}

    @staticmethod
    def cache_key(repo: Repository, environment: str | None, target: str) -> CacheKey:
        if environment:
            # Environment stores only exist for actions; target does not vary the key
            return (repo.full_name, environment, "")
        return (repo.full_name, "", target)

    async def get_or_fetch(
        self,
        repo: Repository,
        environment: str | None = None,
        target: str = "actions",
    ) -> PublicKey:
        """
        Return the key for a scope, fetching it on a miss.

        Args:
            repo: Target repository
            environment: Environment name; empty for repository scope
            target: Secret-store target

        Returns:
            The cached or freshly fetched PublicKey
        """
        key = self.cache_key(repo, environment, target)
        cached = self._keys.get(key)
        if cached is not None:
            return cached

        logger.debug(f"Fetching public key for {repo.full_name} {key[1] or key[2]}")
        public_key = await self._secrets.get_public_key(repo, environment, target)
        self._keys[key] = public_key
        return public_key

    def clear(self) -> None:
        """Drop every cached key."""
        self._keys.clear()

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return key in self._keys
