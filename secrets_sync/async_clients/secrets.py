"""Async Secrets resource client.

Covers repository secrets for each secret-store target and environment
secrets, which live under the numeric repository id.
"""

from typing import TYPE_CHECKING
from urllib.parse import quote

from secrets_sync.types.repos import PublicKey, Repository

if TYPE_CHECKING:
    from secrets_sync.async_transport import AsyncHTTPTransport

SECRET_TARGETS = ("actions", "dependabot", "codespaces")


def secrets_path(repo: Repository, environment: str | None, target: str) -> str:
    """
    Base path of the secret store addressed by a scope.

    Args:
        repo: Target repository
        environment: Deployment environment name; empty for repository scope
        target: Secret-store target ("actions", "dependabot", "codespaces")

    Returns:
        API path without a trailing slash

    Raises:
        ValueError: On an unknown target, or an environment scope without a
            repository id
    """
    if environment:
        if repo.id is None:
            raise ValueError(
                f"{repo.full_name}: environment secrets need the numeric repository id"
            )
        return f"/repositories/{repo.id}/environments/{quote(environment, safe='')}/secrets"
    if target not in SECRET_TARGETS:
        raise ValueError(f"Unsupported secret target: {target!r}")
    return f"/repos/{repo.full_name}/{target}/secrets"


class AsyncSecretsClient:
    """Async client for secret lifecycle operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the async secrets client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def get_public_key(
        self,
        repo: Repository,
        environment: str | None = None,
        target: str = "actions",
    ) -> PublicKey:
        """
        Fetch the sealing key of a secret store.

        Args:
            repo: Target repository
            environment: Environment name; empty for repository scope
            target: Secret-store target

        Returns:
            PublicKey with key_id and base64 key
        """
        data = await self.transport.request(
            "GET", f"{secrets_path(repo, environment, target)}/public-key"
        )
        return PublicKey.from_api(data)

    async def create_or_update(
        self,
        repo: Repository,
        name: str,
        encrypted_value: str,
        key_id: str,
        environment: str | None = None,
        target: str = "actions",
    ) -> None:
        """
        Create or update a secret with an already sealed value.

        Args:
            repo: Target repository
            name: Secret name
            encrypted_value: Base64 sealed-box ciphertext
            key_id: Identifier of the key the value was sealed with
            environment: Environment name; empty for repository scope
            target: Secret-store target
        """
        await self.transport.request(
            "PUT",
            f"{secrets_path(repo, environment, target)}/{quote(name, safe='')}",
            body={"encrypted_value": encrypted_value, "key_id": key_id},
        )

    async def delete(
        self,
        repo: Repository,
        name: str,
        environment: str | None = None,
        target: str = "actions",
    ) -> None:
        """
        Delete a secret.

        Raises:
            NotFoundError: If the secret does not exist
        """
        await self.transport.request(
            "DELETE", f"{secrets_path(repo, environment, target)}/{quote(name, safe='')}"
        )
