"""Async Variables resource client.

Actions variables have no single create-or-update call: a variable is
created with POST on the collection and updated with PATCH on the item.
"""

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from secrets_sync.exceptions import NotFoundError
from secrets_sync.types.repos import Repository

if TYPE_CHECKING:
    from secrets_sync.async_transport import AsyncHTTPTransport


def variables_path(repo: Repository, environment: str | None) -> str:
    """Base path of the variable store for a repository or environment."""
    if environment:
        if repo.id is None:
            raise ValueError(
                f"{repo.full_name}: environment variables need the numeric repository id"
            )
        return f"/repositories/{repo.id}/environments/{quote(environment, safe='')}/variables"
    return f"/repos/{repo.full_name}/actions/variables"


class AsyncVariablesClient:
    """Async client for variable lifecycle operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the async variables client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def get(
        self, repo: Repository, name: str, environment: str | None = None
    ) -> dict[str, Any] | None:
        """
        Probe for a variable.

        Args:
            repo: Target repository
            name: Variable name
            environment: Environment name; empty for repository scope

        Returns:
            The variable payload, or None when it does not exist
        """
        try:
            return await self.transport.request(
                "GET", f"{variables_path(repo, environment)}/{quote(name, safe='')}"
            )
        except NotFoundError:
            return None

    async def create(
        self, repo: Repository, name: str, value: str, environment: str | None = None
    ) -> None:
        """Create a variable that does not exist yet."""
        await self.transport.request(
            "POST",
            variables_path(repo, environment),
            body={"name": name, "value": value},
        )

    async def update(
        self, repo: Repository, name: str, value: str, environment: str | None = None
    ) -> None:
        """Update an existing variable."""
        await self.transport.request(
            "PATCH",
            f"{variables_path(repo, environment)}/{quote(name, safe='')}",
            body={"name": name, "value": value},
        )

    async def delete(
        self, repo: Repository, name: str, environment: str | None = None
    ) -> None:
        """
        Delete a variable.

        Raises:
            NotFoundError: If the variable does not exist
        """
        await self.transport.request(
            "DELETE", f"{variables_path(repo, environment)}/{quote(name, safe='')}"
        )
