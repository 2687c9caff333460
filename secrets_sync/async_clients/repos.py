"""Async Repositories resource client."""

from typing import TYPE_CHECKING

from secrets_sync.types.repos import Repository

if TYPE_CHECKING:
    from secrets_sync.async_transport import AsyncHTTPTransport

DEFAULT_AFFILIATION = "owner,collaborator,organization_member"


class AsyncReposClient:
    """Async client for repository lookups."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the async repos client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def get(self, full_name: str) -> Repository:
        """
        Get repository information.

        Args:
            full_name: Repository in ``owner/name`` form

        Returns:
            Repository with its numeric id and archived flag

        Raises:
            NotFoundError: If the repository does not exist or is not visible
        """
        Repository(full_name=full_name)  # validates the owner/name shape
        data = await self.transport.request("GET", f"/repos/{full_name}")
        return Repository.from_api(data)

    async def list_for_authenticated_user(
        self,
        page: int = 1,
        per_page: int = 30,
        affiliation: str = DEFAULT_AFFILIATION,
    ) -> list[Repository]:
        """
        List one page of repositories visible to the authenticated identity.

        Args:
            page: 1-indexed page number
            per_page: Page size
            affiliation: Comma-separated affiliations to include

        Returns:
            List of Repository objects for that page (archived ones included)
        """
        data = await self.transport.request(
            "GET",
            "/user/repos",
            params={"affiliation": affiliation, "page": page, "per_page": per_page},
        )
        return [Repository.from_api(repo) for repo in data or []]
