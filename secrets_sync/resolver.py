"""
Repository resolution.

Turns the configured repository list into concrete repositories, either by
looking each name up verbatim or by listing every repository visible to
the token and filtering by pattern.
"""

from typing import TYPE_CHECKING

from secrets_sync.async_clients.repos import DEFAULT_AFFILIATION
from secrets_sync.exceptions import ConfigurationError
from secrets_sync.logging import get_logger
from secrets_sync.patterns import compile_patterns, matches_any
from secrets_sync.types.repos import Repository

if TYPE_CHECKING:
    from secrets_sync.async_clients.repos import AsyncReposClient

logger = get_logger()

DEFAULT_PAGE_SIZE = 30


class RepositoryResolver:
    """Resolves repository names or patterns into Repository records."""

    def __init__(
        self,
        repos: "AsyncReposClient",
        page_size: int = DEFAULT_PAGE_SIZE,
        affiliation: str = DEFAULT_AFFILIATION,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            repos: Repos client used for lookups and listing
            page_size: Page size for listing (default: 30)
            affiliation: Affiliations included when listing
        """
        if page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {page_size}")
        self.repos = repos
        self.page_size = page_size
        self.affiliation = affiliation

    async def resolve(self, patterns: list[str], regex: bool) -> list[Repository]:
        """
        Resolve the configured repositories.

        Args:
            patterns: Repository names (``owner/name``) or regular expressions
            regex: Treat entries as patterns against the listed repositories

        Returns:
            Non-archived repositories, never empty

        Raises:
            ConfigurationError: If nothing resolves, or a pattern is invalid
            NotFoundError: If a verbatim name does not exist
        """
        if regex:
            repos = await self.list_matching(patterns)
        else:
            repos = await self.lookup(patterns)

        if not repos:
            raise ConfigurationError(
                f'Repos: No matches with "{", ".join(patterns)}". Check your token and regex.'
            )
        return repos

    async def lookup(self, names: list[str]) -> list[Repository]:
        """
        Look up each name; lookup failures propagate.

        Archived repositories are dropped with a warning.
        """
        repos = []
        for full_name in dict.fromkeys(names):
            try:
                Repository(full_name=full_name)
            except ValueError as e:
                raise ConfigurationError(str(e)) from e
            repo = await self.repos.get(full_name)
            if repo.archived:
                logger.warning(f"Skipping archived repository {repo.full_name}")
                continue
            repos.append(repo)
        return repos

    async def list_matching(self, patterns: list[str]) -> list[Repository]:
        """List every visible repository and keep those matching a pattern."""
        compiled = compile_patterns(patterns)
        repos = await self.list_all()
        logger.info(f"Available repositories: {[r.full_name for r in repos]}")

        if not compiled:
            return []
        return [repo for repo in repos if matches_any(repo.full_name, compiled)]

    async def list_all(self) -> list[Repository]:
        """
        Page through the authenticated identity's repositories.

        Stops after the first page holding fewer than ``page_size`` entries.

        Returns:
            Non-archived repositories
        """
        repos: list[Repository] = []
        page = 1
        while True:
            batch = await self.repos.list_for_authenticated_user(
                page=page, per_page=self.page_size, affiliation=self.affiliation
            )
            repos.extend(batch)
            if len(batch) < self.page_size:
                break
            page += 1
        return [repo for repo in repos if not repo.archived]
