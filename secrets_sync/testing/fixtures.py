"""
Pytest fixtures for secrets-sync testing.

Provides common fixtures for testing code that drives secrets-sync against
the in-memory fake API.
"""

from collections.abc import Generator

import pytest

from secrets_sync.logging import clear_masks
from secrets_sync.testing.mock import FakeGitHub
from secrets_sync.types.repos import PublicKey, Repository

# A valid curve25519 public key
SAMPLE_PUBLIC_KEY = "HRkzRZD1+duhfvNvY8eiCPb+ihIjbvkvRyiehJCs8Vc="


def create_repository(
    full_name: str = "octo-org/hello-world",
    id: int | None = 1296269,
    archived: bool = False,
) -> Repository:
    """Create a Repository with sensible defaults."""
    return Repository(full_name=full_name, id=id, archived=archived)


def action_environ(**inputs: str) -> dict[str, str]:
    """
    Build an environment holding action inputs.

    Example:
        ```python
        env = action_environ(GITHUB_TOKEN="t", REPOSITORIES="octo/a", SECRETS="FOO")
        assert env["INPUT_GITHUB_TOKEN"] == "t"
        ```
    """
    return {f"INPUT_{name.upper()}": value for name, value in inputs.items()}


@pytest.fixture
def fake_github() -> Generator[FakeGitHub, None, None]:
    """
    Provide an empty FakeGitHub.

    Example:
        ```python
        def test_my_feature(fake_github):
            fake_github.add_repository("octo/a")
            ...
            assert fake_github.was_called("PUT")
        ```
    """
    fake = FakeGitHub()
    yield fake
    fake.reset()


@pytest.fixture
def fake_github_with_repos(fake_github: FakeGitHub) -> FakeGitHub:
    """Provide a FakeGitHub holding ``org/a`` and ``org/b``."""
    fake_github.add_repository("org/a")
    fake_github.add_repository("org/b")
    return fake_github


@pytest.fixture
def sample_repository() -> Repository:
    return create_repository()


@pytest.fixture
def sample_public_key() -> PublicKey:
    return PublicKey(key_id="1234", key=SAMPLE_PUBLIC_KEY)


@pytest.fixture(autouse=True)
def isolated_masks() -> Generator[None, None, None]:
    """Forget values masked by one test before the next one runs."""
    yield
    clear_masks()
