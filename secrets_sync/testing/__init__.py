"""secrets-sync testing utilities.

Provides an in-memory fake of the GitHub API and fixtures for testing
code that uses secrets-sync.
"""

from secrets_sync.testing.fixtures import (
    SAMPLE_PUBLIC_KEY,
    action_environ,
    create_repository,
)
from secrets_sync.testing.mock import BASE_URL, FakeGitHub, MockCall, MockResponse

__all__ = [
    # Fake API
    "FakeGitHub",
    "MockCall",
    "MockResponse",
    "BASE_URL",
    # Helper functions
    "action_environ",
    "create_repository",
    "SAMPLE_PUBLIC_KEY",
]
