"""
Pytest plugin for secrets-sync testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
discovered by pytest. To use them, add this to your conftest.py:

    pytest_plugins = ["secrets_sync.testing.conftest"]
"""

from secrets_sync.testing.fixtures import (
    fake_github,
    fake_github_with_repos,
    isolated_masks,
    sample_public_key,
    sample_repository,
)

__all__ = [
    "fake_github",
    "fake_github_with_repos",
    "isolated_masks",
    "sample_public_key",
    "sample_repository",
]
