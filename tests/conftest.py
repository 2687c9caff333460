from secrets_sync.testing.conftest import (  # noqa: F401
    fake_github,
    fake_github_with_repos,
    isolated_masks,
    sample_public_key,
    sample_repository,
)
