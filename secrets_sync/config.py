"""
Run configuration for secrets-sync.

Loaded from the action inputs the pipeline passes as ``INPUT_*``
environment variables.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from secrets_sync.async_clients.secrets import SECRET_TARGETS
from secrets_sync.exceptions import ConfigurationError
from secrets_sync.logging import get_logger
from secrets_sync.workflow import get_boolean_input, get_input, get_multiline_input

logger = get_logger()

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_RETRIES = 3
DEFAULT_CONCURRENCY = 10
DEFAULT_TARGET = "actions"


@dataclass
class Config:
    """Validated run configuration."""

    github_token: str = field(repr=False)
    repositories: list[str]
    secrets: list[str] = field(default_factory=list)
    variables: list[str] = field(default_factory=list)
    github_api_url: str = DEFAULT_API_URL
    repositories_list_regex: bool = False
    dry_run: bool = False
    retries: int = DEFAULT_RETRIES
    concurrency: int = DEFAULT_CONCURRENCY
    run_delete: bool = False
    environment: str = ""
    target: str = DEFAULT_TARGET

    def __post_init__(self) -> None:
        self.github_api_url = self.github_api_url.rstrip("/")
        self.validate()

    def validate(self) -> None:
        """
        Check the configuration for consistency.

        Raises:
            ConfigurationError: On any invalid or contradictory setting
        """
        if not self.github_token:
            raise ConfigurationError("GITHUB_TOKEN is required")
        if not self.repositories:
            raise ConfigurationError("REPOSITORIES is required")
        if not self.secrets and not self.variables:
            raise ConfigurationError("At least one of SECRETS or VARIABLES is required")
        if self.concurrency < 1:
            raise ConfigurationError(f"CONCURRENCY must be at least 1, got {self.concurrency}")
        if self.retries < 0:
            raise ConfigurationError(f"RETRIES must not be negative, got {self.retries}")
        if self.target not in SECRET_TARGETS:
            raise ConfigurationError(
                f"Unsupported TARGET {self.target!r}; expected one of {', '.join(SECRET_TARGETS)}"
            )
        if self.variables and self.target != DEFAULT_TARGET:
            raise ConfigurationError(
                f"VARIABLES are only supported for TARGET 'actions', not {self.target!r}"
            )
        if self.environment and self.target != DEFAULT_TARGET:
            raise ConfigurationError(
                f"ENVIRONMENT is only supported for TARGET 'actions', not {self.target!r}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Config":
        """
        Create a configuration from action inputs.

        Inputs:
            GITHUB_TOKEN: Token with access to the target repositories (required)
            REPOSITORIES: Newline-separated names or patterns (required)
            SECRETS / VARIABLES: Newline-separated name patterns (one required)
            GITHUB_API_URL: API base URL (falls back to env GITHUB_API_URL)
            REPOSITORIES_LIST_REGEX, DRY_RUN, DELETE: flags ("1"/"true")
            RETRIES, CONCURRENCY: integers
            ENVIRONMENT: deployment environment scope
            TARGET: "actions", "dependabot" or "codespaces"

        Args:
            environ: Environment mapping (default: os.environ)

        Returns:
            Validated Config

        Raises:
            ConfigurationError: If required inputs are missing or invalid
        """
        env = os.environ if environ is None else environ

        config = cls(
            github_token=get_input("GITHUB_TOKEN", required=True, environ=env),
            repositories=get_multiline_input("REPOSITORIES", required=True, environ=env),
            secrets=get_multiline_input("SECRETS", environ=env),
            variables=get_multiline_input("VARIABLES", environ=env),
            github_api_url=(
                get_input("GITHUB_API_URL", environ=env)
                or env.get("GITHUB_API_URL", "")
                or DEFAULT_API_URL
            ),
            repositories_list_regex=get_boolean_input("REPOSITORIES_LIST_REGEX", environ=env),
            dry_run=get_boolean_input("DRY_RUN", environ=env),
            retries=_int_input("RETRIES", DEFAULT_RETRIES, env),
            concurrency=_int_input("CONCURRENCY", DEFAULT_CONCURRENCY, env),
            run_delete=(
                get_boolean_input("DELETE", environ=env)
                or get_boolean_input("RUN_DELETE", environ=env)
            ),
            environment=get_input("ENVIRONMENT", environ=env),
            target=get_input("TARGET", environ=env) or DEFAULT_TARGET,
        )

        if config.dry_run:
            logger.info("[DRY_RUN='true'] No changes will be written to secrets or variables")

        return config


def _int_input(name: str, default: int, environ: Mapping[str, str]) -> int:
    raw = get_input(name, environ=environ)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
