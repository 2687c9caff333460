"""
Run orchestration and the action entry point.

``run`` discovers values, resolves repositories and dispatches every
repository × value unit. ``main`` wraps it for the pipeline: it reports
failures through workflow commands and an exit code and never raises.
"""

import asyncio
import json
import os
from collections.abc import Mapping

import httpx

from secrets_sync.async_client import AsyncGitHubClient
from secrets_sync.config import Config
from secrets_sync.dispatcher import build_units, dispatch
from secrets_sync.exceptions import BatchError, ConfigurationError, SecretsSyncError
from secrets_sync.keys import PublicKeyCache
from secrets_sync.logging import get_logger
from secrets_sync.operations import SecretOperations, VariableOperations
from secrets_sync.resolver import RepositoryResolver
from secrets_sync.types.audit import AuditRecord, BatchResult, UnitOfWork
from secrets_sync.values import discover
from secrets_sync.workflow import set_failed, set_output

logger = get_logger()

AUDIT_LOG_OUTPUT = "audit_log"


async def run(
    config: Config,
    environ: Mapping[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> BatchResult:
    """
    Propagate the configured secrets and variables.

    Setup problems (no matching values or repositories, unknown
    repositories) raise before any write is attempted. Failures of single
    units are collected in the result instead.

    Args:
        config: Run configuration
        environ: Environment to discover values from (default: os.environ)
        transport: Optional httpx transport, for tests

    Returns:
        BatchResult over all secret and variable units

    Raises:
        ConfigurationError: If values or repositories match nothing
        SecretsSyncError: If repository resolution fails
    """
    env = os.environ if environ is None else environ

    secrets = discover(config.secrets, env) if config.secrets else {}
    if config.secrets and not secrets:
        raise ConfigurationError(f'Secrets: no matches with "{", ".join(config.secrets)}"')

    variables = discover(config.variables, env) if config.variables else {}
    if config.variables and not variables:
        raise ConfigurationError(f'Variables: no matches with "{", ".join(config.variables)}"')

    async with AsyncGitHubClient.from_config(config, transport=transport) as client:
        resolver = RepositoryResolver(client.repos)
        repos = await resolver.resolve(config.repositories, config.repositories_list_regex)

        logger.info(
            json.dumps(
                {
                    "REPOSITORIES": config.repositories,
                    "REPOSITORIES_LIST_REGEX": config.repositories_list_regex,
                    "SECRETS": config.secrets,
                    "VARIABLES": config.variables,
                    "DRY_RUN": config.dry_run,
                    "DELETE": config.run_delete,
                    "ENVIRONMENT": config.environment,
                    "TARGET": config.target,
                    "FOUND_REPOS": [repo.full_name for repo in repos],
                    "FOUND_SECRETS": list(secrets),
                    "FOUND_VARIABLES": list(variables),
                },
                indent=2,
            )
        )

        result = BatchResult()

        if secrets:
            secret_ops = SecretOperations(client.secrets, PublicKeyCache(client.secrets))

            async def sync_secret(unit: UnitOfWork) -> AuditRecord:
                if config.run_delete:
                    return await secret_ops.delete(
                        unit.repository,
                        unit.name,
                        environment=unit.environment,
                        dry_run=config.dry_run,
                        target=config.target,
                        plaintext=unit.value,
                    )
                return await secret_ops.upsert(
                    unit.repository,
                    unit.name,
                    unit.value,
                    environment=unit.environment,
                    dry_run=config.dry_run,
                    target=config.target,
                )

            _merge(
                result,
                await dispatch(
                    build_units(repos, secrets, config.environment),
                    sync_secret,
                    config.concurrency,
                ),
            )

        if variables:
            variable_ops = VariableOperations(client.variables)

            async def sync_variable(unit: UnitOfWork) -> AuditRecord:
                if config.run_delete:
                    return await variable_ops.delete(
                        unit.repository,
                        unit.name,
                        environment=unit.environment,
                        dry_run=config.dry_run,
                        plaintext=unit.value,
                    )
                return await variable_ops.upsert(
                    unit.repository,
                    unit.name,
                    unit.value,
                    environment=unit.environment,
                    dry_run=config.dry_run,
                )

            _merge(
                result,
                await dispatch(
                    build_units(repos, variables, config.environment),
                    sync_variable,
                    config.concurrency,
                ),
            )

    return result


def _merge(into: BatchResult, other: BatchResult) -> None:
    into.records.extend(other.records)
    into.failures.extend(other.failures)


def main(
    environ: Mapping[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    """
    Action entry point.

    Args:
        environ: Environment holding the action inputs (default: os.environ)
        transport: Optional httpx transport, for tests

    Returns:
        Process exit code: 0 on success, 1 when the run failed
    """
    try:
        config = Config.from_env(environ)
        result = asyncio.run(run(config, environ, transport))

        set_output(
            AUDIT_LOG_OUTPUT,
            json.dumps([record.to_dict() for record in result.records]),
            environ,
        )

        if not result.ok:
            raise BatchError(result.failures)
    except SecretsSyncError as e:
        set_failed(str(e))
        return 1
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        set_failed(f"{e.__class__.__name__}: {e}")
        return 1

    logger.info(f"Completed {len(result.records)} operation(s)")
    return 0
