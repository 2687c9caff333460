"""
Upsert and delete of secrets and variables on one repository.

Every call returns an AuditRecord, including dry runs. Deleting a value
that is already absent succeeds; any other failure propagates.
"""

import asyncio
from typing import TYPE_CHECKING

from secrets_sync.crypto import hash_value, seal
from secrets_sync.exceptions import NotFoundError
from secrets_sync.logging import get_logger, log_audit_record
from secrets_sync.types.audit import DELETE, SECRET, SET, VARIABLE, AuditRecord
from secrets_sync.types.repos import Repository
from secrets_sync.workflow import add_mask

if TYPE_CHECKING:
    from secrets_sync.async_clients.secrets import AsyncSecretsClient
    from secrets_sync.async_clients.variables import AsyncVariablesClient
    from secrets_sync.keys import PublicKeyCache

logger = get_logger()


async def _record(
    repo: Repository,
    target: str,
    kind: str,
    action: str,
    name: str,
    plaintext: str | None,
    environment: str | None,
    dry_run: bool,
) -> AuditRecord:
    value_hash = ""
    if plaintext is not None:
        # PBKDF2 is CPU-bound; salted per repository so equal values do not correlate
        value_hash = await asyncio.to_thread(hash_value, plaintext, repo.full_name)
    record = AuditRecord(
        repository=repo.full_name,
        target=target,
        kind=kind,
        action=action,
        name=name,
        value_hash=value_hash,
        environment=environment or None,
        dry_run=dry_run,
    )
    log_audit_record(record)
    return record


class SecretOperations:
    """Create-or-update and delete of secrets."""

    def __init__(self, secrets: "AsyncSecretsClient", keys: "PublicKeyCache") -> None:
        """
        Args:
            secrets: Secrets resource client
            keys: Run-scoped public-key cache
        """
        self.secrets = secrets
        self.keys = keys

    async def upsert(
        self,
        repo: Repository,
        name: str,
        plaintext: str,
        environment: str | None = None,
        dry_run: bool = False,
        target: str = "actions",
    ) -> AuditRecord:
        """
        Seal a value with the scope's public key and write it.

        The platform call is itself create-or-update, so no existence check
        is made. With ``dry_run`` the key is still looked up but nothing is
        written.

        Args:
            repo: Target repository
            name: Secret name
            plaintext: Secret value; never sent unsealed
            environment: Environment name; empty for repository scope
            dry_run: Skip the write
            target: Secret-store target

        Returns:
            AuditRecord for the (simulated) write
        """
        public_key = await self.keys.get_or_fetch(repo, environment, target)
        logger.info(f"Set `{name} = ***` on {_describe(repo, environment)}")

        if not dry_run:
            encrypted_value = seal(plaintext, public_key.key)
            add_mask(encrypted_value)
            await self.secrets.create_or_update(
                repo,
                name,
                encrypted_value,
                public_key.key_id,
                environment=environment,
                target=target,
            )

        return await _record(repo, target, SECRET, SET, name, plaintext, environment, dry_run)

    async def delete(
        self,
        repo: Repository,
        name: str,
        environment: str | None = None,
        dry_run: bool = False,
        target: str = "actions",
        plaintext: str | None = None,
    ) -> AuditRecord:
        """
        Delete a secret; an absent secret counts as deleted.

        Args:
            repo: Target repository
            name: Secret name
            environment: Environment name; empty for repository scope
            dry_run: Skip the delete call
            target: Secret-store target
            plaintext: Value known locally, hashed into the record when given

        Returns:
            AuditRecord for the (simulated) delete
        """
        logger.info(f"Remove {name} from {_describe(repo, environment)}")

        if not dry_run:
            try:
                await self.secrets.delete(repo, name, environment=environment, target=target)
            except NotFoundError:
                logger.debug(f"{name} was already absent from {repo.full_name}")

        return await _record(repo, target, SECRET, DELETE, name, plaintext, environment, dry_run)


class VariableOperations:
    """
    Create/update and delete of Actions variables.

    Upsert probes for the variable and then creates or updates it. Two runs
    creating the same new variable at once can both see it missing; the
    later create then fails with a conflict.
    """

    target = "actions"

    def __init__(self, variables: "AsyncVariablesClient") -> None:
        self.variables = variables

    async def upsert(
        self,
        repo: Repository,
        name: str,
        plaintext: str,
        environment: str | None = None,
        dry_run: bool = False,
        target: str = "actions",
    ) -> AuditRecord:
        """
        Create the variable when the probe finds nothing, update it otherwise.

        With ``dry_run`` the probe still runs but nothing is written.

        Returns:
            AuditRecord for the (simulated) write
        """
        existing = await self.variables.get(repo, name, environment)
        verb = "Create" if existing is None else "Update"
        logger.info(f"{verb} variable `{name}` on {_describe(repo, environment)}")

        if not dry_run:
            if existing is None:
                await self.variables.create(repo, name, plaintext, environment)
            else:
                await self.variables.update(repo, name, plaintext, environment)

        return await _record(repo, target, VARIABLE, SET, name, plaintext, environment, dry_run)

    async def delete(
        self,
        repo: Repository,
        name: str,
        environment: str | None = None,
        dry_run: bool = False,
        target: str = "actions",
        plaintext: str | None = None,
    ) -> AuditRecord:
        """
        Delete a variable; an absent variable counts as deleted.

        Returns:
            AuditRecord for the (simulated) delete
        """
        logger.info(f"Remove variable {name} from {_describe(repo, environment)}")

        if not dry_run:
            try:
                await self.variables.delete(repo, name, environment)
            except NotFoundError:
                logger.debug(f"{name} was already absent from {repo.full_name}")

        return await _record(repo, target, VARIABLE, DELETE, name, plaintext, environment, dry_run)


def _describe(repo: Repository, environment: str | None) -> str:
    if environment:
        return f"{repo.full_name} (environment {environment})"
    return repo.full_name
