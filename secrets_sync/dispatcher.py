"""
Bounded-concurrency fan-out of units of work.

All units run on the current event loop with at most ``concurrency`` in
flight. A failing unit never cancels its siblings; the batch settles only
once every unit has finished or failed.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Mapping

from secrets_sync.logging import get_logger
from secrets_sync.types.audit import AuditRecord, BatchResult, UnitFailure, UnitOfWork
from secrets_sync.types.repos import Repository

logger = get_logger()

Work = Callable[[UnitOfWork], Awaitable[AuditRecord]]


def build_units(
    repos: Iterable[Repository],
    values: Mapping[str, str],
    environment: str | None = None,
) -> list[UnitOfWork]:
    """Cross every repository with every named value."""
    return [
        UnitOfWork(repository=repo, name=name, value=value, environment=environment or None)
        for repo in repos
        for name, value in values.items()
    ]


async def dispatch(
    units: list[UnitOfWork],
    work: Work,
    concurrency: int,
) -> BatchResult:
    """
    Run ``work`` for every unit, at most ``concurrency`` at a time.

    Args:
        units: Units of work; no ordering between them is guaranteed
        work: Coroutine function performing one unit
        concurrency: Maximum number of units in flight (at least 1)

    Returns:
        BatchResult with the records of successful units and every failure
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be at least 1, got {concurrency}")

    semaphore = asyncio.Semaphore(concurrency)

    async def run_one(unit: UnitOfWork) -> AuditRecord:
        async with semaphore:
            return await work(unit)

    outcomes = await asyncio.gather(
        *(run_one(unit) for unit in units), return_exceptions=True
    )

    result = BatchResult()
    for unit, outcome in zip(units, outcomes):
        if isinstance(outcome, BaseException):
            logger.error(f"Failed {unit.describe()}: {outcome}")
            result.failures.append(UnitFailure(unit=unit, error=outcome))
        else:
            result.records.append(outcome)
    return result
