"""Discovery of the values to propagate from the job environment."""

import os
from collections.abc import Mapping

from secrets_sync.logging import get_logger
from secrets_sync.patterns import compile_patterns, matches_any
from secrets_sync.workflow import add_mask

logger = get_logger()

# Runner-provided keys; their values are not secret and stay unmasked
RESERVED_PREFIX = "GITHUB_"


def discover(
    patterns: list[str],
    environ: Mapping[str, str] | None = None,
    mask: bool = True,
) -> dict[str, str]:
    """
    Collect environment entries whose key matches any pattern.

    Empty values are skipped. Matched values are masked in job logs, except
    for keys with the reserved ``GITHUB_`` prefix, which are still returned.

    Args:
        patterns: Regular expressions searched in each key
        environ: Environment mapping (default: os.environ)
        mask: Register matched values with the log mask

    Returns:
        Mapping of key to value
    """
    env = os.environ if environ is None else environ
    compiled = compile_patterns(patterns)

    logger.info(f"Available env keys: {sorted(env)}")

    found: dict[str, str] = {}
    for key, value in env.items():
        if not value or not matches_any(key, compiled):
            continue
        if mask and not key.startswith(RESERVED_PREFIX):
            add_mask(value)
        found[key] = value
    return found
