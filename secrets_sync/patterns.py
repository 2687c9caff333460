"""
Name pattern matching.

Patterns are case-sensitive regular expressions searched anywhere in the
identifier (no implicit anchoring). An identifier matches when any pattern
matches it.
"""

import re
from collections.abc import Iterable

from secrets_sync.exceptions import ConfigurationError


def compile_patterns(patterns: Iterable[str]) -> list[re.Pattern[str]]:
    """
    Compile patterns, failing on the first invalid one.

    Raises:
        ConfigurationError: If a pattern is not a valid regular expression
    """
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise ConfigurationError(f"Invalid pattern {pattern!r}: {e}") from e
    return compiled


def matches_any(identifier: str, compiled: Iterable[re.Pattern[str]]) -> bool:
    return any(regex.search(identifier) for regex in compiled)


def match(identifiers: Iterable[str], patterns: Iterable[str]) -> list[str]:
    """
    Filter identifiers down to those matched by at least one pattern.

    Args:
        identifiers: Candidate identifiers, order preserved
        patterns: Regular expressions; an empty list matches nothing

    Returns:
        The matching identifiers
    """
    compiled = compile_patterns(patterns)
    if not compiled:
        return []
    return [identifier for identifier in identifiers if matches_any(identifier, compiled)]
