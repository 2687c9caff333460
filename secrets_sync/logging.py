"""
secrets-sync logging utilities.

Provides configurable logging for HTTP requests/responses and audit records.
Ensures no sensitive data (tokens, secret values, ciphertexts) is logged.
"""

import logging
import re
import sys
from typing import Any

from secrets_sync.types.audit import AuditRecord

# Package loggers
_sdk_logger = logging.getLogger("secrets_sync")
_http_logger = logging.getLogger("secrets_sync.http")
_audit_logger = logging.getLogger("secrets_sync.audit")

# Patterns for sensitive data that should be masked
_SENSITIVE_PATTERNS = [
    # Authorization header values
    (re.compile(r"(Bearer|token)\s+[A-Za-z0-9_\-\.]+", re.IGNORECASE), r"\1 [REDACTED]"),
    # GitHub token formats
    (re.compile(r"\b(ghp|gho|ghu|ghs|ghr)_[A-Za-z0-9]{20,}\b"), "[TOKEN_REDACTED]"),
    (re.compile(r"\bgithub_pat_[A-Za-z0-9_]{20,}\b"), "[TOKEN_REDACTED]"),
    # Sealed secret payloads
    (re.compile(r'"encrypted_value"\s*:\s*"[A-Za-z0-9+/=]+"'), '"encrypted_value": "[REDACTED]"'),
    # Secret/token patterns
    (re.compile(r"(secret|token|password|api_key)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE), r"\1: [REDACTED]"),
]

_DEFAULT_SENSITIVE_KEYS = {"authorization", "encrypted_value", "value", "secret", "token", "password", "api_key"}

# Values registered with add_mask; replaced by *** wherever they appear
_masked_values: set[str] = set()

MASK = "***"

_traceback_formatter = logging.Formatter()


def register_mask(value: str) -> None:
    """
    Register a value that must never appear in log output.

    Args:
        value: The literal value to hide. Blank values are ignored.
    """
    if value and value.strip():
        _masked_values.add(value)


def clear_masks() -> None:
    """Forget every registered mask value."""
    _masked_values.clear()


def apply_masks(text: str) -> str:
    """
    Replace every registered mask value in ``text`` with ``***``.

    Longer values are replaced first so that a value containing another
    registered value is hidden entirely.
    """
    for value in sorted(_masked_values, key=len, reverse=True):
        if value in text:
            text = text.replace(value, MASK)
    return text


class MaskingFilter(logging.Filter):
    """Logging filter that redacts registered values and sensitive patterns."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = mask_sensitive_data(apply_masks(message))
        if masked != message:
            record.msg = masked
            record.args = None
        # Formatters reuse a pre-filled exc_text, so rendering it here covers tracebacks
        if record.exc_info and not record.exc_text:
            record.exc_text = _traceback_formatter.formatException(record.exc_info)
        if record.exc_text:
            record.exc_text = mask_sensitive_data(apply_masks(record.exc_text))
        if record.stack_info:
            record.stack_info = mask_sensitive_data(apply_masks(record.stack_info))
        return True


class WorkflowCommandFormatter(logging.Formatter):
    """
    Formatter that renders records as pipeline workflow commands.

    WARNING and above become ``::warning::`` / ``::error::`` annotations and
    DEBUG becomes ``::debug::``; INFO lines are printed as-is.
    """

    _COMMANDS = {
        logging.DEBUG: "debug",
        logging.WARNING: "warning",
        logging.ERROR: "error",
        logging.CRITICAL: "error",
    }

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        command = self._COMMANDS.get(record.levelno)
        if command is None:
            return text
        # Workflow commands are single-line; newlines must be escaped
        escaped = text.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        return f"::{command}::{escaped}"


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    audit_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
    workflow_commands: bool = True,
) -> None:
    """
    Configure secrets-sync logging.

    Args:
        level: Default log level for all package loggers (default: INFO)
        http_level: Log level for HTTP request/response logging (default: same as level)
        audit_level: Log level for audit records (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stdout)
        format_string: Custom format string (default: the bare message)
        workflow_commands: Render warnings/errors as workflow commands

    Example:
        ```python
        import logging
        from secrets_sync.logging import configure_logging

        # Enable debug logging for HTTP requests
        configure_logging(level=logging.INFO, http_level=logging.DEBUG)
        ```
    """
    if format_string is None:
        format_string = "%(message)s"

    formatter: logging.Formatter
    if workflow_commands:
        formatter = WorkflowCommandFormatter(format_string)
    else:
        formatter = logging.Formatter(format_string)

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)

    handler.setFormatter(formatter)
    handler.addFilter(MaskingFilter())

    # Configure main package logger
    _sdk_logger.setLevel(level)
    _sdk_logger.addHandler(handler)

    # Configure HTTP logger
    _http_logger.setLevel(http_level if http_level is not None else level)

    # Configure audit logger
    _audit_logger.setLevel(audit_level if audit_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a secrets-sync logger.

    Args:
        name: Logger name suffix (e.g., "http", "audit"). If None, returns the main logger.

    Returns:
        Logger instance
    """
    if name is None:
        return _sdk_logger
    return logging.getLogger(f"secrets_sync.{name}")


def mask_sensitive_data(text: str) -> str:
    """
    Mask sensitive data in a string.

    Replaces tokens, sealed payloads and other sensitive patterns with
    redacted placeholders.

    Args:
        text: Text that may contain sensitive data

    Returns:
        Text with sensitive data masked
    """
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def safe_log_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """
    Create a copy of a dictionary with sensitive values masked.

    Args:
        data: Dictionary that may contain sensitive values
        sensitive_keys: Set of keys to mask (default: authorization, encrypted_value,
            value, secret, token, password, api_key)

    Returns:
        Dictionary with sensitive values replaced with "[REDACTED]"
    """
    if sensitive_keys is None:
        sensitive_keys = _DEFAULT_SENSITIVE_KEYS

    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = key.lower()
        if key_lower in sensitive_keys or any(sk in key_lower for sk in sensitive_keys):
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = safe_log_dict(value, sensitive_keys)
        elif isinstance(value, list):
            result[key] = [
                safe_log_dict(item, sensitive_keys) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def log_http_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    body: dict[str, Any] | None = None,
) -> None:
    """
    Log an HTTP request at DEBUG level with sensitive data masked.

    Args:
        method: HTTP method (GET, POST, etc.)
        url: Request URL or path
        params: Query parameters (optional)
        body: Request body (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} {url}"]

    if params:
        log_parts.append(f"params={params}")

    if body:
        safe_body = safe_log_dict(body)
        log_parts.append(f"body={safe_body}")

    _http_logger.debug(" | ".join(log_parts))


def log_http_response(
    status_code: int,
    url: str,
    elapsed_ms: float | None = None,
) -> None:
    """
    Log an HTTP response at DEBUG level.

    Response bodies are not logged; listing endpoints can be large and
    variable endpoints return plaintext values.

    Args:
        status_code: HTTP status code
        url: Request URL or path
        elapsed_ms: Request duration in milliseconds (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"Response {status_code} from {url}"]

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    _http_logger.debug(" | ".join(log_parts))


def log_audit_record(record: AuditRecord) -> None:
    """
    Log one audit record at INFO level.

    Args:
        record: The record to log; it only ever carries a value hash
    """
    if not _audit_logger.isEnabledFor(logging.INFO):
        return

    prefix = "[DRY_RUN] " if record.dry_run else ""
    scope = f" environment={record.environment}" if record.environment else ""
    _audit_logger.info(
        f"{prefix}{record.action} {record.kind} {record.name} on {record.repository} "
        f"target={record.target}{scope} hash={record.value_hash}"
    )


# Export public API
__all__ = [
    "MASK",
    "MaskingFilter",
    "WorkflowCommandFormatter",
    "apply_masks",
    "clear_masks",
    "configure_logging",
    "get_logger",
    "log_audit_record",
    "log_http_request",
    "log_http_response",
    "mask_sensitive_data",
    "register_mask",
    "safe_log_dict",
]
