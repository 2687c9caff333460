"""
Property-based tests for secrets-sync logging.

Feature: secrets-sync
"""

import io
import logging
from collections.abc import Generator

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from secrets_sync.logging import (
    MASK,
    MaskingFilter,
    WorkflowCommandFormatter,
    apply_masks,
    clear_masks,
    configure_logging,
    get_logger,
    log_audit_record,
    log_http_request,
    log_http_response,
    mask_sensitive_data,
    register_mask,
    safe_log_dict,
)
from secrets_sync.types.audit import AuditRecord

# Strategies for generating test data
base64_ciphertext_strategy = st.text(
    alphabet=st.sampled_from("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/="),
    min_size=64,
    max_size=128,
)

token_body_strategy = st.text(
    alphabet=st.sampled_from("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"),
    min_size=36,
    max_size=40,
)

secret_value_strategy = st.text(
    alphabet=st.characters(whitelist_categories=("Lu", "Ll", "Nd", "Po")),
    min_size=4,
    max_size=40,
).filter(lambda s: s.strip() == s and "*" not in s)

url_strategy = st.text(
    min_size=5,
    max_size=100,
    alphabet=st.characters(whitelist_categories=("Lu", "Ll", "Nd"), whitelist_characters="/-_"),
)


@pytest.fixture
def restore_loggers() -> Generator[None, None, None]:
    """Undo handler and level changes made to the package loggers."""
    loggers = [get_logger(), get_logger("http"), get_logger("audit")]
    saved = [(lg, lg.level, list(lg.handlers)) for lg in loggers]
    yield
    for lg, level, handlers in saved:
        lg.setLevel(level)
        lg.handlers = handlers


def capture(logger_name: str) -> io.StringIO:
    """Attach a DEBUG buffer handler to one logger, replacing its handlers."""
    log_buffer = io.StringIO()
    handler = logging.StreamHandler(log_buffer)
    handler.setLevel(logging.DEBUG)
    lg = logging.getLogger(logger_name)
    lg.setLevel(logging.DEBUG)
    lg.handlers = [handler]
    return log_buffer


@given(ciphertext=base64_ciphertext_strategy)
@settings(max_examples=100)
def test_property_no_ciphertext_in_masked_output(ciphertext: str) -> None:
    """Sealed payloads never survive masking."""
    text = f'{{"encrypted_value": "{ciphertext}", "key_id": "568250167242549743"}}'

    masked = mask_sensitive_data(text)

    assert ciphertext not in masked
    assert "568250167242549743" in masked


@given(
    prefix=st.sampled_from(["ghp", "gho", "ghu", "ghs", "ghr", "github_pat"]),
    body=token_body_strategy,
)
@settings(max_examples=100)
def test_property_no_token_in_masked_output(prefix: str, body: str) -> None:
    """GitHub tokens are redacted wherever they appear in a message."""
    token = f"{prefix}_{body}"

    masked = mask_sensitive_data(f"using credentials {token} for the run")

    assert token not in masked
    assert "[TOKEN_REDACTED]" in masked


def test_bearer_header_is_redacted() -> None:
    masked = mask_sensitive_data("Authorization: Bearer abc.def-ghi")

    assert "abc.def-ghi" not in masked
    assert "Bearer [REDACTED]" in masked


@given(value=secret_value_strategy)
@settings(max_examples=100)
def test_property_registered_values_are_masked(value: str) -> None:
    """A registered value is replaced wherever it appears."""
    clear_masks()
    register_mask(value)

    masked = apply_masks(f"before {value} after {value}")

    assert value not in masked
    assert masked == f"before {MASK} after {MASK}"
    clear_masks()


def test_longer_mask_wins_over_contained_value() -> None:
    register_mask("abc")
    register_mask("abcdef")

    assert apply_masks("x abcdef y") == f"x {MASK} y"


def test_blank_values_are_not_registered() -> None:
    register_mask("")
    register_mask("   ")

    assert apply_masks("a   b") == "a   b"


@given(
    value=st.text(min_size=10, max_size=50),
    token=st.text(min_size=10, max_size=50),
    password=st.text(min_size=10, max_size=50),
)
@settings(max_examples=100)
def test_property_safe_log_dict_masks_secrets(value: str, token: str, password: str) -> None:
    """Sensitive keys are redacted; other keys are kept."""
    data = {
        "value": value,
        "token": token,
        "password": password,
        "encrypted_value": "c2VhbGVk",
        "name": "visible",
    }

    safe_data = safe_log_dict(data)

    assert safe_data["value"] == "[REDACTED]"
    assert safe_data["token"] == "[REDACTED]"
    assert safe_data["password"] == "[REDACTED]"
    assert safe_data["encrypted_value"] == "[REDACTED]"
    assert safe_data["name"] == "visible"


@given(method=st.sampled_from(["GET", "POST", "PUT", "PATCH", "DELETE"]), url=url_strategy)
@settings(max_examples=100)
def test_property_log_http_request_no_sensitive_data(method: str, url: str) -> None:
    """Request bodies are logged without secret or variable values."""
    log_buffer = capture("secrets_sync.http")

    log_http_request(
        method,
        url,
        body={"name": "API_KEY", "value": "plain-variable-value", "encrypted_value": "c2VhbGVkLWJveA=="},
    )

    log_output = log_buffer.getvalue()
    body_section = log_output[log_output.find("body="):]
    assert "API_KEY" in body_section
    assert "plain-variable-value" not in body_section
    assert "c2VhbGVkLWJveA==" not in body_section


@given(status_code=st.integers(min_value=200, max_value=599), url=url_strategy)
@settings(max_examples=50)
def test_property_log_http_response_has_status(status_code: int, url: str) -> None:
    log_buffer = capture("secrets_sync.http")

    log_http_response(status_code, url, elapsed_ms=12.3456)

    output = log_buffer.getvalue()
    assert f"Response {status_code} from {url}" in output
    assert "elapsed=12.35ms" in output


def test_http_logging_is_skipped_above_debug() -> None:
    log_buffer = capture("secrets_sync.http")
    logging.getLogger("secrets_sync.http").setLevel(logging.INFO)

    log_http_request("GET", "/repos/o/r")
    log_http_response(200, "/repos/o/r")

    assert log_buffer.getvalue() == ""


def test_audit_record_logs_hash_not_value() -> None:
    log_buffer = capture("secrets_sync.audit")
    record = AuditRecord(
        repository="octo/a",
        target="actions",
        kind="secret",
        action="set",
        name="FOO",
        value_hash="b6c1ba0fdd",
        environment="prod",
        dry_run=True,
    )

    log_audit_record(record)

    output = log_buffer.getvalue()
    assert output.startswith("[DRY_RUN] set secret FOO on octo/a")
    assert "environment=prod" in output
    assert "hash=b6c1ba0fdd" in output


class TestWorkflowCommandFormatter:
    """Tests for rendering records as workflow commands."""

    def make_record(self, level: int, msg: str) -> logging.LogRecord:
        return logging.LogRecord("secrets_sync", level, __file__, 1, msg, None, None)

    @pytest.mark.parametrize(
        "level,expected",
        [
            (logging.DEBUG, "::debug::hello"),
            (logging.INFO, "hello"),
            (logging.WARNING, "::warning::hello"),
            (logging.ERROR, "::error::hello"),
            (logging.CRITICAL, "::error::hello"),
        ],
    )
    def test_levels_map_to_commands(self, level: int, expected: str) -> None:
        formatter = WorkflowCommandFormatter("%(message)s")

        assert formatter.format(self.make_record(level, "hello")) == expected

    def test_multiline_annotation_is_escaped(self) -> None:
        formatter = WorkflowCommandFormatter("%(message)s")

        formatted = formatter.format(self.make_record(logging.ERROR, "50% done\nnext"))

        assert formatted == "::error::50%25 done%0Anext"


def test_masking_filter_rewrites_formatted_message() -> None:
    register_mask("hunter2")
    record = logging.LogRecord(
        "secrets_sync", logging.INFO, __file__, 1, "password is %s", ("hunter2",), None
    )

    assert MaskingFilter().filter(record)
    assert record.getMessage() == f"password is {MASK}"


def test_configured_handler_masks_tracebacks(restore_loggers: None) -> None:
    register_mask("hunter2")
    log_buffer = io.StringIO()
    configure_logging(level=logging.DEBUG, handler=logging.StreamHandler(log_buffer))

    try:
        raise RuntimeError("bad value hunter2")
    except RuntimeError:
        get_logger().debug("Unexpected error", exc_info=True)

    output = log_buffer.getvalue()
    assert "RuntimeError: bad value ***" in output
    assert "hunter2" not in output
    clear_masks()


def test_configure_logging_sets_levels(restore_loggers: None) -> None:
    configure_logging(
        level=logging.WARNING,
        http_level=logging.DEBUG,
        audit_level=logging.ERROR,
        handler=logging.StreamHandler(io.StringIO()),
    )

    assert get_logger().level == logging.WARNING
    assert get_logger("http").level == logging.DEBUG
    assert get_logger("audit").level == logging.ERROR


def test_configured_handler_masks_and_annotates(restore_loggers: None) -> None:
    log_buffer = io.StringIO()
    configure_logging(level=logging.INFO, handler=logging.StreamHandler(log_buffer))
    register_mask("s3cr3t-value")

    get_logger().warning("could not write s3cr3t-value")

    assert log_buffer.getvalue() == f"::warning::could not write {MASK}\n"


def test_get_logger_returns_correct_loggers() -> None:
    assert get_logger().name == "secrets_sync"
    assert get_logger("http").name == "secrets_sync.http"
    assert get_logger("audit").name == "secrets_sync.audit"


def test_mask_sensitive_data_preserves_non_sensitive() -> None:
    text = "Set `FOO = ***` on octo/a"
    assert mask_sensitive_data(text) == text


def test_safe_log_dict_handles_nested_structures() -> None:
    data = {
        "level1": {
            "level2": {"secret": "nested-secret", "normal": "visible"},
            "list_field": [
                {"value": "list-value", "name": "ok"},
                {"normal": "also-visible"},
            ],
        },
    }

    safe_data = safe_log_dict(data)

    assert "nested-secret" not in str(safe_data)
    assert "list-value" not in str(safe_data)
    assert safe_data["level1"]["level2"]["normal"] == "visible"
    assert safe_data["level1"]["list_field"][1]["normal"] == "also-visible"
