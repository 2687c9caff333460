"""
Pipeline surface for running inside a GitHub Actions job.

Reads action inputs from ``INPUT_*`` environment variables and talks back
to the runner with workflow commands and the ``GITHUB_OUTPUT`` file.
"""

import os
import sys
import uuid
from collections.abc import Mapping
from typing import TextIO

from secrets_sync.exceptions import ConfigurationError
from secrets_sync.logging import register_mask

TRUE_VALUES = ("1", "true")


def _input_key(name: str) -> str:
    return "INPUT_" + name.replace(" ", "_").upper()


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def get_input(
    name: str,
    required: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """
    Read an action input.

    Args:
        name: Input name as declared by the action (e.g., "GITHUB_TOKEN")
        required: Raise when the input is missing or blank
        environ: Environment mapping (default: os.environ)

    Returns:
        The stripped input value, or "" when unset

    Raises:
        ConfigurationError: If a required input is missing
    """
    env = os.environ if environ is None else environ
    value = env.get(_input_key(name), "").strip()
    if required and not value:
        raise ConfigurationError(f"Input required and not supplied: {name}")
    return value


def get_boolean_input(name: str, environ: Mapping[str, str] | None = None) -> bool:
    """Read an input as a flag; ``1`` and ``true`` (any case) are true."""
    return get_input(name, environ=environ).lower() in TRUE_VALUES


def get_multiline_input(
    name: str,
    required: bool = False,
    environ: Mapping[str, str] | None = None,
) -> list[str]:
    """Read an input as a list of non-blank, stripped lines."""
    value = get_input(name, required=required, environ=environ)
    return [line.strip() for line in value.splitlines() if line.strip()]


def issue_command(command: str, message: str = "", stream: TextIO | None = None) -> None:
    """Write a ``::command::message`` line for the runner."""
    print(f"::{command}::{_escape_data(message)}", file=stream or sys.stdout, flush=True)


def add_mask(value: str, stream: TextIO | None = None) -> None:
    """
    Ask the runner to mask a value in job logs, and mask it in our own logs.

    Args:
        value: Value to hide; blank values are ignored
        stream: Output stream (default: stdout)
    """
    if not value or not value.strip():
        return
    register_mask(value)
    for line in value.splitlines():
        if line.strip():
            issue_command("add-mask", line, stream)


def set_output(
    name: str,
    value: str,
    environ: Mapping[str, str] | None = None,
    stream: TextIO | None = None,
) -> None:
    """
    Set a step output.

    Appends to the file named by ``GITHUB_OUTPUT``; falls back to the legacy
    ``set-output`` command when that variable is absent.

    Args:
        name: Output name
        value: Output value; may span several lines
        environ: Environment mapping (default: os.environ)
        stream: Stream for the legacy command (default: stdout)
    """
    env = os.environ if environ is None else environ
    output_file = env.get("GITHUB_OUTPUT")
    if not output_file:
        out = stream or sys.stdout
        print(f"::set-output name={name}::{_escape_data(value)}", file=out, flush=True)
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with open(output_file, "a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


def set_failed(message: str, stream: TextIO | None = None) -> None:
    """Report the run as failed with an error annotation."""
    issue_command("error", message, stream)
