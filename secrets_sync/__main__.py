"""Command-line entry point: ``python -m secrets_sync``."""

import logging
import os
import sys

from secrets_sync.action import main
from secrets_sync.logging import configure_logging


def cli() -> None:
    # The runner sets RUNNER_DEBUG=1 when step debug logging is enabled
    debug = os.environ.get("RUNNER_DEBUG") == "1"
    configure_logging(level=logging.DEBUG if debug else logging.INFO)
    sys.exit(main())


if __name__ == "__main__":
    cli()
