"""Logging configuration for the CLI."""

import logging
import sys

from pythonjsonlogger import jsonlogger

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def setup_logging(verbose: bool = False, json_output: bool = False) -> None:
    """Configure root logging once per CLI invocation.

    Logs go to stderr so command output on stdout stays parseable.

    Args:
        verbose: Log at DEBUG instead of WARNING
        json_output: Emit JSON lines instead of plain text
    """
    level = logging.DEBUG if verbose else logging.WARNING
    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(
            jsonlogger.JsonFormatter(
                LOG_FORMAT,
                rename_fields={"asctime": "timestamp", "levelname": "level"},
            )
        )
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.root.handlers = [handler]
    logging.root.setLevel(level)
