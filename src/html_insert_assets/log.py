"""
Logging setup for the command.

Diagnostics go through loguru; ``--verbose`` opens the DEBUG level on the
configured sink, otherwise only warnings and errors get through.
"""

import sys

from loguru import logger

LOG_FORMAT = "html-insert-assets: {message}"


def configure_logging(verbose: bool = False, sink=None) -> int:
    """Route loguru output to ``sink`` (stderr by default) and return the handler id."""
    logger.remove()
    return logger.add(
        sink if sink is not None else sys.stderr,
        format=LOG_FORMAT,
        level="DEBUG" if verbose else "WARNING",
    )
