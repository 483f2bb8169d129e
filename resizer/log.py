from __future__ import annotations

import sys

from loguru import logger


LOG_FORMAT = "{level}: {message}"


def _stderr_sink(message) -> None:
    # Look up sys.stderr on every write so redirected streams are honoured.
    sys.stderr.write(message)


def configure_logging(verbose: bool = False) -> None:
    """Send warnings and errors (plus debug output when verbose) to stderr."""
    logger.remove()
    logger.add(
        _stderr_sink,
        level="DEBUG" if verbose else "WARNING",
        format=LOG_FORMAT,
        colorize=False,
    )
