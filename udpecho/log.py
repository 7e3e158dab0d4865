"Logging setup"

import sys

from loguru import logger

PLAIN_FORMAT = "{message}"


def configure_logging(level="INFO"):
    """
    Print exchange lines as plain text on stdout.

    At DEBUG the full loguru format goes to stderr instead, so endpoint and
    truncation details carry timestamps and source locations.
    """
    logger.remove()
    if level == "DEBUG":
        logger.add(sys.stderr, level=level)
    else:
        logger.add(sys.stdout, level=level, format=PLAIN_FORMAT)
