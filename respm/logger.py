"""Logging setup for the respm command line tool."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-4s %(name)s: %(message)s"


def setup_logger(level: int = logging.WARNING) -> logging.Logger:
    """Configure the package logger and return it.

    Handlers are replaced on every call, so repeated CLI invocations in one
    process write to the current stderr.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    logger = logging.getLogger("respm")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger
