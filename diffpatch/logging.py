"""Logging configuration for the diffpatch package."""

import logging
import sys

LOGGER_NAME = "diffpatch"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_handler: logging.Handler | None = None


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure the package logger to write to the current stderr.

    The handler installed by an earlier call is replaced, so the logger never
    holds more than one diffpatch handler.
    """
    global _handler

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(_handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
