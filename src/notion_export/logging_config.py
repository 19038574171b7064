"""Logging configuration for notion-export."""

import sys

from loguru import logger

INFO_FORMAT = "{level.icon} {message}"
DEBUG_FORMAT = "{time:HH:mm:ss} {level.icon} <dim>{name}:{line}</dim> {message}"


def configure_logging(*, verbose: bool = False) -> None:
    """Log progress to stderr; with ``verbose``, every request and write too."""
    logger.remove()
    if verbose:
        logger.add(sys.stderr, level="DEBUG", format=DEBUG_FORMAT)
    else:
        logger.add(sys.stderr, level="INFO", format=INFO_FORMAT)
