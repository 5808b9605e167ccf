"""Logging configuration: one Rich handler on the package logger, writing to stderr."""

import logging

from rich.console import Console
from rich.logging import RichHandler

_PACKAGE_LOGGER = "lift_rotation"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """
    Attach a RichHandler to the package logger.

    Safe to call repeatedly; the previous handler is replaced.

    Args:
        verbose: Log at DEBUG instead of WARNING

    Returns:
        The package logger
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger
