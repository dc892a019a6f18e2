"""Logging setup for the CLI.

Library modules log through ``logging.getLogger(__name__)``; the CLI
attaches a single Rich handler to the package logger.
"""

import logging

from rich.logging import RichHandler

from pkgcollection.utils.formatting import err_console

PACKAGE_LOGGER = "pkgcollection"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Route package log records to stderr through Rich.

    Calling this more than once replaces the previously installed handler.

    Args:
        verbose: Emit DEBUG records when True, only WARNING and above otherwise.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=err_console,
        show_time=verbose,
        show_path=False,
        markup=False,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return logger
