"""Logging setup for the tidyground command line tools.

Library modules only ever create their logger with
``logging.getLogger(__name__)`` and never configure handlers.
Commands call :func:`configure_logging` once, before running.
"""

import logging
import os
import sys

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | int | None = None, force: bool = False) -> None:
    """Configure the ``tidyground`` logger to write on standard error.

    :param level: Logging level (e.g. ``"DEBUG"``), defaults to the
                  ``TIDYGROUND_LOG_LEVEL`` environment variable or ``WARNING``.
    :param force: Replace the handlers installed by a previous call.
    """
    if level is None:
        level = os.environ.get("TIDYGROUND_LOG_LEVEL", "WARNING")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger("tidyground")
    logger.setLevel(level)

    if force:
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
    elif logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(fmt=DEFAULT_FMT, datefmt=DEFAULT_DATEFMT))
    logger.addHandler(console)
