"""Logging setup for pr-backport."""

import logging

from rich.logging import RichHandler

from ..ui import err_console


def get_logger(name: str, level: str | int = logging.INFO) -> logging.Logger:
    """Return a logger that writes through rich to stderr.

    The handler is attached once; later calls only adjust the level.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = RichHandler(console=err_console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(level)
    return logger
