"""Logging for kspwlo.

Modules log through ``get_logger(__name__)``. Their loggers carry no level or
handler of their own, so every record is filtered and written by the package
logger ``kspwlo``, which holds a single stdout handler. The CLI changes
verbosity for the whole package with `set_global_log_level`.
"""

import logging
import sys
from typing import Union

PACKAGE_LOGGER_NAME = "kspwlo"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_package_logger_ready = False


def _package_logger() -> logging.Logger:
    """Return the ``kspwlo`` logger, installing its handler on first use."""
    global _package_logger_ready

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    if not _package_logger_ready:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.handlers.clear()
        package_logger.addHandler(handler)
        package_logger.setLevel(logging.INFO)
        _package_logger_ready = True
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a kspwlo module.

    Args:
        name: Usually ``__name__`` of the calling module.
    """
    _package_logger()
    return logging.getLogger(name)


def set_global_log_level(level: Union[int, str]) -> None:
    """Set the level of the package logger and its handler.

    Args:
        level: A ``logging`` level such as ``logging.DEBUG`` or ``"WARNING"``.
    """
    package_logger = _package_logger()
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setLevel(level)
