"""Logging setup for the ``failfast`` logger.

Only the package logger is touched; the root logger belongs to the
application.
"""

import logging
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from failfast.schemas.internal import InternalLoggingConfig

PACKAGE_LOGGER = "failfast"

# Marks the console handler installed here so repeated setup replaces it.
_HANDLER_ATTR = "_failfast_console"

logger = logging.getLogger(__name__)


def setup_logging(config: "InternalLoggingConfig") -> logging.Logger:
    """Apply the configured level and, optionally, a console handler.

    Parameters
    ----------
    config : InternalLoggingConfig
        Resolved logging configuration.

    Returns
    -------
    logging.Logger
        The ``failfast`` package logger.
    """
    log_level = getattr(logging, config.level.upper(), logging.WARNING)
    pkg = logging.getLogger(PACKAGE_LOGGER)
    pkg.setLevel(log_level)

    for handler in pkg.handlers[:]:
        if getattr(handler, _HANDLER_ATTR, False):
            pkg.removeHandler(handler)

    if config.console:
        formatter = logging.Formatter(fmt=config.fmt, datefmt=config.datefmt)
        ch = logging.StreamHandler()
        ch.setLevel(log_level)
        ch.setFormatter(formatter)
        setattr(ch, _HANDLER_ATTR, True)
        pkg.addHandler(ch)

    logger.debug("Logging: level=%s, console=%s", config.level, config.console)
    return pkg


def console_handler(pkg: Optional[logging.Logger] = None) -> Optional[logging.Handler]:
    """Return the console handler installed by ``setup_logging``, if any."""
    pkg = pkg or logging.getLogger(PACKAGE_LOGGER)
    for handler in pkg.handlers:
        if getattr(handler, _HANDLER_ATTR, False):
            return handler
    return None
