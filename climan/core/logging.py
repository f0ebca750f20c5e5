"""
Logging for climan.

Every record goes to stderr; stdout is reserved for the generated page.

    (default)  WARNING
    -v         INFO   pages rendered, files written
    -vv        DEBUG  command sections and option groups
    -vvv       TRACE  every option entry
    -q         ERROR
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER = "climan"

# More verbose than DEBUG
TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def trace(self, message, *args, **kwargs):
    """Log at TRACE level."""
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)


logging.Logger.trace = trace

_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)

_DETAILED_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def level_for(verbosity: int, quiet: bool = False) -> int:
    """Map -v count and -q to a logging level."""
    if quiet:
        return logging.ERROR
    if verbosity >= len(_LEVELS):
        return TRACE
    return _LEVELS[max(verbosity, 0)]


def setup_logging(verbosity: int = 0, quiet: bool = False) -> logging.Logger:
    """Configure the climan logger for a CLI run.

    Calling it again replaces the previous handler.

    Returns:
        The "climan" logger
    """
    level = level_for(verbosity, quiet)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    fmt = _DETAILED_FORMAT if level <= logging.DEBUG else "climan: %(message)s"
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for a climan module, or the root climan logger."""
    return logging.getLogger(name or ROOT_LOGGER)
