from __future__ import annotations

import logging
import sys

_PKG_LOGGER_NAME = "finance_tracker"
_HANDLER_NAME = "finance_tracker.stderr"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach one stderr handler to the package logger. Calling it again only
    changes the level and rebinds the handler to the current sys.stderr.
    """
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    logger.setLevel(level.upper())

    # replace rather than setStream(): that flushes the old stream, which may be closed
    for h in list(logger.handlers):
        if h.get_name() == _HANDLER_NAME:
            logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    return logger
