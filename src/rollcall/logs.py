from __future__ import annotations

import logging
import sys

_PACKAGE_LOGGER = "rollcall"
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | int = "info") -> None:
    """Send rollcall's log records to stdout at `level`.

    Only the package logger is touched so embedding applications keep their
    own root configuration.
    """

    if isinstance(level, str):
        log_level = getattr(logging, level.upper(), logging.INFO)
    else:
        log_level = int(level)

    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(log_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(_FORMAT))

    # Re-configuring replaces the handler instead of stacking duplicates.
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.propagate = False

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
