"""Logging configuration helpers."""

import logging

# aiosqlite logs every statement it forwards at DEBUG.
_NOISY_LOGGERS = ("aiosqlite",)


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the ``health_tracker`` logger.

    Repeated calls only update the level.
    """
    logger = logging.getLogger("health_tracker")
    logger.setLevel(level.upper())
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
