"""Logging configuration for applications embedding the cache layer."""

import logging
import sys

from cachelayer.core.config import Settings, get_settings

LOGGER_NAME = "cachelayer"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_HANDLER_NAME = "cachelayer-stdout"


def setup_logging(settings: Settings | None = None) -> logging.Logger:
    """Attach a stdout handler to the package logger and set its level.

    Level is DEBUG when settings.debug is True, otherwise INFO. Only the
    ``cachelayer`` logger is touched; records still propagate to the root
    logger. Calling it again updates the level without adding handlers.

    Returns:
        The package logger.
    """
    settings = settings or get_settings()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)
    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Return a logger under the package namespace.

    Args:
        name: Usually __name__ of the calling module; defaults to the package logger.
    """
    return logging.getLogger(name)
