"""Console logging helper for the downsampling pipeline."""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER_NAME = "box_downsampler"


class _ScaleFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "scale"):
            record.scale = "-"
        return True


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger with a console handler attached.

    Parameters
    ----------
    name : str
        Module name, typically ``__name__``.
    """
    base = logging.getLogger(_LOGGER_NAME)
    if not base.handlers:
        base.setLevel(logging.WARNING)
        handler = logging.StreamHandler()
        handler.setLevel(logging.WARNING)
        formatter = logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(module)s scale=%(scale)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        handler.addFilter(_ScaleFilter())
        base.addHandler(handler)
        base.propagate = False
    if name.startswith(f"{_LOGGER_NAME}."):
        name = name[len(_LOGGER_NAME) + 1 :]
    logger = logging.getLogger(f"{_LOGGER_NAME}.{name}")
    logger.setLevel(base.level)
    return logger


def set_level(level: int) -> None:
    """Update log level for the package logger, its children and handlers."""
    base = logging.getLogger(_LOGGER_NAME)
    base.setLevel(level)
    for handler in base.handlers:
        handler.setLevel(level)
    for name, child in logging.Logger.manager.loggerDict.items():
        if name.startswith(f"{_LOGGER_NAME}.") and isinstance(child, logging.Logger):
            child.setLevel(level)


def attach_handler(handler: Optional[logging.Handler]) -> None:
    """Optionally attach an extra handler (e.g. a host application's log view)."""
    if handler is None:
        return
    base = logging.getLogger(_LOGGER_NAME)
    if handler not in base.handlers:
        handler.addFilter(_ScaleFilter())
        base.addHandler(handler)
