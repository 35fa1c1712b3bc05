"""Logging setup shared by every shaderbuild component."""

from __future__ import annotations

import logging
from typing import Optional, Union

LOGGER_NAMESPACE = "shaderbuild"

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``shaderbuild`` namespace.

    Parameters
    ----------
    name : Optional[str]
        Component name, e.g. ``"Launcher"``. ``None`` returns the namespace root logger.

    Returns
    -------
    logging.Logger
        The logger ``shaderbuild.<name>``.
    """
    if not name:
        return logging.getLogger(LOGGER_NAMESPACE)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def configure_logging(level: Union[str, int] = "INFO") -> logging.Logger:
    """Attach a stream handler to the namespace root logger and set its level.

    Calling this more than once replaces the handler installed by the previous call instead of
    stacking a second one.

    Parameters
    ----------
    level : Union[str, int]
        One of ``DEBUG``, ``INFO``, ``WARNING``, ``ERROR`` or a numeric logging level.

    Returns
    -------
    logging.Logger
        The configured namespace root logger.

    Raises
    ------
    ValueError
        If ``level`` is an unknown level name.
    """
    if isinstance(level, str):
        if level.upper() not in _LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {level}")
        level = getattr(logging, level.upper())

    logger = get_logger()
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if getattr(handler, "_shaderbuild_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._shaderbuild_handler = True
    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)s %(name)s: %(message)s", datefmt="%H:%M:%S"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger
