# log.py
# SPDX-License-Identifier: MIT
"""Logger helpers shared by libutf modules."""

from __future__ import annotations

import logging

_PACKAGE_LOGGER = "libutf"

logging.getLogger(_PACKAGE_LOGGER).addHandler(logging.NullHandler())

__all__ = ["get_logger", "configure_logging"]


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the ``libutf`` namespace."""
    if name != _PACKAGE_LOGGER and not name.startswith(_PACKAGE_LOGGER + "."):
        name = f"{_PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(level: int | str | None = None) -> logging.Logger:
    """Attach a stream handler to the package logger at ``level``.

    When ``level`` is None the value from ``LIBUTF_LOG_LEVEL`` is used, and
    if that is unset the logger is left at WARNING. Calling this twice does
    not stack handlers.
    """
    if level is None:
        from .config import load_config

        level = load_config().log_level or logging.WARNING
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level {level!r}")
        level = resolved
    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(level)
    if not any(getattr(h, "_libutf", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        handler._libutf = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
