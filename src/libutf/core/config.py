# config.py
# SPDX-License-Identifier: MIT
"""Environment-driven defaults for libutf."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .unicode import Encoding

_FALLBACK_ENV = "LIBUTF_FALLBACK"
_LOG_LEVEL_ENV = "LIBUTF_LOG_LEVEL"
_DEFAULT_FALLBACK = Encoding.UTF8_JAVA
_CONFIG_CACHE: dict[str, "LibutfConfig"] = {}
# Plain logging here: log.py imports this module lazily.
_LOG = logging.getLogger(__name__)

__all__ = ["LibutfConfig", "load_config"]


@dataclass(slots=True, frozen=True)
class LibutfConfig:
    """Process-wide defaults.

    fallback_encoding
        Handler used when identification cannot tell the encoding.
    log_level
        Level applied by ``configure_logging()`` when called without one.
    """

    fallback_encoding: Encoding = _DEFAULT_FALLBACK
    log_level: Optional[int] = None

    @classmethod
    def from_env(cls) -> "LibutfConfig":
        return cls(
            fallback_encoding=_fallback_from_env(),
            log_level=_log_level_from_env(),
        )


def _fallback_from_env() -> Encoding:
    raw = os.getenv(_FALLBACK_ENV, "").strip()
    if not raw:
        return _DEFAULT_FALLBACK
    try:
        return Encoding.parse(raw)
    except ValueError:
        _LOG.warning(
            "%s=%r is not a known encoding; using %s.",
            _FALLBACK_ENV,
            raw,
            _DEFAULT_FALLBACK.value,
        )
        return _DEFAULT_FALLBACK


def _log_level_from_env() -> Optional[int]:
    raw = os.getenv(_LOG_LEVEL_ENV, "").strip()
    if not raw:
        return None
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    if isinstance(level, int):
        return level
    _LOG.warning("%s=%r is not a logging level; ignoring.", _LOG_LEVEL_ENV, raw)
    return None


def load_config() -> LibutfConfig:
    """Return the cached config, reading the environment on first use."""
    cached = _CONFIG_CACHE.get("default")
    if cached is None:
        cached = LibutfConfig.from_env()
        _CONFIG_CACHE["default"] = cached
    return cached


def _reset_config_cache_for_tests() -> None:
    _CONFIG_CACHE.clear()
