# __init__.py
# SPDX-License-Identifier: MIT
"""libutf: Unicode code-point codecs over caller-owned byte buffers.

Public API
----------
- Tags and results: ``Encoding``, ``UtfType``, ``UtfOtherType``,
  ``CodecError``, ``DecodeResult``, ``EncodeResult``
- Cursor view: ``UtfText``, ``LineResult``
- Handlers: ``get_handler``, ``get_handler_other``, ``UtfHandler``
- Identification: ``identify_utf``, ``detect_handler``
- Measurement and transcoding: ``strsize_from``, ``transcode`` and the
  ``strsize_<dst>_from_<src>`` helpers
- Per-encoding primitives live in ``libutf.core.primitives``.
"""

from __future__ import annotations

from .core.config import LibutfConfig, load_config
from .core.cp1252 import Cp1252Strictness
from .core.handlers import UtfHandler
from .core.identify import detect_handler, identify_utf
from .core.log import configure_logging, get_logger
from .core.registry import get_handler, get_handler_other, handler_registry
from .core.text import LineResult, UtfText
from .core.transcode import (
    TranscodeResult,
    strsize_from,
    strsize_utf8_from_utf16be,
    strsize_utf8_from_utf16le,
    strsize_utf8_from_utf32be,
    strsize_utf8_from_utf32le,
    strsize_utf16_from_utf8,
    strsize_utf16_from_utf32be,
    strsize_utf16_from_utf32le,
    transcode,
)
from .core.unicode import (
    FAILURE_BIT,
    MAX_CODE_POINT,
    CodecError,
    DecodeResult,
    EncodeResult,
    Encoding,
    UtfOtherType,
    UtfType,
    is_scalar,
)

__all__ = [
    "FAILURE_BIT",
    "MAX_CODE_POINT",
    "CodecError",
    "Cp1252Strictness",
    "DecodeResult",
    "EncodeResult",
    "Encoding",
    "LibutfConfig",
    "LineResult",
    "TranscodeResult",
    "UtfHandler",
    "UtfOtherType",
    "UtfText",
    "UtfType",
    "configure_logging",
    "detect_handler",
    "get_handler",
    "get_handler_other",
    "get_logger",
    "handler_registry",
    "identify_utf",
    "is_scalar",
    "load_config",
    "strsize_from",
    "strsize_utf8_from_utf16be",
    "strsize_utf8_from_utf16le",
    "strsize_utf8_from_utf32be",
    "strsize_utf8_from_utf32le",
    "strsize_utf16_from_utf8",
    "strsize_utf16_from_utf32be",
    "strsize_utf16_from_utf32le",
    "transcode",
]

__version__ = "0.1.0"
