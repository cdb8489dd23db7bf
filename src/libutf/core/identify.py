# identify.py
# SPDX-License-Identifier: MIT
"""Guess the UTF flavour of a raw byte buffer.

Two passes:
  1) Byte-order marks, longest first so that ``FF FE 00 00`` is read as a
     UTF-32LE BOM and not as a UTF-16LE BOM followed by U+0000.
  2) Without a BOM, look for two leading ASCII characters (0x01-0x7F) padded
     with zero bytes in the pattern of UTF-32 or UTF-16 of either byte order,
     then for two plain non-zero ASCII bytes (UTF-8).

This is a best-effort guess over at most the first eight bytes. Callers that
need certainty should run ``handler.validate`` after choosing a handler.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .config import load_config
from .log import get_logger
from .primitives import UTF8_BOM, UTF16BE_BOM, UTF16LE_BOM, UTF32BE_BOM, UTF32LE_BOM, _extent
from .unicode import Buffer, UtfType

if TYPE_CHECKING:  # pragma: no cover - type-only deps
    from .handlers import UtfHandler

__all__ = ["identify_utf", "detect_handler"]

log = get_logger(__name__)

_BOMS: tuple[tuple[bytes, UtfType], ...] = (
    (UTF32LE_BOM, UtfType.UTF32LE),
    (UTF32BE_BOM, UtfType.UTF32BE),
    (UTF8_BOM, UtfType.UTF8),
    (UTF16LE_BOM, UtfType.UTF16LE),
    (UTF16BE_BOM, UtfType.UTF16BE),
)


def _is_ascii(byte: int) -> bool:
    return 0 < byte < 0x80


def identify_utf(buffer: Optional[Buffer], size: Optional[int] = None) -> tuple[UtfType, int]:
    """Return ``(utf_type, bom_bytes)`` for the start of ``buffer``.

    ``bom_bytes`` is the length of the byte-order mark found, or 0 when the
    type was inferred from content (or not at all, ``UtfType.OTHER``).
    """
    n = _extent(buffer, size)
    if n < 2:
        return UtfType.OTHER, 0
    head = bytes(buffer[0:min(n, 8)])  # type: ignore[index]

    for bom, utf_type in _BOMS:
        if head.startswith(bom):
            return utf_type, len(bom)

    b = head
    if n >= 4:
        if n >= 8 and b[1] == 0 and b[2] == 0 and b[5] == 0 and b[6] == 0:
            if b[3] == 0 and b[7] == 0 and _is_ascii(b[0]) and _is_ascii(b[4]):
                return UtfType.UTF32LE, 0
            if b[0] == 0 and b[4] == 0 and _is_ascii(b[3]) and _is_ascii(b[7]):
                return UtfType.UTF32BE, 0
        if b[1] == 0 and b[3] == 0 and _is_ascii(b[0]) and _is_ascii(b[2]):
            return UtfType.UTF16LE, 0
        if b[0] == 0 and b[2] == 0 and _is_ascii(b[1]) and _is_ascii(b[3]):
            return UtfType.UTF16BE, 0
    if _is_ascii(b[0]) and _is_ascii(b[1]):
        return UtfType.UTF8, 0
    return UtfType.OTHER, 0


def detect_handler(
    buffer: Optional[Buffer], size: Optional[int] = None
) -> tuple["UtfHandler", int]:
    """Pick a handler for ``buffer`` and report how many BOM bytes to skip.

    ``UtfType.OTHER`` resolves to the configured fallback encoding
    (``LIBUTF_FALLBACK``, Java-style UTF-8 by default).
    """
    from .registry import get_handler

    utf_type, bom_bytes = identify_utf(buffer, size)
    if utf_type is UtfType.OTHER:
        fallback = load_config().fallback_encoding
        log.debug("identify_utf: no match; falling back to %s", fallback.value)
        return get_handler(fallback), 0
    return get_handler(utf_type), bom_bytes
