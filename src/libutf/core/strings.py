# strings.py
# SPDX-License-Identifier: MIT
"""Byte-extent and code-point counting over encoded strings.

Each counter has two forms, selected by ``size``:

- ``size is None``: terminated form. Scanning stops at the first all-zero
  code unit (1, 2 or 4 bytes wide) or at the end of the buffer, whichever
  comes first. The terminator is not counted.
- ``size`` given: bounded form. Exactly ``size`` bytes (clamped to the
  buffer) are examined and zero units are counted like any other.

The counters are quick scans, not validators: ``strlen_utf8`` counts bytes
that are not continuation bytes, so it only matches the decoded code-point
count for well-formed input.
"""

from __future__ import annotations

from typing import Optional

from .primitives import _extent
from .unicode import Buffer

__all__ = [
    "strsize_utf8",
    "strsize_utf16",
    "strsize_utf32",
    "strlen_utf8",
    "strlen_utf16le",
    "strlen_utf16be",
    "strlen_utf32",
    "strlen_byte",
]


def _null_unit_offset(buffer: Optional[Buffer], width: int) -> int:
    """Return the byte offset of the first zero unit of ``width`` bytes."""
    if buffer is None:
        return 0
    limit = len(buffer)
    if width == 1:
        for index, byte in enumerate(buffer):
            if byte == 0:
                return index
        return limit
    index = 0
    while index + width <= limit:
        if not any(buffer[index:index + width]):
            return index
        index += width
    return index


def strsize_utf8(buffer: Optional[Buffer]) -> int:
    """Byte extent of a terminated UTF-8 (or single-byte) string."""
    return _null_unit_offset(buffer, 1)


def strsize_utf16(buffer: Optional[Buffer]) -> int:
    """Byte extent of a terminated UTF-16 string of either byte order."""
    return _null_unit_offset(buffer, 2)


def strsize_utf32(buffer: Optional[Buffer]) -> int:
    return _null_unit_offset(buffer, 4)


def strlen_utf8(buffer: Optional[Buffer], size: Optional[int] = None) -> int:
    """Count code points by counting bytes that are not ``10xxxxxx``."""
    limit = strsize_utf8(buffer) if size is None else _extent(buffer, size)
    count = 0
    for index in range(limit):
        if (buffer[index] & 0xC0) != 0x80:  # type: ignore[index]
            count += 1
    return count


def _strlen_utf16(buffer: Optional[Buffer], size: Optional[int], big_endian: bool) -> int:
    if buffer is None:
        return 0
    terminated = size is None
    limit = len(buffer) if terminated else _extent(buffer, size)

    def unit(i: int) -> int:
        if big_endian:
            return (buffer[i] << 8) | buffer[i + 1]  # type: ignore[index]
        return (buffer[i + 1] << 8) | buffer[i]  # type: ignore[index]

    count = 0
    index = 0
    while index + 2 <= limit:
        value = unit(index)
        if terminated and value == 0:
            break
        if (value & 0xFC00) == 0xD800 and index + 4 <= limit:
            if (unit(index + 2) & 0xFC00) == 0xDC00:
                index += 2
        index += 2
        count += 1
    return count


def strlen_utf16le(buffer: Optional[Buffer], size: Optional[int] = None) -> int:
    """Count UTF-16LE code points; a valid surrogate pair counts once."""
    return _strlen_utf16(buffer, size, False)


def strlen_utf16be(buffer: Optional[Buffer], size: Optional[int] = None) -> int:
    """Count UTF-16BE code points; a valid surrogate pair counts once."""
    return _strlen_utf16(buffer, size, True)


def strlen_utf32(buffer: Optional[Buffer], size: Optional[int] = None) -> int:
    if size is None:
        return strsize_utf32(buffer) >> 2
    return _extent(buffer, size) >> 2


def strlen_byte(buffer: Optional[Buffer], size: Optional[int] = None) -> int:
    if size is None:
        return strsize_utf8(buffer)
    return _extent(buffer, size)
