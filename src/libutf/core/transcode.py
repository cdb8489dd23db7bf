# transcode.py
# SPDX-License-Identifier: MIT
"""Two-phase transcoding: measure the destination size, then write.

``strsize_from`` scans a source buffer with the source handler's decoder and
sums the destination handler's ``len`` for every code point decoded, giving
the exact number of bytes ``transcode`` will need. The named
``strsize_<dst>_from_<src>`` helpers are fixed pairings of the same scan.

Scanning rules
--------------
Terminated form (``size is None``)
    Stops at the source terminator (a U+0000 occupying exactly one code
    unit) or the end of the buffer. The terminator is not counted. A Java
    ``C0 80`` NUL is content, not a terminator.
Bounded form (``size`` given)
    Examines ``size`` bytes; zero code points count like any other.
Both forms skip malformed units (their width is known) and stop on
underrun, e.g. a trailing partial code unit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .handlers import UtfHandler
from .log import get_logger
from .primitives import _extent
from .registry import get_handler
from .text import UtfText
from .unicode import Buffer, CodecError, Encoding

__all__ = [
    "TranscodeResult",
    "strsize_from",
    "transcode",
    "strsize_utf8_from_utf16le",
    "strsize_utf8_from_utf16be",
    "strsize_utf8_from_utf32le",
    "strsize_utf8_from_utf32be",
    "strsize_utf16_from_utf8",
    "strsize_utf16_from_utf32le",
    "strsize_utf16_from_utf32be",
]

log = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class TranscodeResult:
    """Outcome of ``transcode``; ``read``/``written`` are byte counts."""

    ok: bool
    read: int
    written: int
    error: Optional[CodecError] = None


def strsize_from(
    dst: UtfHandler,
    src: UtfHandler,
    buffer: Optional[Buffer],
    size: Optional[int] = None,
) -> int:
    """Return the bytes ``dst`` needs to hold the code points in ``buffer``."""
    if buffer is None:
        return 0
    view = memoryview(buffer)
    terminated = size is None
    limit = len(view) if terminated else _extent(buffer, size)
    needs = 0
    index = 0
    while index < limit:
        result = src.get(view[index:limit])
        if result.ok:
            if terminated and result.unicode == 0 and result.bytes == src.unit_size:
                break
            needs += dst.len(result.unicode)
        elif result.bytes == 0:
            break
        index += result.bytes
    return needs


def transcode(
    dst: UtfHandler,
    dst_text: UtfText,
    src: UtfHandler,
    src_text: UtfText,
) -> TranscodeResult:
    """Re-encode ``src_text`` from its cursor to its length into ``dst_text``.

    Both cursors advance together, one code point at a time, and stop at the
    first code point that cannot be decoded or written, so after a failure
    ``src_text.offset`` points at the offending input.
    """
    read = 0
    written = 0
    while src_text.offset < src_text.length:
        decoded = src.get_text(src_text)
        if not decoded.ok:
            log.debug(
                "transcode %s->%s: decode failed at offset %d",
                src.encoding.value,
                dst.encoding.value,
                src_text.offset,
            )
            return TranscodeResult(False, read, written, decoded.error)
        encoded = dst.set_text(dst_text, decoded.unicode)
        if not encoded.ok:
            log.debug(
                "transcode %s->%s: cannot write U+%04X at offset %d",
                src.encoding.value,
                dst.encoding.value,
                decoded.unicode,
                dst_text.offset,
            )
            return TranscodeResult(False, read, written, encoded.error)
        src_text.offset += decoded.bytes
        dst_text.offset += encoded.bytes
        read += decoded.bytes
        written += encoded.bytes
    return TranscodeResult(True, read, written)


def _utf8(use_java: bool) -> UtfHandler:
    return get_handler(Encoding.UTF8_JAVA if use_java else Encoding.UTF8)


def strsize_utf8_from_utf16le(
    buffer: Optional[Buffer], size: Optional[int] = None, use_java: bool = False
) -> int:
    return strsize_from(_utf8(use_java), get_handler(Encoding.UTF16LE), buffer, size)


def strsize_utf8_from_utf16be(
    buffer: Optional[Buffer], size: Optional[int] = None, use_java: bool = False
) -> int:
    return strsize_from(_utf8(use_java), get_handler(Encoding.UTF16BE), buffer, size)


def strsize_utf8_from_utf32le(
    buffer: Optional[Buffer], size: Optional[int] = None, use_java: bool = False
) -> int:
    return strsize_from(_utf8(use_java), get_handler(Encoding.UTF32LE), buffer, size)


def strsize_utf8_from_utf32be(
    buffer: Optional[Buffer], size: Optional[int] = None, use_java: bool = False
) -> int:
    return strsize_from(_utf8(use_java), get_handler(Encoding.UTF32BE), buffer, size)


def strsize_utf16_from_utf8(
    buffer: Optional[Buffer], size: Optional[int] = None, use_java: bool = False
) -> int:
    """UTF-16 bytes needed for a UTF-8 source; ``use_java`` accepts ``C0 80``."""
    return strsize_from(get_handler(Encoding.UTF16LE), _utf8(use_java), buffer, size)


def strsize_utf16_from_utf32le(buffer: Optional[Buffer], size: Optional[int] = None) -> int:
    return strsize_from(get_handler(Encoding.UTF16LE), get_handler(Encoding.UTF32LE), buffer, size)


def strsize_utf16_from_utf32be(buffer: Optional[Buffer], size: Optional[int] = None) -> int:
    return strsize_from(get_handler(Encoding.UTF16LE), get_handler(Encoding.UTF32BE), buffer, size)
