# primitives.py
# SPDX-License-Identifier: MIT
"""Per-encoding decode/encode primitives.

Every function here is pure and total. Decoders take ``(buffer, size)`` and
return a ``DecodeResult``; encoders take ``(buffer, unicode, size)`` and
write into a caller-owned writable buffer (``bytearray`` or a writable
``memoryview``), returning an ``EncodeResult``. ``size`` defaults to
``len(buffer)`` and is clamped to it, so a ``memoryview`` slice can be passed
with a smaller logical extent. Nothing is allocated on the success path
beyond the result object, and nothing raises for bad input data.

Failure conventions
-------------------
- ``buffer is None`` or no bytes left: ``(False, 0, 0)`` with ``UNDERRUN``.
- UTF-8 and single-byte failures: ``bytes == 1`` and
  ``unicode == 0x80000000 | lead``.
- UTF-16 failures: ``bytes == 2`` and ``unicode == 0x80000000``.
- UTF-32 failures: ``bytes == 4`` and ``unicode == 0x80000000``.
- Encode failures always report ``bytes == 0``.
"""

from __future__ import annotations

from typing import Optional

from .cp1252 import Cp1252Strictness, cp1252_to_unicode, unicode_to_cp1252
from .unicode import (
    FAILURE_BIT,
    MAX_CODE_POINT,
    Buffer,
    CodecError,
    DecodeResult,
    EncodeResult,
    decoded,
    encode_failed,
    encoded,
    is_scalar,
    is_surrogate,
    underrun,
)

__all__ = [
    "UTF8_BOM",
    "UTF16LE_BOM",
    "UTF16BE_BOM",
    "UTF32LE_BOM",
    "UTF32BE_BOM",
    "JAVA_NULL",
    "decode_utf8",
    "encode_utf8",
    "decode_utf16le",
    "encode_utf16le",
    "decode_utf16be",
    "encode_utf16be",
    "decode_utf32le",
    "encode_utf32le",
    "decode_utf32be",
    "encode_utf32be",
    "decode_byte",
    "encode_byte",
    "decode_cp1252",
    "encode_cp1252",
    "len_utf8",
    "len_utf16",
    "len_utf32",
    "len_byte",
    "len_cp1252",
    "set_utf8_bom",
    "set_utf16le_bom",
    "set_utf16be_bom",
    "set_utf32le_bom",
    "set_utf32be_bom",
    "set_utf8_null",
    "set_utf16_null",
    "set_utf32_null",
]

UTF8_BOM = b"\xEF\xBB\xBF"
UTF16LE_BOM = b"\xFF\xFE"
UTF16BE_BOM = b"\xFE\xFF"
UTF32LE_BOM = b"\xFF\xFE\x00\x00"
UTF32BE_BOM = b"\x00\x00\xFE\xFF"
JAVA_NULL = b"\xC0\x80"

# Failure results are immutable, so build them once.
_BYTE_FAILURES = tuple(
    DecodeResult(False, FAILURE_BIT | b, 1, CodecError.MALFORMED) for b in range(256)
)
_UTF16_UNPAIRED = DecodeResult(False, FAILURE_BIT, 2, CodecError.UNPAIRED)
_UTF32_OUT_OF_RANGE = DecodeResult(False, FAILURE_BIT, 4, CodecError.OUT_OF_RANGE)


def _extent(buffer: Optional[Buffer], size: Optional[int]) -> int:
    """Return the usable byte count: ``size`` clamped to the buffer length."""
    if buffer is None:
        return 0
    n = len(buffer)
    if size is None:
        return n
    return max(0, min(size, n))


def _put(buffer: Optional[Buffer], size: Optional[int], payload: bytes) -> EncodeResult:
    n = len(payload)
    if _extent(buffer, size) < n:
        return encode_failed(CodecError.UNDERRUN)
    if n:
        buffer[0:n] = payload  # type: ignore[index]
    return encoded(n)


# -----
# UTF-8
# -----

def decode_utf8(
    buffer: Optional[Buffer],
    size: Optional[int] = None,
    *,
    use_java: bool = False,
) -> DecodeResult:
    """Decode one strictly compliant UTF-8 sequence.

    With ``use_java`` the overlong pair ``C0 80`` is accepted as U+0000; every
    other overlong form, surrogate value or value above U+10FFFF is rejected.
    A truncated or broken sequence reports the lead byte and a 1-byte skip.
    """
    n = _extent(buffer, size)
    if n < 1:
        return underrun()
    lead = buffer[0]
    if lead <= 0x7F:
        return decoded(lead, 1)
    if lead < 0xC0 or lead > 0xF7:
        # stray continuation byte or a lead that UTF-8 never uses
        return _BYTE_FAILURES[lead]
    if lead <= 0xDF:
        if n >= 2:
            b1 = buffer[1]
            if (b1 & 0xC0) == 0x80:
                value = ((lead & 0x1F) << 6) | (b1 & 0x3F)
                if value >= 0x80 or (use_java and value == 0):
                    return decoded(value, 2)
    elif lead <= 0xEF:
        if n >= 3:
            b1 = buffer[1]
            b2 = buffer[2]
            if (b1 & 0xC0) == 0x80 and (b2 & 0xC0) == 0x80:
                value = ((lead & 0x0F) << 12) | ((b1 & 0x3F) << 6) | (b2 & 0x3F)
                if value >= 0x800 and not is_surrogate(value):
                    return decoded(value, 3)
    else:
        if n >= 4:
            b1 = buffer[1]
            b2 = buffer[2]
            b3 = buffer[3]
            if (b1 & 0xC0) == 0x80 and (b2 & 0xC0) == 0x80 and (b3 & 0xC0) == 0x80:
                value = (
                    ((lead & 0x07) << 18)
                    | ((b1 & 0x3F) << 12)
                    | ((b2 & 0x3F) << 6)
                    | (b3 & 0x3F)
                )
                if 0x10000 <= value <= MAX_CODE_POINT:
                    return decoded(value, 4)
    return _BYTE_FAILURES[lead]


def encode_utf8(
    buffer: Optional[Buffer],
    unicode: int,
    size: Optional[int] = None,
    *,
    use_java: bool = False,
) -> EncodeResult:
    """Encode ``unicode`` as UTF-8; ``use_java`` writes U+0000 as ``C0 80``."""
    n = _extent(buffer, size)
    if n < 1:
        return encode_failed(CodecError.UNDERRUN)
    if not 0 <= unicode <= MAX_CODE_POINT:
        return encode_failed(CodecError.OUT_OF_RANGE)
    if unicode <= 0x7F:
        if use_java and unicode == 0:
            return _put(buffer, n, JAVA_NULL)
        buffer[0] = unicode  # type: ignore[index]
        return encoded(1)
    if unicode <= 0x7FF:
        if n < 2:
            return encode_failed(CodecError.UNDERRUN)
        buffer[0] = 0xC0 | (unicode >> 6)  # type: ignore[index]
        buffer[1] = 0x80 | (unicode & 0x3F)  # type: ignore[index]
        return encoded(2)
    if unicode <= 0xFFFF:
        if is_surrogate(unicode):
            return encode_failed(CodecError.OUT_OF_RANGE)
        if n < 3:
            return encode_failed(CodecError.UNDERRUN)
        buffer[0] = 0xE0 | (unicode >> 12)  # type: ignore[index]
        buffer[1] = 0x80 | ((unicode >> 6) & 0x3F)  # type: ignore[index]
        buffer[2] = 0x80 | (unicode & 0x3F)  # type: ignore[index]
        return encoded(3)
    if n < 4:
        return encode_failed(CodecError.UNDERRUN)
    buffer[0] = 0xF0 | (unicode >> 18)  # type: ignore[index]
    buffer[1] = 0x80 | ((unicode >> 12) & 0x3F)  # type: ignore[index]
    buffer[2] = 0x80 | ((unicode >> 6) & 0x3F)  # type: ignore[index]
    buffer[3] = 0x80 | (unicode & 0x3F)  # type: ignore[index]
    return encoded(4)


def len_utf8(unicode: int, use_java: bool = False) -> int:
    """Return the UTF-8 length of ``unicode``, or 0 if it cannot be encoded."""
    if not is_scalar(unicode):
        return 0
    if unicode <= 0x7F:
        return 2 if (use_java and unicode == 0) else 1
    if unicode <= 0x7FF:
        return 2
    if unicode <= 0xFFFF:
        return 3
    return 4


# ------
# UTF-16
# ------

def _decode_utf16(buffer: Buffer, n: int, big_endian: bool) -> DecodeResult:
    if n < 2:
        return underrun()
    if big_endian:
        value = (buffer[0] << 8) | buffer[1]
    else:
        value = (buffer[1] << 8) | buffer[0]
    if not is_surrogate(value):
        return decoded(value, 2)
    if n >= 4 and (value & 0xFC00) == 0xD800:
        if big_endian:
            low = (buffer[2] << 8) | buffer[3]
        else:
            low = (buffer[3] << 8) | buffer[2]
        if (low & 0xFC00) == 0xDC00:
            return decoded((((value & 0x3FF) << 10) | (low & 0x3FF)) + 0x10000, 4)
    return _UTF16_UNPAIRED


def _encode_utf16(buffer: Buffer, n: int, unicode: int, big_endian: bool) -> EncodeResult:
    if n < 2:
        return encode_failed(CodecError.UNDERRUN)
    if not is_scalar(unicode):
        return encode_failed(CodecError.OUT_OF_RANGE)
    if unicode <= 0xFFFF:
        units = (unicode,)
    else:
        if n < 4:
            return encode_failed(CodecError.UNDERRUN)
        v = unicode - 0x10000
        units = (0xD800 | (v >> 10), 0xDC00 | (v & 0x3FF))
    i = 0
    for unit in units:
        hi, lo = unit >> 8, unit & 0xFF
        if big_endian:
            buffer[i], buffer[i + 1] = hi, lo  # type: ignore[index]
        else:
            buffer[i], buffer[i + 1] = lo, hi  # type: ignore[index]
        i += 2
    return encoded(i)


def decode_utf16le(buffer: Optional[Buffer], size: Optional[int] = None) -> DecodeResult:
    """Decode one UTF-16LE unit or surrogate pair."""
    return _decode_utf16(buffer, _extent(buffer, size), False)  # type: ignore[arg-type]


def decode_utf16be(buffer: Optional[Buffer], size: Optional[int] = None) -> DecodeResult:
    """Decode one UTF-16BE unit or surrogate pair."""
    return _decode_utf16(buffer, _extent(buffer, size), True)  # type: ignore[arg-type]


def encode_utf16le(
    buffer: Optional[Buffer], unicode: int, size: Optional[int] = None
) -> EncodeResult:
    return _encode_utf16(buffer, _extent(buffer, size), unicode, False)  # type: ignore[arg-type]


def encode_utf16be(
    buffer: Optional[Buffer], unicode: int, size: Optional[int] = None
) -> EncodeResult:
    return _encode_utf16(buffer, _extent(buffer, size), unicode, True)  # type: ignore[arg-type]


def len_utf16(unicode: int) -> int:
    if not is_scalar(unicode):
        return 0
    return 2 if unicode <= 0xFFFF else 4


# ------
# UTF-32
# ------

def _decode_utf32(buffer: Buffer, n: int, big_endian: bool) -> DecodeResult:
    if n < 4:
        return underrun()
    byteorder = "big" if big_endian else "little"
    value = int.from_bytes(bytes(buffer[0:4]), byteorder)
    if is_scalar(value):
        return decoded(value, 4)
    return _UTF32_OUT_OF_RANGE


def _encode_utf32(buffer: Buffer, n: int, unicode: int, big_endian: bool) -> EncodeResult:
    if n < 4:
        return encode_failed(CodecError.UNDERRUN)
    if not is_scalar(unicode):
        return encode_failed(CodecError.OUT_OF_RANGE)
    buffer[0:4] = unicode.to_bytes(4, "big" if big_endian else "little")  # type: ignore[index]
    return encoded(4)


def decode_utf32le(buffer: Optional[Buffer], size: Optional[int] = None) -> DecodeResult:
    return _decode_utf32(buffer, _extent(buffer, size), False)  # type: ignore[arg-type]


def decode_utf32be(buffer: Optional[Buffer], size: Optional[int] = None) -> DecodeResult:
    return _decode_utf32(buffer, _extent(buffer, size), True)  # type: ignore[arg-type]


def encode_utf32le(
    buffer: Optional[Buffer], unicode: int, size: Optional[int] = None
) -> EncodeResult:
    return _encode_utf32(buffer, _extent(buffer, size), unicode, False)  # type: ignore[arg-type]


def encode_utf32be(
    buffer: Optional[Buffer], unicode: int, size: Optional[int] = None
) -> EncodeResult:
    return _encode_utf32(buffer, _extent(buffer, size), unicode, True)  # type: ignore[arg-type]


def len_utf32(unicode: int) -> int:
    return 4 if is_scalar(unicode) else 0


# --------------------------------
# Single byte: ISO-8859-1 / ASCII
# --------------------------------

def decode_byte(
    buffer: Optional[Buffer],
    size: Optional[int] = None,
    *,
    use_ascii: bool = False,
) -> DecodeResult:
    """Decode one byte as ISO-8859-1, or as strict ASCII with ``use_ascii``."""
    if _extent(buffer, size) < 1:
        return underrun()
    byte = buffer[0]
    if use_ascii and byte > 0x7F:
        return _BYTE_FAILURES[byte]
    return decoded(byte, 1)


def encode_byte(
    buffer: Optional[Buffer],
    unicode: int,
    size: Optional[int] = None,
    *,
    use_ascii: bool = False,
) -> EncodeResult:
    if _extent(buffer, size) < 1:
        return encode_failed(CodecError.UNDERRUN)
    if not 0 <= unicode <= (0x7F if use_ascii else 0xFF):
        return encode_failed(CodecError.OUT_OF_RANGE)
    buffer[0] = unicode  # type: ignore[index]
    return encoded(1)


def len_byte(unicode: int, use_ascii: bool = False) -> int:
    return 1 if 0 <= unicode <= (0x7F if use_ascii else 0xFF) else 0


# ------------
# Windows-1252
# ------------

def decode_cp1252(
    buffer: Optional[Buffer],
    size: Optional[int] = None,
    *,
    strictness: Cp1252Strictness = Cp1252Strictness.STRICT_UNDEFINED,
) -> DecodeResult:
    if _extent(buffer, size) < 1:
        return underrun()
    byte = buffer[0]
    unicode = cp1252_to_unicode(byte, strictness)
    if unicode is None:
        return _BYTE_FAILURES[byte]
    return decoded(unicode, 1)


def encode_cp1252(
    buffer: Optional[Buffer],
    unicode: int,
    size: Optional[int] = None,
    *,
    strictness: Cp1252Strictness = Cp1252Strictness.STRICT_UNDEFINED,
) -> EncodeResult:
    if _extent(buffer, size) < 1:
        return encode_failed(CodecError.UNDERRUN)
    byte = unicode_to_cp1252(unicode, strictness)
    if byte is None:
        return encode_failed(CodecError.OUT_OF_RANGE)
    buffer[0] = byte  # type: ignore[index]
    return encoded(1)


def len_cp1252(
    unicode: int,
    strictness: Cp1252Strictness = Cp1252Strictness.STRICT_UNDEFINED,
) -> int:
    return 0 if unicode_to_cp1252(unicode, strictness) is None else 1


# ------------------------------
# Byte-order marks / terminators
# ------------------------------

def set_utf8_bom(buffer: Optional[Buffer], size: Optional[int] = None) -> EncodeResult:
    return _put(buffer, size, UTF8_BOM)


def set_utf16le_bom(buffer: Optional[Buffer], size: Optional[int] = None) -> EncodeResult:
    return _put(buffer, size, UTF16LE_BOM)


def set_utf16be_bom(buffer: Optional[Buffer], size: Optional[int] = None) -> EncodeResult:
    return _put(buffer, size, UTF16BE_BOM)


def set_utf32le_bom(buffer: Optional[Buffer], size: Optional[int] = None) -> EncodeResult:
    return _put(buffer, size, UTF32LE_BOM)


def set_utf32be_bom(buffer: Optional[Buffer], size: Optional[int] = None) -> EncodeResult:
    return _put(buffer, size, UTF32BE_BOM)


def set_utf8_null(buffer: Optional[Buffer], size: Optional[int] = None) -> EncodeResult:
    """Write a one-byte terminator; Java-style UTF-8 terminates with 0x00 too."""
    return _put(buffer, size, b"\x00")


def set_utf16_null(buffer: Optional[Buffer], size: Optional[int] = None) -> EncodeResult:
    return _put(buffer, size, b"\x00\x00")


def set_utf32_null(buffer: Optional[Buffer], size: Optional[int] = None) -> EncodeResult:
    return _put(buffer, size, b"\x00\x00\x00\x00")
