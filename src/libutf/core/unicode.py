# unicode.py
# SPDX-License-Identifier: MIT
"""Code-point value model, encoding tags and codec result types.

Decoded values are plain ``int`` code points. A failed decode still returns
an inspectable value: bit 31 (``FAILURE_BIT``) is set, and for byte-oriented
encodings the low byte carries the offending lead byte. The structured
``CodecError`` carried alongside makes the failure kind explicit without
having to pick the sentinel apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

__all__ = [
    "MAX_CODE_POINT",
    "FAILURE_BIT",
    "SURROGATE_FIRST",
    "SURROGATE_LAST",
    "Buffer",
    "UtfType",
    "UtfOtherType",
    "Encoding",
    "CodecError",
    "DecodeResult",
    "EncodeResult",
    "is_scalar",
    "is_surrogate",
    "underrun",
    "decoded",
    "encoded",
    "encode_failed",
]

MAX_CODE_POINT = 0x10FFFF
FAILURE_BIT = 0x80000000
SURROGATE_FIRST = 0xD800
SURROGATE_LAST = 0xDFFF

# Anything indexable to ints with len(): bytes, bytearray, memoryview.
Buffer = Union[bytes, bytearray, memoryview]


class UtfType(Enum):
    """Encodings that ``identify_utf`` can report."""

    UTF8 = "utf8"
    UTF16LE = "utf16le"
    UTF16BE = "utf16be"
    UTF32LE = "utf32le"
    UTF32BE = "utf32be"
    OTHER = "other"


class UtfOtherType(Enum):
    """Handlers reachable only by explicit request."""

    JUTF8 = "jutf8"
    ISO8859_1 = "iso8859_1"
    ASCII = "ascii"
    CP1252 = "cp1252"


class Encoding(Enum):
    """Closed set of handler kinds; one shared handler exists per member."""

    UTF8 = "utf8"
    UTF8_JAVA = "utf8_java"
    UTF16LE = "utf16le"
    UTF16BE = "utf16be"
    UTF32LE = "utf32le"
    UTF32BE = "utf32be"
    BYTE = "byte"
    ASCII = "ascii"
    CP1252 = "cp1252"

    @classmethod
    def parse(cls, name: str) -> "Encoding":
        """Resolve a loose name such as ``"UTF-16le"`` or ``"latin-1"``."""
        key = name.strip().lower().replace("-", "").replace("_", "").replace(" ", "")
        member = _ENCODING_ALIASES.get(key)
        if member is None:
            raise ValueError(f"Unknown encoding {name!r}")
        return member


_ENCODING_ALIASES: dict[str, Encoding] = {
    "utf8": Encoding.UTF8,
    "utf8java": Encoding.UTF8_JAVA,
    "jutf8": Encoding.UTF8_JAVA,
    "mutf8": Encoding.UTF8_JAVA,
    "utf16le": Encoding.UTF16LE,
    "utf16be": Encoding.UTF16BE,
    "utf32le": Encoding.UTF32LE,
    "utf32be": Encoding.UTF32BE,
    "byte": Encoding.BYTE,
    "iso88591": Encoding.BYTE,
    "latin1": Encoding.BYTE,
    "ascii": Encoding.ASCII,
    "usascii": Encoding.ASCII,
    "cp1252": Encoding.CP1252,
    "windows1252": Encoding.CP1252,
}


class CodecError(Enum):
    """Why a decode or encode failed."""

    UNDERRUN = "underrun"          # not enough input or output space
    MALFORMED = "malformed"        # bad lead/continuation byte or overlong form
    UNPAIRED = "unpaired"          # UTF-16 surrogate without its partner
    OUT_OF_RANGE = "out_of_range"  # above U+10FFFF, surrogate value, or unmappable


@dataclass(slots=True, frozen=True)
class DecodeResult:
    """Outcome of decoding one code point.

    ``bytes`` is the number of buffer bytes consumed on success. On failure it
    is the code-unit width the caller can skip to make progress, or 0 when the
    buffer is exhausted.
    """

    ok: bool
    unicode: int
    bytes: int
    error: Optional[CodecError] = None

    @property
    def lead_byte(self) -> Optional[int]:
        """Return the offending lead byte carried in a byte-level sentinel."""
        if self.error is not CodecError.MALFORMED or not self.unicode & FAILURE_BIT:
            return None
        return self.unicode & 0xFF

    def as_tuple(self) -> tuple[bool, int, int]:
        return (self.ok, self.unicode, self.bytes)


@dataclass(slots=True, frozen=True)
class EncodeResult:
    """Outcome of encoding one code point; ``bytes`` is 0 on failure."""

    ok: bool
    bytes: int
    error: Optional[CodecError] = None

    def as_tuple(self) -> tuple[bool, int]:
        return (self.ok, self.bytes)


def is_surrogate(unicode: int) -> bool:
    return (unicode & 0xFFFFF800) == SURROGATE_FIRST


def is_scalar(unicode: int) -> bool:
    """Return True for a Unicode scalar value (any code point but surrogates)."""
    return 0 <= unicode <= MAX_CODE_POINT and not is_surrogate(unicode)


# Shared instances for the results that carry no payload.
_UNDERRUN = DecodeResult(False, 0, 0, CodecError.UNDERRUN)
_ENCODE_UNDERRUN = EncodeResult(False, 0, CodecError.UNDERRUN)
_ENCODE_RANGE = EncodeResult(False, 0, CodecError.OUT_OF_RANGE)


def underrun() -> DecodeResult:
    return _UNDERRUN


def decoded(unicode: int, nbytes: int) -> DecodeResult:
    return DecodeResult(True, unicode, nbytes)


def encoded(nbytes: int) -> EncodeResult:
    return EncodeResult(True, nbytes)


def encode_failed(error: CodecError) -> EncodeResult:
    if error is CodecError.UNDERRUN:
        return _ENCODE_UNDERRUN
    if error is CodecError.OUT_OF_RANGE:
        return _ENCODE_RANGE
    return EncodeResult(False, 0, error)
