# handlers.py
# SPDX-License-Identifier: MIT
"""
Encoding handlers: one polymorphic interface over every supported encoding.

Each handler is a stateless adapter over the functions in ``primitives`` and
``strings``. The per-encoding classes only bind those functions (and a few
constants); everything cursor-based (read/write, validation, newline folding,
line splitting) lives once on ``UtfHandler`` and works for any encoding.

Handlers hold no data, so a single shared instance per encoding is enough;
obtain them through ``libutf.core.registry.get_handler`` rather than by
instantiating these classes.

Capabilities (summary)
----------------------
Raw buffers
    get(buffer, size) -> DecodeResult
    set(buffer, unicode, size) -> EncodeResult
    set_bom / set_null (buffer, size) -> EncodeResult
    len(unicode), len_bom(), len_null(), strsize(buffer), strlen(buffer, size)
Cursors (``UtfText``)
    get_text / set_text / set_bom_text / set_null_text   (cursor unchanged)
    read / write / write_bom / write_null                 (cursor advances)
    validate, get_nlf / read_nlf, get_line / read_line, iter_lines
"""

from __future__ import annotations

from functools import partial
from typing import Callable, ClassVar, Iterator, Optional

from .log import get_logger
from .primitives import (
    decode_byte,
    decode_cp1252,
    decode_utf8,
    decode_utf16be,
    decode_utf16le,
    decode_utf32be,
    decode_utf32le,
    encode_byte,
    encode_cp1252,
    encode_utf8,
    encode_utf16be,
    encode_utf16le,
    encode_utf32be,
    encode_utf32le,
    len_byte,
    len_cp1252,
    len_utf8,
    len_utf16,
    len_utf32,
    set_utf8_bom,
    set_utf8_null,
    set_utf16_null,
    set_utf16be_bom,
    set_utf16le_bom,
    set_utf32_null,
    set_utf32be_bom,
    set_utf32le_bom,
)
from .strings import (
    strlen_byte,
    strlen_utf8,
    strlen_utf16be,
    strlen_utf16le,
    strlen_utf32,
    strsize_utf8,
    strsize_utf16,
    strsize_utf32,
)
from .text import LineResult, UtfText
from .unicode import (
    Buffer,
    CodecError,
    DecodeResult,
    Encoding,
    EncodeResult,
    UtfType,
    decoded,
    encode_failed,
    encoded,
    underrun,
)

__all__ = [
    "UtfHandler",
    "Utf8Handler",
    "JavaUtf8Handler",
    "Utf16LeHandler",
    "Utf16BeHandler",
    "Utf32LeHandler",
    "Utf32BeHandler",
    "ByteHandler",
    "AsciiHandler",
    "Cp1252Handler",
]

log = get_logger(__name__)

LF = 0x0A
CR = 0x0D
# Code points folded to LF besides CR/LF themselves: VT, FF, NEL, LS, PS.
_LINE_BREAKS = frozenset({0x0B, 0x0C, 0x85, 0x2028, 0x2029})


def _no_bom(buffer: Optional[Buffer], size: Optional[int] = None) -> EncodeResult:
    return encoded(0)


class UtfHandler:
    """Base handler. Subclasses bind the primitive functions below."""

    encoding: ClassVar[Encoding]
    utf_type: ClassVar[UtfType]
    unit_size: ClassVar[int]
    bom: ClassVar[bytes] = b""
    null: ClassVar[bytes] = b"\x00"

    _decode: ClassVar[Callable[..., DecodeResult]]
    _encode: ClassVar[Callable[..., EncodeResult]]
    _len: ClassVar[Callable[[int], int]]
    _set_bom: ClassVar[Callable[..., EncodeResult]]
    _set_null: ClassVar[Callable[..., EncodeResult]]
    _strsize: ClassVar[Callable[[Optional[Buffer]], int]]
    _strlen: ClassVar[Callable[..., int]]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.encoding.value}>"

    # ---- raw buffer primitives ----

    def len(self, unicode: int) -> int:
        """Encoded byte length of ``unicode``, or 0 if it cannot be encoded."""
        return self._len(unicode)

    def len_bom(self) -> int:
        return len(self.bom)

    def len_null(self) -> int:
        return len(self.null)

    def get(self, buffer: Optional[Buffer], size: Optional[int] = None) -> DecodeResult:
        return self._decode(buffer, size)

    def set(self, buffer: Optional[Buffer], unicode: int, size: Optional[int] = None) -> EncodeResult:
        return self._encode(buffer, unicode, size)

    def set_bom(self, buffer: Optional[Buffer], size: Optional[int] = None) -> EncodeResult:
        return self._set_bom(buffer, size)

    def set_null(self, buffer: Optional[Buffer], size: Optional[int] = None) -> EncodeResult:
        return self._set_null(buffer, size)

    def strsize(self, buffer: Optional[Buffer]) -> int:
        """Byte extent of a terminated string, terminator excluded."""
        return self._strsize(buffer)

    def strlen(self, buffer: Optional[Buffer], size: Optional[int] = None) -> int:
        """Code-point count; terminated when ``size`` is None, else bounded."""
        return self._strlen(buffer, size)

    # ---- cursor operations, cursor left in place ----

    def get_text(self, text: UtfText) -> DecodeResult:
        window = text.window()
        if window is None:
            return underrun()
        return self.get(window)

    def set_text(self, text: UtfText, unicode: int) -> EncodeResult:
        window = text.window()
        if window is None:
            return encode_failed(CodecError.UNDERRUN)
        return self.set(window, unicode)

    def set_bom_text(self, text: UtfText) -> EncodeResult:
        window = text.window()
        if window is None:
            return encode_failed(CodecError.UNDERRUN)
        return self.set_bom(window)

    def set_null_text(self, text: UtfText) -> EncodeResult:
        window = text.window()
        if window is None:
            return encode_failed(CodecError.UNDERRUN)
        return self.set_null(window)

    # ---- cursor operations that advance, even on failure ----

    def read(self, text: UtfText) -> DecodeResult:
        """Decode at the cursor and move past the bytes reported.

        A malformed unit still advances the cursor by its width, so a caller
        can skip bad input by reading again.
        """
        result = self.get_text(text)
        text.offset += result.bytes
        return result

    def write(self, text: UtfText, unicode: int) -> EncodeResult:
        result = self.set_text(text, unicode)
        text.offset += result.bytes
        return result

    def write_bom(self, text: UtfText) -> EncodeResult:
        result = self.set_bom_text(text)
        text.offset += result.bytes
        return result

    def write_null(self, text: UtfText) -> EncodeResult:
        result = self.set_null_text(text)
        text.offset += result.bytes
        return result

    # ---- composite operations ----

    def validate(self, text: UtfText) -> bool:
        """Return True if everything from the cursor to ``length`` decodes.

        Works on a private copy of the cursor; ``text`` is not modified.
        """
        if text.buffer is None or text.offset < 0 or text.offset > text.length:
            return False
        scan = text.copy()
        while scan.offset < scan.length:
            start = scan.offset
            result = self.read(scan)
            if not result.ok:
                log.debug(
                    "validate(%s): decode failed at offset %d (%s)",
                    self.encoding.value,
                    start,
                    result.error.value if result.error else "unknown",
                )
                return False
        return scan.offset == scan.length

    def get_nlf(self, text: UtfText) -> DecodeResult:
        """Decode at the cursor with every line break reported as LF.

        CR, LF, VT, FF, NEL, LS and PS all come back as 0x0A. A CR LF or
        LF CR pair is folded into one break and ``bytes`` covers both.
        """
        result = self.get_text(text)
        if not result.ok:
            return result
        unicode = result.unicode
        if unicode == LF or unicode == CR:
            nbytes = result.bytes
            peek = text.copy()
            peek.offset += nbytes
            pairing = self.get_text(peek)
            # 0x0A ^ 0x0D == 0x07
            if pairing.ok and unicode == (pairing.unicode ^ 0x07):
                nbytes += pairing.bytes
            return decoded(LF, nbytes)
        if unicode in _LINE_BREAKS:
            return decoded(LF, result.bytes)
        return result

    def read_nlf(self, text: UtfText) -> DecodeResult:
        result = self.get_nlf(text)
        text.offset += result.bytes
        return result

    def get_line(self, text: UtfText) -> LineResult:
        """Find the next line starting at the cursor.

        The line ends at a line break (see ``get_nlf``) or a U+0000. On
        success ``line`` is a zero-copy view of the content without the
        terminator and ``bytes`` runs to just past the terminator. Fails,
        reporting 0 bytes, when a decode error or the end of the buffer is
        reached before any terminator.
        """
        window = text.window()
        if window is None:
            return LineResult(False, UtfText(None), 0)
        scan = UtfText(window)
        while True:
            result = self.get_nlf(scan)
            if not result.ok:
                return LineResult(False, UtfText(None), 0)
            if result.unicode == LF or result.unicode == 0:
                line = UtfText(window[:scan.offset])
                return LineResult(True, line, scan.offset + result.bytes)
            scan.offset += result.bytes

    def read_line(self, text: UtfText) -> LineResult:
        result = self.get_line(text)
        text.offset += result.bytes
        return result

    def iter_lines(self, text: UtfText) -> Iterator[UtfText]:
        """Yield terminated lines, advancing ``text`` past each one.

        Stops at the first position where no terminated line remains; any
        unterminated tail is left unread at ``text.offset``.
        """
        while True:
            result = self.read_line(text)
            if not result.ok:
                return
            yield result.line


class Utf8Handler(UtfHandler):
    encoding = Encoding.UTF8
    utf_type = UtfType.UTF8
    unit_size = 1
    bom = b"\xEF\xBB\xBF"

    _decode = staticmethod(decode_utf8)
    _encode = staticmethod(encode_utf8)
    _len = staticmethod(len_utf8)
    _set_bom = staticmethod(set_utf8_bom)
    _set_null = staticmethod(set_utf8_null)
    _strsize = staticmethod(strsize_utf8)
    _strlen = staticmethod(strlen_utf8)


class JavaUtf8Handler(Utf8Handler):
    """UTF-8 that writes and accepts U+0000 as ``C0 80``.

    The string terminator is still a single 0x00 byte.
    """

    encoding = Encoding.UTF8_JAVA

    _decode = staticmethod(partial(decode_utf8, use_java=True))
    _encode = staticmethod(partial(encode_utf8, use_java=True))
    _len = staticmethod(partial(len_utf8, use_java=True))


class Utf16LeHandler(UtfHandler):
    encoding = Encoding.UTF16LE
    utf_type = UtfType.UTF16LE
    unit_size = 2
    bom = b"\xFF\xFE"
    null = b"\x00\x00"

    _decode = staticmethod(decode_utf16le)
    _encode = staticmethod(encode_utf16le)
    _len = staticmethod(len_utf16)
    _set_bom = staticmethod(set_utf16le_bom)
    _set_null = staticmethod(set_utf16_null)
    _strsize = staticmethod(strsize_utf16)
    _strlen = staticmethod(strlen_utf16le)


class Utf16BeHandler(Utf16LeHandler):
    encoding = Encoding.UTF16BE
    utf_type = UtfType.UTF16BE
    bom = b"\xFE\xFF"

    _decode = staticmethod(decode_utf16be)
    _encode = staticmethod(encode_utf16be)
    _set_bom = staticmethod(set_utf16be_bom)
    _strlen = staticmethod(strlen_utf16be)


class Utf32LeHandler(UtfHandler):
    encoding = Encoding.UTF32LE
    utf_type = UtfType.UTF32LE
    unit_size = 4
    bom = b"\xFF\xFE\x00\x00"
    null = b"\x00\x00\x00\x00"

    _decode = staticmethod(decode_utf32le)
    _encode = staticmethod(encode_utf32le)
    _len = staticmethod(len_utf32)
    _set_bom = staticmethod(set_utf32le_bom)
    _set_null = staticmethod(set_utf32_null)
    _strsize = staticmethod(strsize_utf32)
    _strlen = staticmethod(strlen_utf32)


class Utf32BeHandler(Utf32LeHandler):
    encoding = Encoding.UTF32BE
    utf_type = UtfType.UTF32BE
    bom = b"\x00\x00\xFE\xFF"

    _decode = staticmethod(decode_utf32be)
    _encode = staticmethod(encode_utf32be)
    _set_bom = staticmethod(set_utf32be_bom)


class ByteHandler(UtfHandler):
    """ISO-8859-1: each byte is the code point of the same value. No BOM."""

    encoding = Encoding.BYTE
    utf_type = UtfType.OTHER
    unit_size = 1

    _decode = staticmethod(decode_byte)
    _encode = staticmethod(encode_byte)
    _len = staticmethod(len_byte)
    _set_bom = staticmethod(_no_bom)
    _set_null = staticmethod(set_utf8_null)
    _strsize = staticmethod(strsize_utf8)
    _strlen = staticmethod(strlen_byte)


class AsciiHandler(ByteHandler):
    encoding = Encoding.ASCII

    _decode = staticmethod(partial(decode_byte, use_ascii=True))
    _encode = staticmethod(partial(encode_byte, use_ascii=True))
    _len = staticmethod(partial(len_byte, use_ascii=True))


class Cp1252Handler(ByteHandler):
    """Windows-1252 with unassigned bytes rejected."""

    encoding = Encoding.CP1252

    _decode = staticmethod(decode_cp1252)
    _encode = staticmethod(encode_cp1252)
    _len = staticmethod(len_cp1252)
