import logging

import pytest

from libutf.core.handlers import JavaUtf8Handler, Utf8Handler
from libutf.core.registry import (
    HandlerRegistry,
    default_handler_registry,
    get_handler,
    get_handler_other,
    resolve_encoding,
)
from libutf.core.text import UtfText
from libutf.core.unicode import FAILURE_BIT, CodecError, Encoding, UtfOtherType, UtfType

UTF8 = get_handler(Encoding.UTF8)
UTF16LE = get_handler(Encoding.UTF16LE)


@pytest.mark.parametrize(
    "tag, utf_type, unit_size, len_bom, len_null",
    [
        (Encoding.UTF8, UtfType.UTF8, 1, 3, 1),
        (Encoding.UTF8_JAVA, UtfType.UTF8, 1, 3, 1),
        (Encoding.UTF16LE, UtfType.UTF16LE, 2, 2, 2),
        (Encoding.UTF16BE, UtfType.UTF16BE, 2, 2, 2),
        (Encoding.UTF32LE, UtfType.UTF32LE, 4, 4, 4),
        (Encoding.UTF32BE, UtfType.UTF32BE, 4, 4, 4),
        (Encoding.BYTE, UtfType.OTHER, 1, 0, 1),
        (Encoding.ASCII, UtfType.OTHER, 1, 0, 1),
        (Encoding.CP1252, UtfType.OTHER, 1, 0, 1),
    ],
)
def test_handler_capabilities(tag, utf_type, unit_size, len_bom, len_null) -> None:
    handler = get_handler(tag)

    assert handler.encoding is tag
    assert handler.utf_type is utf_type
    assert handler.unit_size == unit_size
    assert handler.len_bom() == len_bom
    assert handler.len_null() == len_null


def test_registry_hands_out_shared_instances() -> None:
    assert get_handler() is get_handler(UtfType.OTHER)
    assert get_handler() is get_handler(Encoding.UTF8_JAVA)
    assert get_handler_other() is get_handler(UtfOtherType.JUTF8)
    assert get_handler("UTF-16le") is get_handler(UtfType.UTF16LE)
    assert get_handler_other(UtfOtherType.ISO8859_1) is get_handler("latin-1")
    assert isinstance(get_handler(UtfType.UTF8), Utf8Handler)
    assert isinstance(get_handler(), JavaUtf8Handler)


def test_registry_rejects_unknown_names() -> None:
    with pytest.raises(ValueError):
        get_handler("ebcdic")
    with pytest.raises(ValueError):
        resolve_encoding(42)  # type: ignore[arg-type]


def test_empty_registry_raises_for_missing_handler() -> None:
    reg = HandlerRegistry()

    with pytest.raises(ValueError):
        reg.get(Encoding.UTF8)


def test_default_registry_covers_every_encoding() -> None:
    reg = default_handler_registry()

    assert set(reg.encodings()) == set(Encoding)
    assert len(reg.handlers()) == len(Encoding)


def test_java_handler_nul_handling() -> None:
    java = get_handler(Encoding.UTF8_JAVA)
    buf = bytearray(3)

    assert java.set(buf, 0).as_tuple() == (True, 2)
    assert bytes(buf[:2]) == b"\xC0\x80"
    assert java.set_null(buf).as_tuple() == (True, 1)
    assert buf[0] == 0
    assert java.get(b"\xC0\x80").as_tuple() == (True, 0, 2)
    assert UTF8.get(b"\xC0\x80").ok is False
    assert java.len(0) == 2
    assert UTF8.len(0) == 1


def test_single_byte_handlers() -> None:
    latin1 = get_handler(Encoding.BYTE)
    ascii_ = get_handler(Encoding.ASCII)
    cp1252 = get_handler(Encoding.CP1252)
    buf = bytearray(1)

    assert latin1.set_bom(buf).as_tuple() == (True, 0)
    assert latin1.set(buf, 0xE9).ok is True
    assert ascii_.set(buf, 0xE9).ok is False
    assert cp1252.set(buf, 0x20AC).ok is True
    assert buf == bytearray(b"\x80")
    assert cp1252.get(b"\x9D").as_tuple() == (False, FAILURE_BIT | 0x9D, 1)
    assert latin1.strlen(b"abc\x00def") == 3
    assert latin1.strlen(b"abc\x00def", 7) == 7


def test_read_advances_even_on_failure() -> None:
    text = UtfText(b"\xFFA")

    bad = UTF8.read(text)
    assert bad.ok is False
    assert bad.lead_byte == 0xFF
    assert text.offset == 1

    good = UTF8.read(text)
    assert good.as_tuple() == (True, ord("A"), 1)
    assert text.offset == 2

    end = UTF8.read(text)
    assert end.as_tuple() == (False, 0, 0)
    assert text.offset == 2


def test_get_text_past_end_is_a_plain_failure() -> None:
    text = UtfText(b"ab", offset=3)

    res = UTF8.get_text(text)

    assert res.as_tuple() == (False, 0, 0)
    assert res.error is CodecError.UNDERRUN
    assert UTF8.read(text).bytes == 0
    assert text.offset == 3


def test_write_sequence_fills_buffer() -> None:
    buf = bytearray(8)
    text = UtfText(buf)

    assert UTF16LE.write_bom(text).as_tuple() == (True, 2)
    assert UTF16LE.write(text, 0x1F600).as_tuple() == (True, 4)
    assert UTF16LE.write_null(text).as_tuple() == (True, 2)
    assert text.offset == 8

    overflow = UTF16LE.write(text, 0x41)
    assert overflow.as_tuple() == (False, 0)
    assert text.offset == 8
    assert bytes(buf) == b"\xFF\xFE" + "\U0001F600".encode("utf-16-le") + b"\x00\x00"


def test_set_text_leaves_cursor() -> None:
    buf = bytearray(4)
    text = UtfText(buf, offset=1)

    res = UTF8.set_text(text, 0xE9)

    assert res.as_tuple() == (True, 2)
    assert text.offset == 1
    assert bytes(buf) == b"\x00\xC3\xA9\x00"


def test_write_respects_logical_length() -> None:
    buf = bytearray(4)
    text = UtfText(buf, length=2)

    assert UTF8.write(text, 0x20AC).as_tuple() == (False, 0)
    assert buf == bytearray(4)


def test_validate() -> None:
    good = UtfText("héllo".encode("utf-8"))
    assert UTF8.validate(good) is True
    assert good.offset == 0

    bad = UtfText(b"ab\xFFcd")
    assert UTF8.validate(bad) is False
    assert bad.offset == 0

    assert UTF8.validate(UtfText(b"ab\xFFcd", offset=3)) is True
    assert UTF8.validate(UtfText(b"")) is True
    assert UTF8.validate(UtfText(None)) is False
    assert UTF8.validate(UtfText(b"ab", offset=3)) is False
    # trailing half code unit
    assert UTF16LE.validate(UtfText(b"A\x00B")) is False


def test_validate_logs_failure_offset(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="libutf"):
        UTF8.validate(UtfText(b"a\xC3"))

    assert any("decode failed at offset 1" in rec.getMessage() for rec in caplog.records)


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"\r\n", (True, 0x0A, 2)),
        (b"\n\r", (True, 0x0A, 2)),
        (b"\r", (True, 0x0A, 1)),
        (b"\n", (True, 0x0A, 1)),
        (b"\r\r", (True, 0x0A, 1)),
        (b"\n\n", (True, 0x0A, 1)),
        (b"\x0B", (True, 0x0A, 1)),
        (b"\x0C", (True, 0x0A, 1)),
        ("\u0085".encode("utf-8"), (True, 0x0A, 2)),
        ("\u2028".encode("utf-8"), (True, 0x0A, 3)),
        ("\u2029x".encode("utf-8"), (True, 0x0A, 3)),
        (b"x\n", (True, ord("x"), 1)),
        (b"\r\xFF", (True, 0x0A, 1)),
    ],
)
def test_get_nlf_utf8(data, expected) -> None:
    text = UtfText(data)

    assert UTF8.get_nlf(text).as_tuple() == expected
    assert text.offset == 0


def test_get_nlf_utf16_pair_covers_both_units() -> None:
    assert UTF16LE.get_nlf(UtfText("\r\n".encode("utf-16-le"))).as_tuple() == (True, 0x0A, 4)
    latin1 = get_handler(Encoding.BYTE)
    assert latin1.get_nlf(UtfText(b"\x85")).as_tuple() == (True, 0x0A, 1)


def test_read_nlf_advances() -> None:
    text = UtfText(b"\r\nx")

    UTF8.read_nlf(text)

    assert text.offset == 2


def test_read_line_scenario() -> None:
    data = b"ab\r\ncd\x00"
    text = UtfText(data)

    first = UTF8.read_line(text)
    assert first.ok is True
    assert first.line.length == 2
    assert first.line.tobytes() == b"ab"
    assert first.bytes == 4
    assert text.offset == 4

    second = UTF8.read_line(text)
    assert second.ok is True
    assert second.line.tobytes() == b"cd"
    assert second.bytes == 3
    assert text.offset == 7

    third = UTF8.read_line(text)
    assert third.ok is False
    assert text.offset == 7


def test_get_line_failures() -> None:
    assert UTF8.get_line(UtfText(b"no terminator")).ok is False
    assert UTF8.get_line(UtfText(None)).ok is False
    assert UTF8.get_line(UtfText(b"ab\n", offset=4)).ok is False

    text = UtfText(b"a\xFF\n")
    res = UTF8.read_line(text)
    assert res.ok is False
    assert res.bytes == 0
    assert text.offset == 0


def test_get_line_utf16() -> None:
    data = "one\u2028two\r\n".encode("utf-16-be")
    text = UtfText(data)

    lines = list(UTF16LE.iter_lines(UtfText("x\n".encode("utf-16-le"))))
    assert [line.tobytes() for line in lines] == ["x".encode("utf-16-le")]

    be = get_handler(Encoding.UTF16BE)
    first = be.read_line(text)
    assert first.line.tobytes() == "one".encode("utf-16-be")
    assert first.bytes == 8
    second = be.read_line(text)
    assert second.line.tobytes() == "two".encode("utf-16-be")
    assert text.offset == len(data)


def test_iter_lines_leaves_unterminated_tail() -> None:
    text = UtfText(b"one\ntwo\r\nthree")

    lines = [line.tobytes() for line in UTF8.iter_lines(text)]

    assert lines == [b"one", b"two"]
    assert text.offset == 9
    assert text.tobytes() == b"three"


def test_line_view_is_zero_copy() -> None:
    buf = bytearray(b"ab\n")
    res = UTF8.get_line(UtfText(buf))

    buf[0] = ord("z")

    assert res.line.tobytes() == b"zb"


def test_handler_strsize_and_strlen() -> None:
    data = "héllo\U0001F600".encode("utf-16-le") + b"\x00\x00junk"

    assert UTF16LE.strsize(data) == 14
    assert UTF16LE.strlen(data) == 6
    assert UTF8.strlen("héllo".encode("utf-8") + b"\x00x") == 5
    assert UTF8.strsize(b"abc\x00") == 3
