import pytest

from libutf.core.registry import get_handler
from libutf.core.text import UtfText
from libutf.core.transcode import (
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
from libutf.core.unicode import CodecError, Encoding

SAMPLE = "héllo, wörld € 中文 \U0001F600\U0010FFFF"

PY_CODECS = {
    Encoding.UTF8: "utf-8",
    Encoding.UTF16LE: "utf-16-le",
    Encoding.UTF16BE: "utf-16-be",
    Encoding.UTF32LE: "utf-32-le",
    Encoding.UTF32BE: "utf-32-be",
}


def test_named_estimators_terminated() -> None:
    expected = len(SAMPLE.encode("utf-8"))

    assert strsize_utf8_from_utf16le(SAMPLE.encode("utf-16-le") + b"\x00\x00") == expected
    assert strsize_utf8_from_utf16be(SAMPLE.encode("utf-16-be") + b"\x00\x00") == expected
    assert strsize_utf8_from_utf32le(SAMPLE.encode("utf-32-le") + bytes(4)) == expected
    assert strsize_utf8_from_utf32be(SAMPLE.encode("utf-32-be") + bytes(4)) == expected

    utf16 = len(SAMPLE.encode("utf-16-le"))
    assert strsize_utf16_from_utf8(SAMPLE.encode("utf-8") + b"\x00") == utf16
    assert strsize_utf16_from_utf32le(SAMPLE.encode("utf-32-le")) == utf16
    assert strsize_utf16_from_utf32be(SAMPLE.encode("utf-32-be") + bytes(4) + b"junk") == utf16


def test_bounded_estimate_counts_embedded_nul() -> None:
    data = "a\x00b".encode("utf-16-le")

    assert strsize_utf8_from_utf16le(data) == 1
    assert strsize_utf8_from_utf16le(data, len(data)) == 3
    assert strsize_utf8_from_utf16le(data, len(data), use_java=True) == 4


def test_java_nul_is_content_not_terminator() -> None:
    data = b"a\xC0\x80b\x00zz"

    assert strsize_utf16_from_utf8(data, use_java=True) == 6
    # strict UTF-8 skips C0 and 80 as malformed
    assert strsize_utf16_from_utf8(data) == 4


def test_estimate_skips_malformed_and_stops_on_underrun() -> None:
    assert strsize_utf16_from_utf8(b"a\xFFb", 3) == 4
    # trailing odd byte is an underrun
    assert strsize_utf8_from_utf16le(b"A\x00B", 3) == 1
    # unpaired surrogate is skipped a unit at a time
    assert strsize_utf8_from_utf16le(b"\x00\xD8A\x00", 4) == 1
    assert strsize_utf8_from_utf32le(None) == 0


@pytest.mark.parametrize("src_enc", list(PY_CODECS))
@pytest.mark.parametrize("dst_enc", list(PY_CODECS))
def test_estimate_equals_sum_of_lengths(src_enc, dst_enc) -> None:
    src = get_handler(src_enc)
    dst = get_handler(dst_enc)
    data = SAMPLE.encode(PY_CODECS[src_enc])

    size = strsize_from(dst, src, data, len(data))

    assert size == sum(dst.len(ord(ch)) for ch in SAMPLE)
    assert size == len(SAMPLE.encode(PY_CODECS[dst_enc]))


def test_estimate_then_transcode() -> None:
    src = get_handler(Encoding.UTF8)
    dst = get_handler(Encoding.UTF16BE)
    data = SAMPLE.encode("utf-8")

    size = strsize_from(dst, src, data, len(data))
    out = bytearray(size)
    src_text = UtfText(data)
    dst_text = UtfText(out)
    result = transcode(dst, dst_text, src, src_text)

    assert result.ok is True
    assert result.read == len(data)
    assert result.written == size
    assert bytes(out) == SAMPLE.encode("utf-16-be")
    assert src_text.at_end and dst_text.at_end


def test_transcode_stops_at_unencodable_code_point() -> None:
    src_text = UtfText("hé!".encode("utf-8"))
    dst_text = UtfText(bytearray(8))

    result = transcode(get_handler(Encoding.ASCII), dst_text, get_handler(Encoding.UTF8), src_text)

    assert result.ok is False
    assert result.error is CodecError.OUT_OF_RANGE
    assert (result.read, result.written) == (1, 1)
    assert src_text.offset == 1


def test_transcode_reports_decode_failure_and_full_destination() -> None:
    utf8 = get_handler(Encoding.UTF8)
    latin1 = get_handler(Encoding.BYTE)

    bad = transcode(latin1, UtfText(bytearray(4)), utf8, UtfText(b"a\xFFb"))
    assert bad.ok is False
    assert bad.error is CodecError.MALFORMED
    assert bad.read == 1

    full = transcode(utf8, UtfText(bytearray(1)), latin1, UtfText(b"\xE9"))
    assert full.ok is False
    assert full.error is CodecError.UNDERRUN
    assert full.written == 0
