import libutf
from libutf import Encoding, UtfText, get_handler, transcode


def test_exports_resolve() -> None:
    for name in libutf.__all__:
        assert hasattr(libutf, name), name


def test_top_level_round_trip() -> None:
    src = get_handler(Encoding.UTF16LE)
    dst = get_handler(Encoding.UTF8_JAVA)
    data = "a\x00b".encode("utf-16-le")
    size = libutf.strsize_from(dst, src, data, len(data))
    out = bytearray(size)

    result = transcode(dst, UtfText(out), src, UtfText(data))

    assert result.ok is True
    assert bytes(out) == b"a\xC0\x80b"
