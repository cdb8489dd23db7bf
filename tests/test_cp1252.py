from libutf.core.cp1252 import (
    UNDEFINED_BYTES,
    Cp1252Strictness,
    cp1252_to_unicode,
    unicode_to_cp1252,
)


def test_undefined_bytes() -> None:
    assert UNDEFINED_BYTES == frozenset({0x81, 0x8D, 0x8F, 0x90, 0x9D})


def test_strict_mapping() -> None:
    assert cp1252_to_unicode(0x80) == 0x20AC
    assert cp1252_to_unicode(0x9F) == 0x0178
    assert cp1252_to_unicode(0x41) == 0x41
    assert cp1252_to_unicode(0xE9) == 0xE9
    assert cp1252_to_unicode(0x81) is None
    assert cp1252_to_unicode(0x100) is None
    assert unicode_to_cp1252(0x20AC) == 0x80
    assert unicode_to_cp1252(0x2122) == 0x99
    assert unicode_to_cp1252(0x81) is None
    assert unicode_to_cp1252(0x80) is None


def test_pass_through_undefined() -> None:
    mode = Cp1252Strictness.PASS_THROUGH_UNDEFINED

    assert cp1252_to_unicode(0x8D, mode) == 0x8D
    assert unicode_to_cp1252(0x8D, mode) == 0x8D
    assert unicode_to_cp1252(0x80, mode) is None
    assert cp1252_to_unicode(0x80, mode) == 0x20AC
