# cp1252.py
# SPDX-License-Identifier: MIT
"""Windows-1252 byte <-> code-point mapping.

The table is taken from the standard library ``cp1252`` codec, which leaves
five bytes (0x81, 0x8D, 0x8F, 0x90, 0x9D) unassigned. The strictness mode
decides what happens to those.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

__all__ = [
    "Cp1252Strictness",
    "UNDEFINED_BYTES",
    "cp1252_to_unicode",
    "unicode_to_cp1252",
]


class Cp1252Strictness(Enum):
    STRICT_UNDEFINED = "strict_undefined"
    # Unassigned bytes map to the C1 control with the same value (WHATWG style).
    PASS_THROUGH_UNDEFINED = "pass_through_undefined"


def _build_tables() -> tuple[tuple[Optional[int], ...], dict[int, int]]:
    decode: list[Optional[int]] = []
    for byte in range(256):
        try:
            decode.append(ord(bytes([byte]).decode("cp1252", errors="strict")))
        except UnicodeDecodeError:
            decode.append(None)
    encode = {cp: byte for byte, cp in enumerate(decode) if cp is not None}
    return tuple(decode), encode


_DECODE, _ENCODE = _build_tables()
UNDEFINED_BYTES = frozenset(b for b, cp in enumerate(_DECODE) if cp is None)


def cp1252_to_unicode(
    byte: int,
    strictness: Cp1252Strictness = Cp1252Strictness.STRICT_UNDEFINED,
) -> Optional[int]:
    """Return the code point for ``byte`` or None if it has no mapping."""
    if not 0 <= byte <= 0xFF:
        return None
    cp = _DECODE[byte]
    if cp is None and strictness is Cp1252Strictness.PASS_THROUGH_UNDEFINED:
        return byte
    return cp


def unicode_to_cp1252(
    unicode: int,
    strictness: Cp1252Strictness = Cp1252Strictness.STRICT_UNDEFINED,
) -> Optional[int]:
    """Return the byte for ``unicode`` or None if Windows-1252 cannot hold it."""
    byte = _ENCODE.get(unicode)
    if byte is None and strictness is Cp1252Strictness.PASS_THROUGH_UNDEFINED:
        if unicode in UNDEFINED_BYTES:
            return unicode
    return byte
