# text.py
# SPDX-License-Identifier: MIT
"""Borrowed buffer view with a read/write cursor."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .unicode import Buffer

__all__ = ["UtfText", "LineResult"]


@dataclass(slots=True)
class UtfText:
    """A window over a caller-owned buffer plus a cursor.

    The view never copies or owns ``buffer``; ``length`` is the logical
    extent (clamped to the buffer) and ``offset`` the cursor. Composite
    operations expect ``offset <= length`` and report failure otherwise.
    """

    buffer: Optional[Buffer]
    length: int = -1
    offset: int = 0

    def __post_init__(self) -> None:
        physical = 0 if self.buffer is None else len(self.buffer)
        if self.length < 0 or self.length > physical:
            self.length = physical

    @property
    def remaining(self) -> int:
        """Bytes between the cursor and ``length``; 0 once past the end."""
        return max(0, self.length - self.offset)

    @property
    def at_end(self) -> bool:
        return self.offset >= self.length

    def window(self) -> Optional[memoryview]:
        """Return a zero-copy view from the cursor to ``length``.

        None when the buffer is missing or the cursor is past ``length``.
        """
        if self.buffer is None or self.offset > self.length or self.offset < 0:
            return None
        return memoryview(self.buffer)[self.offset:self.length]

    def copy(self) -> "UtfText":
        """Return a second cursor over the same buffer."""
        return replace(self)

    def tobytes(self) -> bytes:
        """Return the bytes from the cursor to ``length``."""
        view = self.window()
        return b"" if view is None else view.tobytes()


@dataclass(slots=True, frozen=True)
class LineResult:
    """Outcome of ``get_line``.

    ``line`` spans the line content without its terminator; ``bytes`` is the
    distance from the scan start to just past the terminator.
    """

    ok: bool
    line: UtfText
    bytes: int
