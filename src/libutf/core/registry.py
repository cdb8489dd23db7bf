# registry.py
# SPDX-License-Identifier: MIT
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple, Union

from .handlers import (
    AsciiHandler,
    ByteHandler,
    Cp1252Handler,
    JavaUtf8Handler,
    Utf8Handler,
    Utf16BeHandler,
    Utf16LeHandler,
    Utf32BeHandler,
    Utf32LeHandler,
    UtfHandler,
)
from .log import get_logger
from .unicode import Encoding, UtfOtherType, UtfType

__all__ = [
    "HandlerRegistry",
    "HandlerTag",
    "resolve_encoding",
    "default_handler_registry",
    "handler_registry",
    "get_handler",
    "get_handler_other",
]

log = get_logger(__name__)

HandlerTag = Union[Encoding, UtfType, UtfOtherType, str]

_UTF_TYPE_ENCODINGS: Dict[UtfType, Encoding] = {
    UtfType.UTF8: Encoding.UTF8,
    UtfType.UTF16LE: Encoding.UTF16LE,
    UtfType.UTF16BE: Encoding.UTF16BE,
    UtfType.UTF32LE: Encoding.UTF32LE,
    UtfType.UTF32BE: Encoding.UTF32BE,
    UtfType.OTHER: Encoding.UTF8_JAVA,
}

_OTHER_TYPE_ENCODINGS: Dict[UtfOtherType, Encoding] = {
    UtfOtherType.JUTF8: Encoding.UTF8_JAVA,
    UtfOtherType.ISO8859_1: Encoding.BYTE,
    UtfOtherType.ASCII: Encoding.ASCII,
    UtfOtherType.CP1252: Encoding.CP1252,
}


def resolve_encoding(tag: HandlerTag) -> Encoding:
    """Map any accepted tag to its ``Encoding``.

    ``UtfType.OTHER`` maps to Java-style UTF-8, the catch-all handler.
    Raises ValueError for names that are not a known encoding.
    """
    if isinstance(tag, Encoding):
        return tag
    if isinstance(tag, UtfType):
        return _UTF_TYPE_ENCODINGS[tag]
    if isinstance(tag, UtfOtherType):
        return _OTHER_TYPE_ENCODINGS[tag]
    if isinstance(tag, str):
        return Encoding.parse(tag)
    raise ValueError(f"Unknown handler tag {tag!r}")


@dataclass
class HandlerRegistry:
    _handlers: Dict[Encoding, UtfHandler] = field(default_factory=dict)

    def register(self, handler: UtfHandler) -> None:
        self._handlers[handler.encoding] = handler
        log.debug("registered %r", handler)

    def get(self, tag: HandlerTag) -> UtfHandler:
        encoding = resolve_encoding(tag)
        handler = self._handlers.get(encoding)
        if handler is None:
            raise ValueError(f"No handler registered for {encoding.value!r}")
        return handler

    def encodings(self) -> Tuple[Encoding, ...]:
        return tuple(self._handlers.keys())

    def handlers(self) -> Tuple[UtfHandler, ...]:
        return tuple(self._handlers.values())


def default_handler_registry() -> HandlerRegistry:
    reg = HandlerRegistry()
    reg.register(Utf8Handler())
    reg.register(JavaUtf8Handler())
    reg.register(Utf16LeHandler())
    reg.register(Utf16BeHandler())
    reg.register(Utf32LeHandler())
    reg.register(Utf32BeHandler())
    reg.register(ByteHandler())
    reg.register(AsciiHandler())
    reg.register(Cp1252Handler())
    return reg


handler_registry = default_handler_registry()


def get_handler(tag: HandlerTag = UtfType.OTHER) -> UtfHandler:
    """Return the shared handler for ``tag``.

    With no argument (or ``UtfType.OTHER``) this is the Java-style UTF-8
    handler.
    """
    return handler_registry.get(tag)


def get_handler_other(tag: UtfOtherType = UtfOtherType.JUTF8) -> UtfHandler:
    """Return the shared handler for one of the non-UTF encodings."""
    return handler_registry.get(tag)
