"""Tolerant UTF-8 decoding of a single character."""

from __future__ import annotations

UTF_INVALID = 0xFFFD
UTF_SIZE = 4

_UTF_BYTE = (0x80, 0x00, 0xC0, 0xE0, 0xF0)
_UTF_MASK = (0xC0, 0x80, 0xE0, 0xF0, 0xF8)
_UTF_MIN = (0, 0, 0x80, 0x800, 0x10000)
_UTF_MAX = (0x10FFFF, 0x7F, 0x7FF, 0xFFFF, 0x10FFFF)


def utf8_decode_byte(byte: int) -> tuple[int, int]:
    """Classify one byte.

    Returns ``(payload, kind)`` where kind 0 is a continuation byte, 1 to 4 is
    the length of the sequence a lead byte starts, and 5 is an invalid byte.
    """
    byte &= 0xFF
    for kind, (pattern, mask) in enumerate(zip(_UTF_BYTE, _UTF_MASK)):
        if byte & mask == pattern:
            return byte & ~mask & 0xFF, kind
    return 0, len(_UTF_BYTE)


def utf8_validate(codepoint: int, length: int) -> tuple[int, int]:
    """Replace out-of-range or surrogate code points.

    Returns the possibly replaced code point and the number of bytes its
    encoding needs.
    """
    if not (_UTF_MIN[length] <= codepoint <= _UTF_MAX[length]) or 0xD800 <= codepoint <= 0xDFFF:
        codepoint = UTF_INVALID
    size = 1
    while codepoint > _UTF_MAX[size]:
        size += 1
    return codepoint, size


def utf8_decode(data: bytes) -> tuple[int, int]:
    """Decode the first character of ``data``.

    Returns ``(codepoint, consumed)``. Malformed input yields the replacement
    character; ``consumed`` is 0 when the data ends inside a sequence.
    """
    window = bytes(data[:UTF_SIZE])
    if not window:
        return UTF_INVALID, 0
    decoded, length = utf8_decode_byte(window[0])
    if not 1 <= length <= UTF_SIZE:
        return UTF_INVALID, 1
    consumed = 1
    for byte in window[1:length]:
        payload, kind = utf8_decode_byte(byte)
        decoded = (decoded << 6) | payload
        if kind:
            return UTF_INVALID, consumed
        consumed += 1
    if consumed < length:
        return UTF_INVALID, 0
    codepoint, _ = utf8_validate(decoded, length)
    return codepoint, length