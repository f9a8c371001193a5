"""UTF-8 and UTF-16 conversion between code units and code points.

Decoding is lenient in the same way throughout: a malformed UTF-8
sequence never raises. It yields whatever was accumulated before the
first missing continuation byte, and decoding resumes at that byte.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from .errors import LexerError

_LEAD_MASKS = {2: 0x1F, 3: 0x0F, 4: 0x07}


def _utf8_length(lead: int) -> int:
    if lead < 0x80:
        return 1
    if lead >> 5 == 0x06:
        return 2
    if lead >> 4 == 0x0E:
        return 3
    if lead >> 3 == 0x1E:
        return 4
    return 1


def _is_continuation(data: Sequence[int], pos: int) -> bool:
    return pos < len(data) and (data[pos] & 0xC0) == 0x80


def _decode_utf8_at(data: Sequence[int], pos: int) -> tuple[int, int]:
    """Decode the sequence starting at *pos*; return (code point, next pos)."""
    lead = data[pos]
    length = _utf8_length(lead)
    nxt = pos + 1

    if length == 1 or not _is_continuation(data, nxt):
        return lead, nxt

    shift = 6 * (length - 1)
    ch = (lead & _LEAD_MASKS[length]) << shift

    for _ in range(length - 1):
        if not _is_continuation(data, nxt):
            break
        shift -= 6
        ch |= (data[nxt] & 0x3F) << shift
        nxt += 1

    return ch, nxt


def utf8_decode(data: bytes | bytearray | Sequence[int]) -> Iterator[int]:
    """Yield the code points encoded in *data*."""
    pos = 0
    while pos < len(data):
        ch, pos = _decode_utf8_at(data, pos)
        yield ch


def _code_point(value: int | str) -> int:
    ch = ord(value) if isinstance(value, str) else value
    if ch < 0:
        raise ValueError(f"negative code point: {ch}")
    return ch


def _encode_utf8_one(ch: int) -> tuple[int, ...]:
    if ch < 0x80:
        return (ch,)
    if ch < 0x800:
        return ((ch >> 6) | 0xC0, (ch & 0x3F) | 0x80)
    if ch < 0x10000:
        return (
            ((ch >> 12) | 0xE0) & 0xFF,
            ((ch >> 6) & 0x3F) | 0x80,
            (ch & 0x3F) | 0x80,
        )
    return (
        ((ch >> 18) | 0xF0) & 0xFF,
        ((ch >> 12) & 0x3F) | 0x80,
        ((ch >> 6) & 0x3F) | 0x80,
        (ch & 0x3F) | 0x80,
    )


def utf8_encode(code_points: Iterable[int | str]) -> bytes:
    """Encode code points (ints or one-character strings) as UTF-8."""
    return bytes(
        byte
        for value in code_points
        for byte in _encode_utf8_one(_code_point(value))
    )


def utf8_rewind(data: bytes | bytearray | Sequence[int], pos: int, count: int) -> int:
    """Return the byte offset *count* code points before offset *pos*."""
    if not 0 <= pos <= len(data):
        raise IndexError(f"position {pos} out of range")
    for _ in range(count):
        if pos == 0:
            raise ValueError("cannot move before the start of the data")
        pos -= 1
        while pos > 0 and (data[pos] & 0xC0) == 0x80:
            pos -= 1
    return pos


def utf16_decode(units: Iterable[int]) -> Iterator[int]:
    """Yield the code points encoded in a sequence of UTF-16 code units."""
    it = iter(units)
    for unit in it:
        ch = unit & 0xFFFF
        if 0xD800 <= ch <= 0xDBFF:
            low = next(it, None)
            if low is None:
                raise LexerError("high surrogate at end of input")
            low &= 0xFFFF
            if not 0xDC00 <= low <= 0xDFFF:
                raise LexerError(f"high surrogate followed by 0x{low:04x}")
            ch = (((ch - 0xD800) << 10) | (low - 0xDC00)) + 0x10000
        yield ch


def utf16_encode(code_points: Iterable[int | str]) -> list[int]:
    """Encode code points (ints or one-character strings) as UTF-16 units."""
    units: list[int] = []
    for value in code_points:
        ch = _code_point(value)
        if ch > 0xFFFF:
            units.append((ch >> 10) + 0xD800 - (0x10000 >> 10))
            units.append((ch & 0x3FF) + 0xDC00)
        else:
            units.append(ch)
    return units


def utf16_rewind(units: Sequence[int], pos: int, count: int) -> int:
    """Return the unit offset *count* code points before offset *pos*."""
    if not 0 <= pos <= len(units):
        raise IndexError(f"position {pos} out of range")
    for _ in range(count):
        if pos == 0:
            raise ValueError("cannot move before the start of the data")
        pos -= 1
        if pos > 0 and 0xDC00 <= units[pos] <= 0xDFFF:
            pos -= 1
    return pos