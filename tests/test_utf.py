import pytest

from lexkit.errors import LexerError
from lexkit.utf import (
    utf8_decode,
    utf8_encode,
    utf8_rewind,
    utf16_decode,
    utf16_encode,
    utf16_rewind,
)

TEXT = "a\u00e9\u20ac\U0001f600z"


def _utf16_units(text):
    raw = text.encode("utf-16-le")
    return [int.from_bytes(raw[i:i + 2], "little") for i in range(0, len(raw), 2)]


def test_utf8_decode_matches_codec():
    assert list(utf8_decode(TEXT.encode("utf-8"))) == [ord(c) for c in TEXT]


def test_utf8_encode_matches_codec():
    assert utf8_encode(ord(c) for c in TEXT) == TEXT.encode("utf-8")


def test_utf8_encode_accepts_characters():
    assert utf8_encode(TEXT) == TEXT.encode("utf-8")


@pytest.mark.parametrize(
    "code_point", [0, 0x7F, 0x80, 0x7FF, 0x800, 0xFFFF, 0x10000, 0x10FFFF]
)
def test_utf8_round_trip_at_boundaries(code_point):
    encoded = utf8_encode([code_point])
    assert list(utf8_decode(encoded)) == [code_point]


def test_utf8_decode_truncated_two_byte_sequence_yields_lead_byte():
    assert list(utf8_decode(b"\xc3")) == [0xC3]
    assert list(utf8_decode(b"\xc3A")) == [0xC3, ord("A")]


def test_utf8_decode_invalid_lead_is_single_unit():
    assert list(utf8_decode(b"\xff")) == [0xFF]


def test_utf8_decode_partial_three_byte_sequence():
    euro = "\u20ac".encode("utf-8")
    result = list(utf8_decode(euro[:2]))
    assert result == [ord("\u20ac") & ~0x3F]


def test_utf8_encode_rejects_negative():
    with pytest.raises(ValueError):
        utf8_encode([-1])


def test_utf8_rewind_steps_over_multibyte():
    data = "a\u20acb".encode("utf-8")
    end = len(data)
    assert utf8_rewind(data, end, 1) == end - 1
    assert utf8_rewind(data, end, 2) == 1
    assert utf8_rewind(data, end, 3) == 0
    assert utf8_rewind(data, end, 0) == end


def test_utf8_rewind_before_start_raises():
    data = "a\u20ac".encode("utf-8")
    with pytest.raises(ValueError):
        utf8_rewind(data, len(data), 3)


def test_utf8_rewind_position_out_of_range():
    with pytest.raises(IndexError):
        utf8_rewind(b"abc", 10, 1)


def test_utf16_encode_matches_codec():
    assert utf16_encode(TEXT) == _utf16_units(TEXT)


def test_utf16_decode_matches_codec():
    assert list(utf16_decode(_utf16_units(TEXT))) == [ord(c) for c in TEXT]


@pytest.mark.parametrize("code_point", [0, 0xD7FF, 0xFFFF, 0x10000, 0x10FFFF])
def test_utf16_round_trip(code_point):
    assert list(utf16_decode(utf16_encode([code_point]))) == [code_point]


def test_utf16_high_surrogate_at_end_raises():
    units = _utf16_units("\U0001f600")
    with pytest.raises(LexerError):
        list(utf16_decode(units[:1]))


def test_utf16_high_surrogate_without_low_raises():
    units = _utf16_units("\U0001f600")
    with pytest.raises(LexerError):
        list(utf16_decode([units[0], ord("a")]))


def test_utf16_rewind_steps_over_surrogate_pair():
    units = _utf16_units("a\U0001f600")
    end = len(units)
    assert utf16_rewind(units, end, 1) == 1
    assert utf16_rewind(units, end, 2) == 0
    with pytest.raises(ValueError):
        utf16_rewind(units, end, 3)