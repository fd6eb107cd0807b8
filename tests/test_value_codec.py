"""
Unit tests for exifcore/value_codec.py: one test per TIFF format family.
"""

import struct

import pytest

from exifcore.byte_reader import INTEL, MOTOROLA, ByteOrderReader
from exifcore.directory import Directory, DirectoryKind
from exifcore.exceptions import UnsupportedFormatError
from exifcore.rational import Rational
from exifcore.value_codec import (
    FORMAT_BYTE_WIDTHS,
    TiffFormat,
    decode_tag_value,
    format_byte_width,
    tiff_format,
)


def _decode(data, fmt, count, endian=MOTOROLA, offset=0):
    directory = Directory(DirectoryKind.IFD0)
    value = decode_tag_value(ByteOrderReader(data, endian), directory, 0x1234, fmt, count, offset)
    return value, directory


def test_format_widths():
    widths = [FORMAT_BYTE_WIDTHS[TiffFormat(code)] for code in range(1, 13)]
    assert widths == [1, 1, 2, 4, 8, 1, 1, 2, 4, 8, 4, 8]


def test_unknown_format_width_is_none():
    assert format_byte_width(0) is None
    assert format_byte_width(13) is None
    assert format_byte_width(5) == 8


def test_tiff_format_raises_for_unknown_code():
    with pytest.raises(UnsupportedFormatError) as exc:
        tiff_format(99)
    assert exc.value.format_code == 99


def test_byte_scalar_and_list():
    assert _decode(b'\x07', 1, 1)[0] == 7
    assert _decode(b'\x01\x02\x03', 1, 3)[0] == [1, 2, 3]


def test_ascii_reads_to_first_nul():
    value, directory = _decode(b'Canon\x00\x00\x00', 2, 8)
    assert value == 'Canon'
    assert not directory.has_errors


def test_ascii_count_zero_is_empty_string():
    assert _decode(b'', 2, 0)[0] == ''


def test_ascii_latin1_fallback():
    assert _decode(b'Caf\xe9\x00', 2, 5)[0] == 'Caf\xe9'


def test_short_honours_byte_order():
    assert _decode(b'\x01\x02', 3, 1, MOTOROLA)[0] == 0x0102
    assert _decode(b'\x01\x02', 3, 1, INTEL)[0] == 0x0201


def test_long_list():
    data = struct.pack('<2I', 70000, 3)
    assert _decode(data, 4, 2, INTEL)[0] == [70000, 3]


def test_signed_integers():
    assert _decode(b'\xfe', 6, 1)[0] == -2
    assert _decode(struct.pack('>h', -300), 8, 1)[0] == -300
    assert _decode(struct.pack('>i', -70000), 9, 1)[0] == -70000


def test_rational_is_exact():
    value, _ = _decode(struct.pack('>2I', 1, 3), 5, 1)
    assert value == Rational(1, 3)
    assert isinstance(value.numerator, int)


def test_rational_zero_denominator_preserved():
    value, directory = _decode(struct.pack('>2I', 5, 0), 5, 1)
    assert value == Rational(5, 0)
    assert value.to_float() == 0.0
    assert not directory.has_errors


def test_rational_list_not_reduced():
    value, _ = _decode(struct.pack('>4I', 2, 4, 10, 1), 5, 2)
    assert value == [Rational(2, 4), Rational(10, 1)]


def test_signed_rational():
    value, _ = _decode(struct.pack('<2i', -1, 3), 10, 1, INTEL)
    assert value == Rational(-1, 3)


def test_float_and_double():
    assert _decode(struct.pack('>f', 0.5), 11, 1)[0] == 0.5
    assert _decode(struct.pack('>2d', 1.25, -2.0), 12, 2)[0] == [1.25, -2.0]


def test_undefined_is_bytes():
    value, _ = _decode(b'0230', 7, 4)
    assert value == b'0230'


def test_unknown_format_records_error():
    value, directory = _decode(b'\x00' * 4, 13, 1)
    assert value is None
    assert directory.errors == ["Invalid TIFF tag format code 13 for tag 0x1234"]


def test_out_of_bounds_records_error():
    value, directory = _decode(b'\x00' * 4, 5, 1)
    assert value is None
    assert directory.errors == ["Illegal number of bytes for TIFF tag data: 8"]


def test_reads_at_offset():
    value, _ = _decode(b'\xff\xff\x00\x2a', 3, 1, offset=2)
    assert value == 42
