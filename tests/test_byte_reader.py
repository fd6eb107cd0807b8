"""
Unit tests for exifcore/byte_reader.py.
"""

import struct

import pytest

from exifcore.byte_reader import INTEL, MOTOROLA, ByteOrderReader
from exifcore.exceptions import BufferBoundsError


# ---------------------------------------------------------------------------
# Byte order
# ---------------------------------------------------------------------------


def test_uint16_honours_byte_order():
    assert ByteOrderReader(b'\x01\x02', INTEL).get_uint16(0) == 0x0201
    assert ByteOrderReader(b'\x01\x02', MOTOROLA).get_uint16(0) == 0x0102


def test_default_order_is_motorola():
    reader = ByteOrderReader(b'\x00\x01')
    assert reader.is_motorola
    assert reader.get_uint16(0) == 1


def test_explicit_endian_overrides_current_order():
    reader = ByteOrderReader(b'\x01\x00\x00\x00', MOTOROLA)
    assert reader.get_uint32(0) == 0x01000000
    assert reader.get_uint32(0, INTEL) == 1
    assert reader.endian == MOTOROLA


def test_set_motorola():
    reader = ByteOrderReader(b'\x01\x02')
    reader.set_motorola(False)
    assert reader.endian == INTEL
    assert not reader.is_motorola


def test_byte_order_context_restores_previous_order():
    reader = ByteOrderReader(b'\x01\x02', MOTOROLA)
    with reader.byte_order(INTEL):
        assert reader.get_uint16(0) == 0x0201
    assert reader.endian == MOTOROLA


def test_byte_order_context_restores_on_exception():
    reader = ByteOrderReader(b'\x01\x02', INTEL)
    with pytest.raises(RuntimeError):
        with reader.byte_order(MOTOROLA):
            raise RuntimeError("boom")
    assert reader.endian == INTEL


def test_byte_order_none_keeps_current():
    reader = ByteOrderReader(b'\x01\x02', INTEL)
    with reader.byte_order(None):
        assert reader.endian == INTEL


def test_invalid_endian_rejected():
    with pytest.raises(ValueError):
        ByteOrderReader(b'', 'x')


# ---------------------------------------------------------------------------
# Typed reads
# ---------------------------------------------------------------------------


def test_signed_reads():
    reader = ByteOrderReader(b'\xff\xfe\xff\xff\xff\xfd', MOTOROLA)
    assert reader.get_uint8(0) == 255
    assert reader.get_int8(0) == -1
    assert reader.get_int16(0) == -2
    assert reader.get_int32(2) == -3


def test_float_reads():
    data = struct.pack('>f', 1.5) + struct.pack('>d', -0.25)
    reader = ByteOrderReader(data, MOTOROLA)
    assert reader.get_float32(0) == 1.5
    assert reader.get_float64(4) == -0.25


def test_get_bytes_and_string():
    reader = ByteOrderReader(b'ABCDEF')
    assert reader.get_bytes(1, 3) == b'BCD'
    assert reader.get_string(0, 2) == 'AB'
    assert reader.get_bytes(6, 0) == b''


def test_null_terminated_string_stops_at_nul():
    reader = ByteOrderReader(b'Canon\x00junk')
    assert reader.get_null_terminated_string(0, 10) == 'Canon'


def test_null_terminated_string_longer_than_buffer_raises():
    reader = ByteOrderReader(b'Canon\x00junk')
    with pytest.raises(BufferBoundsError):
        reader.get_null_terminated_string(0, 11)


def test_null_terminated_string_falls_back_to_latin1():
    reader = ByteOrderReader(b'caf\xe9\x00')
    assert reader.get_null_terminated_string(0, 5) == 'caf\xe9'


# ---------------------------------------------------------------------------
# Bounds
# ---------------------------------------------------------------------------


def test_read_past_end_raises():
    reader = ByteOrderReader(b'\x00\x01\x02')
    with pytest.raises(BufferBoundsError) as exc:
        reader.get_uint32(0)
    assert exc.value.offset == 0
    assert exc.value.width == 4
    assert exc.value.length == 3
    assert "outside buffer of length 3" in exc.value.message


def test_negative_offset_raises():
    reader = ByteOrderReader(b'\x00\x01')
    with pytest.raises(BufferBoundsError):
        reader.get_uint8(-1)


def test_is_valid():
    reader = ByteOrderReader(b'\x00' * 4)
    assert reader.is_valid(0, 4)
    assert reader.is_valid(4, 0)
    assert not reader.is_valid(1, 4)
    assert not reader.is_valid(-1, 1)


def test_len_and_data():
    reader = ByteOrderReader(bytearray(b'abc'))
    assert len(reader) == 3
    assert reader.data == b'abc'


def test_non_bytes_rejected():
    with pytest.raises(TypeError):
        ByteOrderReader("not bytes")
