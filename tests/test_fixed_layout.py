"""
Unit tests for exifcore/fixed_layout.py.
"""

import struct

from exifcore.byte_reader import INTEL, MOTOROLA, ByteOrderReader
from exifcore.directory import Directory, DirectoryKind
from exifcore.fixed_layout import decode_fixed_layout, read_fixed_field
from exifcore.makernote_tags import FixedField


def test_numeric_field_uses_current_order_without_override():
    field = FixedField(0, "Width", 'u16')
    data = b'\x01\x02'
    assert read_fixed_field(ByteOrderReader(data, MOTOROLA), 0, field) == 0x0102
    assert read_fixed_field(ByteOrderReader(data, INTEL), 0, field) == 0x0201


def test_explicit_endian_wins():
    field = FixedField(0, "Version", 'u16', 1, '<')
    assert read_fixed_field(ByteOrderReader(b'\x01\xf1', MOTOROLA), 0, field) == 61697


def test_multi_component_field_is_a_list():
    field = FixedField(2, "Firmware", 'u16', 3, '>')
    data = b'\xff\xff' + struct.pack('>3H', 1, 2, 3)
    assert read_fixed_field(ByteOrderReader(data), 0, field) == [1, 2, 3]


def test_field_offset_is_relative_to_origin():
    field = FixedField(1, "Quality", 'u8')
    assert read_fixed_field(ByteOrderReader(b'\x00\x00\x00\x07'), 2, field) == 7


def test_text_fields():
    data = b'AB\x00C' + 'SN1'.encode('utf-16-le') + b'\x00\x00'
    reader = ByteOrderReader(data)
    assert read_fixed_field(reader, 0, FixedField(0, "Label", 'ascii', 4)) == "AB"
    assert read_fixed_field(reader, 0, FixedField(0, "Raw", 'bytes', 4)) == b'AB\x00C'
    assert read_fixed_field(reader, 0, FixedField(4, "Serial", 'utf16le', 8)) == "SN1"


def test_byte_size():
    assert FixedField(0, "a", 'u32', 2).byte_size == 8
    assert FixedField(0, "b", 'ascii', 20).byte_size == 20


def test_decode_stops_at_first_out_of_bounds_field():
    layout = (
        FixedField(0, "A", 'u8'),
        FixedField(1, "B", 's16', 1, '>'),
        FixedField(3, "C", 'u32', 1, '>'),
        FixedField(0, "D", 'u8'),
    )
    directory = Directory(DirectoryKind.KODAK)

    decoded = decode_fixed_layout(
        ByteOrderReader(b'\x05\xff\xfe\x00'), directory, layout, 0, "Test"
    )

    assert decoded == 2
    assert directory.get_int(0) == 5
    assert directory.get_int(1) == -2
    assert not directory.contains(3)
    assert len(directory.errors) == 1
    assert directory.errors[0].startswith("Error processing Test makernote data: ")
