"""
Shared pytest fixtures for all test modules.

Test data is synthesised in memory: TiffBuilder lays out a TIFF header and
IFDs at explicit offsets so that every pointer in a test is predictable.
All offsets given to the builder are relative to the TIFF header.
"""

import struct

import pytest

from exifcore.exif_tags import EXIF_PREAMBLE
from exifcore.value_codec import TiffFormat

_STRUCT_CODES = {
    TiffFormat.BYTE: 'B',
    TiffFormat.SHORT: 'H',
    TiffFormat.LONG: 'I',
    TiffFormat.SBYTE: 'b',
    TiffFormat.SSHORT: 'h',
    TiffFormat.SLONG: 'i',
    TiffFormat.FLOAT: 'f',
    TiffFormat.DOUBLE: 'd',
}


def pack_entry(endian, tag, fmt, values):
    """Build an entry tuple (tag, format, count, payload, raw) from Python values."""
    if fmt == TiffFormat.ASCII:
        payload = values.encode('latin-1') + b'\x00'
        return (tag, int(fmt), len(payload), payload, False)
    if fmt == TiffFormat.UNDEFINED:
        payload = bytes(values)
        return (tag, int(fmt), len(payload), payload, False)
    if not isinstance(values, (list, tuple)):
        values = [values]
    if fmt in (TiffFormat.RATIONAL, TiffFormat.SRATIONAL):
        code = 'I' if fmt == TiffFormat.RATIONAL else 'i'
        flat = [part for pair in values for part in pair]
        payload = struct.pack(f'{endian}{len(flat)}{code}', *flat)
        return (tag, int(fmt), len(values), payload, False)
    payload = struct.pack(f'{endian}{len(values)}{_STRUCT_CODES[fmt]}', *values)
    return (tag, int(fmt), len(values), payload, False)


def build_ifd(endian, offset, entries, next_offset=0):
    """
    Serialise one IFD placed at ``offset``.

    Payloads longer than 4 bytes go to a data area directly after the IFD
    and the entry receives a pointer to them. Raw entries write their
    4-byte value field verbatim.
    """
    data_pos = offset + 2 + 12 * len(entries) + 4
    body = bytearray(struct.pack(f'{endian}H', len(entries)))
    extra = bytearray()
    for tag, fmt, count, payload, raw in entries:
        if raw or len(payload) <= 4:
            value_field = payload.ljust(4, b'\x00')[:4]
        else:
            value_field = struct.pack(f'{endian}I', data_pos + len(extra))
            extra += payload
            if len(extra) % 2:
                extra += b'\x00'
        body += struct.pack(f'{endian}HHI', tag, fmt, count) + value_field
    body += struct.pack(f'{endian}I', next_offset)
    return bytes(body + extra)


class TiffBuilder:
    """Assembles a TIFF structure byte by byte."""

    def __init__(self, endian='>', ifd0_offset=8, marker=0x002A):
        self.endian = endian
        order = b'MM' if endian == '>' else b'II'
        self.data = bytearray(order + struct.pack(f'{endian}HI', marker, ifd0_offset))

    def entry(self, tag, fmt, values, endian=None):
        return pack_entry(endian or self.endian, tag, fmt, values)

    def raw(self, tag, format_code, count, value_field=b'\x00\x00\x00\x00'):
        return (tag, format_code, count, value_field, True)

    def pointer(self, tag, target):
        """LONG entry holding a single directory pointer."""
        return self.raw(tag, int(TiffFormat.LONG), 1, struct.pack(f'{self.endian}I', target))

    def place(self, offset, blob):
        end = offset + len(blob)
        if len(self.data) < end:
            self.data.extend(b'\x00' * (end - len(self.data)))
        self.data[offset:end] = blob

    def ifd_bytes(self, offset, entries, next_offset=0, endian=None):
        """Serialise an IFD whose pointers are relative to a base ``offset`` bytes before it."""
        return build_ifd(endian or self.endian, offset, entries, next_offset)

    def add_ifd(self, offset, entries, next_offset=0, endian=None):
        """Place an IFD and return the offset just past it (and its data area)."""
        blob = self.ifd_bytes(offset, entries, next_offset, endian)
        self.place(offset, blob)
        return offset + len(blob)

    def pad_to(self, length):
        if len(self.data) < length:
            self.data.extend(b'\x00' * (length - len(self.data)))

    def tiff(self):
        return bytes(self.data)

    def exif(self):
        return EXIF_PREAMBLE + bytes(self.data)


@pytest.fixture
def tiff_builder():
    """Factory for TiffBuilder instances: ``tiff_builder('<')`` for Intel order."""
    return TiffBuilder


def by_kind(directories, kind):
    return [d for d in directories if d.kind is kind]


@pytest.fixture
def find_directories():
    return by_kind
