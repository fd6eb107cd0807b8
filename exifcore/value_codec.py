# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TIFF tag value codec

Decodes the N components of a TIFF entry into one raw value. The value
shape depends on the format code and on whether one or several
components are declared:

    BYTE, SBYTE, SHORT, SSHORT, LONG, SLONG  -> int or List[int]
    RATIONAL, SRATIONAL                      -> Rational or List[Rational]
    FLOAT, DOUBLE                            -> float or List[float]
    ASCII                                    -> str
    UNDEFINED                                -> bytes

Copyright 2025 DNAi inc.
"""

import struct
from enum import IntEnum
from typing import Any, Optional

from exifcore.byte_reader import ByteOrderReader
from exifcore.directory import Directory
from exifcore.exceptions import BufferBoundsError, UnsupportedFormatError
from exifcore.rational import Rational


class TiffFormat(IntEnum):
    """TIFF 6.0 field types"""
    BYTE = 1
    ASCII = 2
    SHORT = 3
    LONG = 4
    RATIONAL = 5
    SBYTE = 6
    UNDEFINED = 7
    SSHORT = 8
    SLONG = 9
    SRATIONAL = 10
    FLOAT = 11
    DOUBLE = 12


# Component sizes in bytes
FORMAT_BYTE_WIDTHS = {
    TiffFormat.BYTE: 1,
    TiffFormat.ASCII: 1,
    TiffFormat.SHORT: 2,
    TiffFormat.LONG: 4,
    TiffFormat.RATIONAL: 8,
    TiffFormat.SBYTE: 1,
    TiffFormat.UNDEFINED: 1,
    TiffFormat.SSHORT: 2,
    TiffFormat.SLONG: 4,
    TiffFormat.SRATIONAL: 8,
    TiffFormat.FLOAT: 4,
    TiffFormat.DOUBLE: 8,
}

# struct codes for the fixed-width numeric formats
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


def tiff_format(format_code: int) -> TiffFormat:
    """
    Look up a format code.

    Raises:
        UnsupportedFormatError: If the code is outside 1-12
    """
    try:
        return TiffFormat(format_code)
    except ValueError:
        raise UnsupportedFormatError(format_code) from None


def format_byte_width(format_code: int) -> Optional[int]:
    """Component width for a format code, or None when the code is unknown."""
    try:
        return FORMAT_BYTE_WIDTHS[tiff_format(format_code)]
    except UnsupportedFormatError:
        return None


def decode_tag_value(
    reader: ByteOrderReader,
    directory: Directory,
    tag_id: int,
    format_code: int,
    count: int,
    offset: int
) -> Any:
    """
    Decode a tag's components starting at an absolute buffer offset.

    Failures are not raised: an error is recorded on ``directory`` and None
    is returned so that the caller skips the tag.

    Args:
        reader: Reader carrying the current byte order
        directory: Directory receiving error messages
        tag_id: Tag id (used in error messages)
        format_code: TIFF format code (1-12)
        count: Number of components
        offset: Absolute offset of the first component

    Returns:
        The decoded raw value, or None if the tag had to be skipped
    """
    try:
        fmt = tiff_format(format_code)
    except UnsupportedFormatError:
        directory.add_error(f"Invalid TIFF tag format code {format_code} for tag 0x{tag_id:04X}")
        return None
    if count < 0:
        directory.add_error(f"Negative component count {count} for tag 0x{tag_id:04X}")
        return None

    byte_count = FORMAT_BYTE_WIDTHS[fmt] * count
    try:
        data = reader.get_bytes(offset, byte_count)
    except BufferBoundsError:
        directory.add_error(f"Illegal number of bytes for TIFF tag data: {byte_count}")
        return None

    if fmt == TiffFormat.UNDEFINED:
        return data

    if fmt == TiffFormat.ASCII:
        # count includes the NUL terminator; decode only up to the first NUL
        null_pos = data.find(b'\x00')
        if null_pos >= 0:
            data = data[:null_pos]
        try:
            return data.decode('utf-8')
        except UnicodeDecodeError:
            return data.decode('latin-1')

    if fmt in (TiffFormat.RATIONAL, TiffFormat.SRATIONAL):
        code = 'I' if fmt == TiffFormat.RATIONAL else 'i'
        pairs = struct.unpack(f'{reader.endian}{2 * count}{code}', data)
        values = [Rational(pairs[i], pairs[i + 1]) for i in range(0, len(pairs), 2)]
        if count == 1:
            return values[0]
        return values

    values = list(struct.unpack(f'{reader.endian}{count}{_STRUCT_CODES[fmt]}', data))
    if count == 1:
        return values[0]
    return values
