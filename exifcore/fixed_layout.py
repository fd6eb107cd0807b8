# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Fixed-layout makernote decoder

Some vendors (Kodak, Reconyx) do not store their makernote as an IFD.
The body is a fixed block where every field sits at a literal byte offset
with its own width and byte order. Layouts are declared in
makernote_tags as tuples of FixedField; the tag id of each field is its
byte offset, so the decoded directory can be addressed like any other.

Copyright 2025 DNAi inc.
"""

import logging
from typing import Any, Sequence

from exifcore.byte_reader import ByteOrderReader
from exifcore.directory import Directory
from exifcore.exceptions import BufferBoundsError
from exifcore.makernote_tags import FIELD_WIDTHS, FixedField

logger = logging.getLogger(__name__)

_READERS = {
    'u16': 'get_uint16',
    's16': 'get_int16',
    'u32': 'get_uint32',
}


def read_fixed_field(reader: ByteOrderReader, origin: int, field: FixedField) -> Any:
    """
    Read a single field relative to ``origin``.

    Raises:
        BufferBoundsError: If the field extends outside the buffer
    """
    offset = origin + field.offset
    if field.kind == 'bytes':
        return reader.get_bytes(offset, field.count)
    if field.kind == 'ascii':
        return reader.get_null_terminated_string(offset, field.count)
    if field.kind == 'utf16le':
        raw = reader.get_bytes(offset, field.count)
        return raw.decode('utf-16-le', errors='replace').split('\x00', 1)[0]

    width = FIELD_WIDTHS[field.kind]
    values = []
    for i in range(field.count):
        position = offset + i * width
        if field.kind == 'u8':
            values.append(reader.get_uint8(position))
        elif field.kind == 's8':
            values.append(reader.get_int8(position))
        else:
            values.append(getattr(reader, _READERS[field.kind])(position, field.endian))
    if field.count == 1:
        return values[0]
    return values


def decode_fixed_layout(
    reader: ByteOrderReader,
    directory: Directory,
    layout: Sequence[FixedField],
    origin: int,
    vendor: str
) -> int:
    """
    Populate ``directory`` from a fixed-layout body.

    Fields are read in layout order. The first field that falls outside the
    buffer records an error on the directory and stops decoding; fields
    read before it are kept.

    Args:
        reader: Reader over the whole segment
        directory: Target directory
        layout: Field definitions
        origin: Absolute offset that field offsets are relative to
        vendor: Vendor label used in the error message

    Returns:
        Number of fields decoded
    """
    decoded = 0
    for field in layout:
        try:
            value = read_fixed_field(reader, origin, field)
        except BufferBoundsError as e:
            directory.add_error(f"Error processing {vendor} makernote data: {e.message}")
            break
        directory.set(field.tag, value)
        decoded += 1
    logger.debug("Decoded %d of %d %s makernote fields", decoded, len(layout), vendor)
    return decoded
