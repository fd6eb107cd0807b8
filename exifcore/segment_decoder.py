# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exif segment decoder

Entry point of the package. Takes the payload of a JPEG APP1 Exif segment
(or a bare TIFF structure), validates the TIFF header and walks all
directories reachable from IFD0.

TIFF header layout:

    offset 0  'II' (Intel) or 'MM' (Motorola)
    offset 2  marker 0x002A (0x4F52 / 0x5352 for Olympus ORF, 0x0055 for Panasonic RW2)
    offset 4  uint32 offset of IFD0, relative to the header

Copyright 2025 DNAi inc.
"""

import logging
from typing import List, Optional

from exifcore.byte_reader import INTEL, MOTOROLA, ByteOrderReader
from exifcore.config import DecoderConfig
from exifcore.directory import Directory, DirectoryKind
from exifcore.exif_tags import (
    BYTE_ORDER_INTEL,
    BYTE_ORDER_MOTOROLA,
    EXIF_PREAMBLE,
    RAW_TIFF_MARKERS,
    TAG_COMPRESSION,
    TAG_THUMBNAIL_LENGTH,
    TAG_THUMBNAIL_OFFSET,
    TIFF_MARKER_STANDARD,
)
from exifcore.ifd_walker import IfdWalker
from exifcore.makernote import MakernoteDispatcher

logger = logging.getLogger(__name__)

TIFF_HEADER_SIZE = 8


class ExifSegmentDecoder:
    """
    Decodes Exif/TIFF segments into directories.

    A decoder holds only its configuration, so one instance can be shared;
    every call builds its own reader, walker and visited set.
    """

    def __init__(
        self,
        config: Optional[DecoderConfig] = None,
        dispatcher: Optional[MakernoteDispatcher] = None
    ):
        self.config = config or DecoderConfig()
        self.dispatcher = dispatcher or MakernoteDispatcher()

    def decode_exif_segment(self, data: bytes) -> List[Directory]:
        """
        Decode an APP1 Exif payload (starting with ``Exif\\0\\0``).

        Args:
            data: Segment payload without the APP1 marker and length

        Returns:
            Directories in creation order; the first is always IFD0
        """
        if bytes(data[:len(EXIF_PREAMBLE)]) != EXIF_PREAMBLE:
            directory = Directory(DirectoryKind.IFD0)
            directory.add_error("Exif data segment doesn't begin with 'Exif'")
            return [directory]
        return self.decode_tiff(data, len(EXIF_PREAMBLE))

    def decode_tiff(self, data: bytes, header_offset: int = 0) -> List[Directory]:
        """
        Decode a TIFF structure whose header starts at ``header_offset``.

        Args:
            data: Buffer holding the TIFF structure
            header_offset: Absolute offset of the 'II'/'MM' marker

        Returns:
            Directories in creation order; the first is always IFD0
        """
        reader = ByteOrderReader(data)
        walker = IfdWalker(reader, self.config, self.dispatcher)
        primary = walker.new_directory(DirectoryKind.IFD0, None, None)

        ifd0_offset = self._read_header(reader, primary, header_offset)
        if ifd0_offset is None:
            return walker.directories

        primary.offset = ifd0_offset
        visited = set()
        walker.walk(primary, visited, ifd0_offset, header_offset)

        if self.config.store_thumbnail_bytes:
            self._extract_thumbnail(reader, walker, header_offset)

        logger.debug(
            "Decoded %d directories from %d bytes", len(walker.directories), len(reader)
        )
        return walker.directories

    def _read_header(
        self,
        reader: ByteOrderReader,
        primary: Directory,
        header_offset: int
    ) -> Optional[int]:
        """Validate the TIFF header and return the absolute IFD0 offset, or None."""
        if header_offset < 0 or not reader.is_valid(header_offset, TIFF_HEADER_SIZE):
            primary.add_error("TIFF header is outside the data segment")
            return None

        byte_order = reader.get_bytes(header_offset, 2)
        if byte_order == BYTE_ORDER_MOTOROLA:
            reader.endian = MOTOROLA
        elif byte_order == BYTE_ORDER_INTEL:
            reader.endian = INTEL
        else:
            primary.add_error("Unclear distinction between Motorola/Intel byte ordering")
            return None

        marker = reader.get_uint16(header_offset + 2)
        accepted = (TIFF_MARKER_STANDARD,)
        if self.config.accept_raw_markers:
            accepted += RAW_TIFF_MARKERS
        if marker not in accepted:
            primary.add_error(f"Unexpected TIFF marker: 0x{marker:X}")
            return None

        ifd0_offset = header_offset + reader.get_uint32(header_offset + 4)
        if ifd0_offset >= len(reader) - 1:
            # some files have a garbage IFD0 offset; most of these still keep IFD0 right after the header
            primary.add_error(
                "First IFD offset is beyond the end of the TIFF data segment -- trying default offset"
            )
            ifd0_offset = header_offset + TIFF_HEADER_SIZE
        return ifd0_offset

    def _extract_thumbnail(
        self,
        reader: ByteOrderReader,
        walker: IfdWalker,
        header_offset: int
    ) -> None:
        for kind in (DirectoryKind.THUMBNAIL, DirectoryKind.IFD0):
            directory = walker.first_directory(kind)
            if directory is None or not directory.contains(TAG_COMPRESSION):
                continue
            offset = directory.get_int(TAG_THUMBNAIL_OFFSET)
            length = directory.get_int(TAG_THUMBNAIL_LENGTH)
            if offset is not None and length is not None:
                break
        else:
            return

        start = header_offset + offset
        if reader.is_valid(start, length):
            directory.thumbnail_data = reader.get_bytes(start, length)
            logger.debug("Extracted %d byte thumbnail", length)
        else:
            directory.add_error(
                f"Invalid thumbnail data specification: offset={offset} length={length} "
                f"buffer length={len(reader)}"
            )


def decode_exif_segment(data: bytes, config: Optional[DecoderConfig] = None) -> List[Directory]:
    """Decode an APP1 Exif payload with a one-off decoder."""
    return ExifSegmentDecoder(config).decode_exif_segment(data)


def decode_tiff(
    data: bytes,
    header_offset: int = 0,
    config: Optional[DecoderConfig] = None
) -> List[Directory]:
    """Decode a bare TIFF structure with a one-off decoder."""
    return ExifSegmentDecoder(config).decode_tiff(data, header_offset)
