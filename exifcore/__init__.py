# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
exifcore - Pure Python Exif/TIFF directory decoder

Reads the Exif block of JPEG, TIFF and camera RAW files by walking the TIFF
Image File Directories directly, including vendor makernotes. No image
codec or external executable is involved.

    from exifcore import decode_exif_segment

    for directory in decode_exif_segment(app1_payload):
        print(directory.name, directory.tag_count, directory.errors)

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from exifcore.byte_reader import INTEL, MOTOROLA, ByteOrderReader
from exifcore.config import DecoderConfig
from exifcore.directory import Directory, DirectoryKind
from exifcore.exceptions import BufferBoundsError, ExifCoreError, UnsupportedFormatError
from exifcore.ifd_walker import IfdWalker
from exifcore.makernote import (
    VENDOR_PROFILES,
    BodyKind,
    MakernoteDispatcher,
    Origin,
    VendorProfile,
    select_vendor_profile,
)
from exifcore.rational import Rational
from exifcore.segment_decoder import ExifSegmentDecoder, decode_exif_segment, decode_tiff
from exifcore.value_codec import TiffFormat, decode_tag_value

__all__ = [
    "ByteOrderReader",
    "INTEL",
    "MOTOROLA",
    "DecoderConfig",
    "Directory",
    "DirectoryKind",
    "ExifCoreError",
    "BufferBoundsError",
    "UnsupportedFormatError",
    "IfdWalker",
    "MakernoteDispatcher",
    "VendorProfile",
    "VENDOR_PROFILES",
    "BodyKind",
    "Origin",
    "select_vendor_profile",
    "Rational",
    "ExifSegmentDecoder",
    "decode_exif_segment",
    "decode_tiff",
    "TiffFormat",
    "decode_tag_value",
]
