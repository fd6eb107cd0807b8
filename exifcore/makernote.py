# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Makernote dispatcher

The MakerNote tag (0x927C) holds a vendor-private block. Its layout is
identified from the first bytes of the block and from the camera Make
stored in IFD0. Each recognised layout is described by a VendorProfile:

    - where the vendor IFD starts relative to the makernote
    - which offset its value pointers are relative to
    - whether it forces a byte order
    - whether it is an IFD at all, or a fixed-field block

Profiles are tried in table order; the first match wins.

Copyright 2025 DNAi inc.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional, Set, Tuple

from exifcore import makernote_tags
from exifcore.byte_reader import INTEL, MOTOROLA
from exifcore.directory import Directory, DirectoryKind
from exifcore.exceptions import BufferBoundsError
from exifcore.exif_tags import TAG_MAKE
from exifcore.fixed_layout import decode_fixed_layout
from exifcore.makernote_tags import FixedField

if TYPE_CHECKING:
    from exifcore.ifd_walker import IfdWalker

logger = logging.getLogger(__name__)

# Enough bytes to tell all known signatures apart
SIGNATURE_LENGTH = 16


class BodyKind(Enum):
    IFD = "ifd"
    FIXED = "fixed"


class Origin(Enum):
    """What a profile's value pointers are relative to."""
    TIFF_HEADER = "tiff_header"
    MAKERNOTE = "makernote"


Matcher = Callable[[bytes, str], bool]


@dataclass(frozen=True)
class VendorProfile:
    """
    Layout of one vendor makernote.

    ``kind`` is None for layouts that are recognised but not decoded; those
    are reported the same way as an unknown makernote, unless the profile
    carries its own ``unsupported_error``. That error replaces the raw
    MakerNote value.

    Vendor IFDs never follow a next-IFD link.
    """
    name: str
    kind: Optional[DirectoryKind]
    matches: Matcher = field(compare=False, repr=False)
    ifd_delta: int = 0
    origin: Origin = Origin.TIFF_HEADER
    base_delta: int = 0
    byte_order: Optional[str] = None
    body: BodyKind = BodyKind.IFD
    unsupported_error: Optional[str] = None
    # Fujifilm stores the IFD position as an Intel uint32 at this makernote offset
    ifd_pointer_at: Optional[int] = None
    layout: Tuple[FixedField, ...] = ()

    @property
    def supported(self) -> bool:
        return self.kind is not None


def _prefix(*prefixes: bytes) -> Matcher:
    return lambda signature, make: signature.startswith(prefixes)


def _prefix_ci(prefix: bytes) -> Matcher:
    return lambda signature, make: signature[:len(prefix)].upper() == prefix.upper()


def _make_starts(*prefixes: str) -> Matcher:
    return lambda signature, make: make.upper().startswith(prefixes)


def _make_is(value: str) -> Matcher:
    return lambda signature, make: make.lower() == value.lower()


def _make_exactly(value: str) -> Matcher:
    return lambda signature, make: make == value


def _all(*matchers: Matcher) -> Matcher:
    return lambda signature, make: all(m(signature, make) for m in matchers)


def _any(*matchers: Matcher) -> Matcher:
    return lambda signature, make: any(m(signature, make) for m in matchers)


def _byte_at(position: int, value: Optional[int]) -> Matcher:
    """Byte at ``position`` equals ``value``; None matches any byte other than 1 and 2."""
    def match(signature: bytes, make: str) -> bool:
        if len(signature) <= position:
            return False
        if value is None:
            return signature[position] not in (1, 2)
        return signature[position] == value
    return match


def _not(matcher: Matcher) -> Matcher:
    return lambda signature, make: not matcher(signature, make)


_NIKON_MAKE = _make_starts("NIKON")
_NIKON_PREFIX = _prefix(b"Nikon")
_LEICA_PREFIX = _prefix(b"LEICA")
_RICOH_MAKE = _make_starts("RICOH")


VENDOR_PROFILES: Tuple[VendorProfile, ...] = (
    VendorProfile(
        "Olympus", DirectoryKind.OLYMPUS,
        _prefix(b"OLYMPUS\x00II", b"OLYMPUS\x00MM"),
        ifd_delta=12, origin=Origin.MAKERNOTE,
    ),
    VendorProfile(
        "OM System", DirectoryKind.OLYMPUS,
        _prefix(b"OM SYSTEM\x00\x00\x00II", b"OM SYSTEM\x00\x00\x00MM"),
        ifd_delta=16, origin=Origin.MAKERNOTE,
    ),
    VendorProfile(
        "Olympus", DirectoryKind.OLYMPUS,
        _prefix(b"OLYMP", b"EPSON", b"AGFA"),
        ifd_delta=8,
    ),
    VendorProfile("Minolta", DirectoryKind.OLYMPUS, _make_starts("MINOLTA")),
    VendorProfile(
        "Nikon", DirectoryKind.NIKON_TYPE1,
        _all(_NIKON_MAKE, _NIKON_PREFIX, _byte_at(6, 1)),
        ifd_delta=8,
    ),
    # Type 2 keeps a complete TIFF header at makernote+10
    VendorProfile(
        "Nikon", DirectoryKind.NIKON_TYPE2,
        _all(_NIKON_MAKE, _NIKON_PREFIX, _byte_at(6, 2)),
        ifd_delta=18, origin=Origin.MAKERNOTE, base_delta=10,
    ),
    VendorProfile(
        "Nikon", None,
        _all(_NIKON_MAKE, _NIKON_PREFIX, _byte_at(6, None)),
        unsupported_error="Unsupported Nikon makernote data ignored.",
    ),
    VendorProfile(
        "Nikon", DirectoryKind.NIKON_TYPE2,
        _all(_NIKON_MAKE, _not(_NIKON_PREFIX)),
    ),
    VendorProfile(
        "Sony", DirectoryKind.SONY_TYPE1,
        _prefix(b"SONY CAM", b"SONY DSC"),
        ifd_delta=12,
    ),
    VendorProfile(
        "Sony Ericsson", DirectoryKind.SONY_TYPE6,
        _prefix(b"SEMC MS\x00\x00\x00\x00\x00"),
        ifd_delta=20, byte_order=MOTOROLA,
    ),
    VendorProfile(
        "Sigma", DirectoryKind.SIGMA,
        _prefix(b"SIGMA\x00\x00\x00", b"FOVEON\x00\x00"),
        ifd_delta=10,
    ),
    VendorProfile(
        "Kodak", DirectoryKind.KODAK,
        _prefix(b"KDK INFO"),
        ifd_delta=makernote_tags.KODAK_DATA_OFFSET, byte_order=MOTOROLA,
        body=BodyKind.FIXED, layout=makernote_tags.KODAK_LAYOUT,
    ),
    VendorProfile(
        "Kodak", DirectoryKind.KODAK,
        _prefix(b"KDK"),
        ifd_delta=makernote_tags.KODAK_DATA_OFFSET, byte_order=INTEL,
        body=BodyKind.FIXED, layout=makernote_tags.KODAK_LAYOUT,
    ),
    VendorProfile("Canon", DirectoryKind.CANON, _make_is("Canon")),
    VendorProfile(
        "Casio", DirectoryKind.CASIO_TYPE2,
        _all(_make_starts("CASIO"), _prefix(b"QVC\x00\x00\x00")),
        ifd_delta=6,
    ),
    VendorProfile("Casio", DirectoryKind.CASIO_TYPE1, _make_starts("CASIO")),
    VendorProfile(
        "Fujifilm", DirectoryKind.FUJIFILM,
        _any(_prefix(b"FUJIFILM"), _make_is("Fujifilm")),
        origin=Origin.MAKERNOTE, byte_order=INTEL, ifd_pointer_at=8,
    ),
    VendorProfile("Kyocera", DirectoryKind.KYOCERA, _prefix(b"KYOCERA"), ifd_delta=22),
    VendorProfile(
        "Leica", DirectoryKind.LEICA,
        _all(_LEICA_PREFIX, _make_exactly("Leica Camera AG")),
        ifd_delta=8, byte_order=INTEL,
    ),
    VendorProfile(
        "Leica", DirectoryKind.PANASONIC,
        _all(_LEICA_PREFIX, _make_exactly("LEICA")),
        ifd_delta=8, byte_order=INTEL,
    ),
    VendorProfile("Leica", None, _LEICA_PREFIX),
    VendorProfile(
        "Panasonic", DirectoryKind.PANASONIC,
        _prefix(b"Panasonic\x00\x00\x00"),
        ifd_delta=12,
    ),
    # Casio EX-Z and some Pentax models
    VendorProfile(
        "Pentax", DirectoryKind.CASIO_TYPE2,
        _prefix(b"AOC\x00"),
        ifd_delta=6, origin=Origin.MAKERNOTE,
    ),
    VendorProfile(
        "Pentax", DirectoryKind.PENTAX,
        _make_starts("PENTAX", "ASAHI"),
        origin=Origin.MAKERNOTE,
    ),
    VendorProfile(
        "Sanyo", DirectoryKind.SANYO,
        _prefix(b"SANYO\x00\x01\x00"),
        ifd_delta=8, origin=Origin.MAKERNOTE,
    ),
    # Older Ricoh models store a text makernote
    VendorProfile("Ricoh", None, _all(_RICOH_MAKE, _prefix(b"Rv", b"Rev"))),
    VendorProfile(
        "Ricoh", DirectoryKind.RICOH,
        _all(_RICOH_MAKE, _prefix_ci(b"Ricoh")),
        ifd_delta=8, origin=Origin.MAKERNOTE, byte_order=MOTOROLA,
    ),
    VendorProfile(
        "Apple", DirectoryKind.APPLE,
        _prefix(b"Apple iOS"),
        ifd_delta=14, origin=Origin.MAKERNOTE, byte_order=MOTOROLA,
    ),
    VendorProfile("Samsung", DirectoryKind.SAMSUNG_TYPE2, _make_is("SAMSUNG")),
    VendorProfile(
        "Reconyx HyperFire", DirectoryKind.RECONYX_HYPERFIRE,
        _prefix(makernote_tags.RECONYX_HYPERFIRE_MAKERNOTE_VERSION.to_bytes(2, 'little')),
        body=BodyKind.FIXED, layout=makernote_tags.RECONYX_HYPERFIRE_LAYOUT,
    ),
    VendorProfile(
        "Reconyx UltraFire", DirectoryKind.RECONYX_ULTRAFIRE,
        _prefix_ci(b"RECONYXUF"),
        body=BodyKind.FIXED, layout=makernote_tags.RECONYX_ULTRAFIRE_LAYOUT,
    ),
    VendorProfile(
        "Reconyx HyperFire 2", DirectoryKind.RECONYX_HYPERFIRE2,
        _prefix_ci(b"RECONYXH2"),
        body=BodyKind.FIXED, layout=makernote_tags.RECONYX_HYPERFIRE2_LAYOUT,
    ),
)


def select_vendor_profile(
    signature: bytes,
    make: Optional[str],
    profiles: Tuple[VendorProfile, ...] = VENDOR_PROFILES
) -> Optional[VendorProfile]:
    """
    Pick the makernote layout for a signature and camera make.

    Args:
        signature: Leading bytes of the makernote block
        make: IFD0 Make string, if any (surrounding whitespace is ignored)
        profiles: Profiles to try, in priority order

    Returns:
        First matching profile (possibly an unsupported one), or None
    """
    normalized_make = (make or "").strip()
    for profile in profiles:
        if profile.matches(signature, normalized_make):
            return profile
    return None


class MakernoteDispatcher:
    """Decodes a makernote block into a vendor directory."""

    def __init__(self, profiles: Tuple[VendorProfile, ...] = VENDOR_PROFILES):
        self.profiles = profiles

    def dispatch(
        self,
        walker: 'IfdWalker',
        holder: Directory,
        visited: Set[int],
        makernote_offset: int,
        tiff_header_offset: int,
        depth: int
    ) -> bool:
        """
        Decode the makernote at ``makernote_offset``.

        Args:
            walker: Walker of the current decode
            holder: Directory holding the MakerNote tag
            visited: Visited IFD offsets of the current decode
            makernote_offset: Absolute offset of the makernote block
            tiff_header_offset: Absolute offset of the TIFF header
            depth: Nesting level for the vendor directory

        Returns:
            True when the makernote was consumed (decoded, or rejected with
            a vendor-specific error), False when the caller should keep the
            raw bytes instead
        """
        reader = walker.reader
        primary = walker.first_directory(DirectoryKind.IFD0) or holder
        make = primary.get_string(TAG_MAKE)
        signature = reader.data[makernote_offset:makernote_offset + SIGNATURE_LENGTH]

        profile = select_vendor_profile(signature, make, self.profiles)
        if profile is None or not profile.supported:
            logger.debug("No makernote profile for make %r, signature %r", make, signature[:12])
            if profile is not None and profile.unsupported_error:
                primary.add_error(profile.unsupported_error)
                return True
            primary.add_error("Unsupported makernote data ignored.")
            return False

        logger.debug("Decoding %s makernote at offset %d", profile.name, makernote_offset)
        with reader.byte_order(profile.byte_order):
            if profile.body is BodyKind.FIXED:
                directory = walker.new_directory(profile.kind, holder, makernote_offset)
                decode_fixed_layout(
                    reader, directory, profile.layout,
                    makernote_offset + profile.ifd_delta, profile.name
                )
                return True

            if profile.origin is Origin.MAKERNOTE:
                base_offset = makernote_offset + profile.base_delta
            else:
                base_offset = tiff_header_offset + profile.base_delta

            if profile.ifd_pointer_at is not None:
                try:
                    ifd_offset = makernote_offset + reader.get_uint32(
                        makernote_offset + profile.ifd_pointer_at
                    )
                except BufferBoundsError:
                    primary.add_error(f"Invalid {profile.name} makernote IFD pointer")
                    return True
            else:
                ifd_offset = makernote_offset + profile.ifd_delta

            directory = walker.walk_sub_directory(
                profile.kind, holder, visited, ifd_offset, base_offset, depth
            )
        # a skipped walk (visited offset or limit) leaves the raw bytes in place
        return directory is not None
