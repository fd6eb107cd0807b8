# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Decoded directory store

A Directory is one decoded namespace (primary image, GPS, one vendor's
makernote, ...). It maps integer tag ids to the raw values produced by the
value codec and keeps an ordered log of non-fatal errors found while the
directory was walked.

Copyright 2025 DNAi inc.
"""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from exifcore import exif_tags, makernote_tags
from exifcore.rational import Rational

logger = logging.getLogger(__name__)


class DirectoryKind(Enum):
    """Namespaces a decoded directory can belong to; the value is the display name."""
    IFD0 = "Exif IFD0"
    SUB_IFD = "Exif SubIFD"
    THUMBNAIL = "Exif Thumbnail"
    GPS = "GPS"
    INTEROP = "Interoperability"
    OLYMPUS = "Olympus Makernote"
    NIKON_TYPE1 = "Nikon Makernote"
    NIKON_TYPE2 = "Nikon Makernote Type 2"
    SONY_TYPE1 = "Sony Makernote"
    SONY_TYPE6 = "Sony Makernote Type 6"
    SIGMA = "Sigma Makernote"
    KODAK = "Kodak Makernote"
    CANON = "Canon Makernote"
    CASIO_TYPE1 = "Casio Makernote"
    CASIO_TYPE2 = "Casio Makernote Type 2"
    FUJIFILM = "Fujifilm Makernote"
    KYOCERA = "Kyocera/Contax Makernote"
    LEICA = "Leica Makernote"
    PANASONIC = "Panasonic Makernote"
    PENTAX = "Pentax Makernote"
    SANYO = "Sanyo Makernote"
    RICOH = "Ricoh Makernote"
    APPLE = "Apple Makernote"
    SAMSUNG_TYPE2 = "Samsung Makernote"
    RECONYX_HYPERFIRE = "Reconyx HyperFire Makernote"
    RECONYX_HYPERFIRE2 = "Reconyx HyperFire 2 Makernote"
    RECONYX_ULTRAFIRE = "Reconyx UltraFire Makernote"

    @property
    def is_makernote(self) -> bool:
        return self not in _STANDARD_KINDS

    @property
    def tag_names(self) -> Mapping[int, str]:
        return TAG_NAME_TABLES.get(self, _EMPTY_NAMES)


_STANDARD_KINDS = frozenset((
    DirectoryKind.IFD0,
    DirectoryKind.SUB_IFD,
    DirectoryKind.THUMBNAIL,
    DirectoryKind.GPS,
    DirectoryKind.INTEROP,
))

_EMPTY_NAMES: Mapping[int, str] = MappingProxyType({})

TAG_NAME_TABLES: Mapping[DirectoryKind, Mapping[int, str]] = MappingProxyType({
    kind: MappingProxyType(table) for kind, table in (
        (DirectoryKind.IFD0, exif_tags.EXIF_TAG_NAMES),
        (DirectoryKind.SUB_IFD, exif_tags.EXIF_TAG_NAMES),
        (DirectoryKind.THUMBNAIL, exif_tags.EXIF_TAG_NAMES),
        (DirectoryKind.GPS, exif_tags.GPS_TAG_NAMES),
        (DirectoryKind.INTEROP, exif_tags.INTEROP_TAG_NAMES),
        (DirectoryKind.OLYMPUS, makernote_tags.OLYMPUS_TAGS),
        (DirectoryKind.NIKON_TYPE1, makernote_tags.NIKON_TYPE1_TAGS),
        (DirectoryKind.NIKON_TYPE2, makernote_tags.NIKON_TYPE2_TAGS),
        (DirectoryKind.SONY_TYPE1, makernote_tags.SONY_TYPE1_TAGS),
        (DirectoryKind.SONY_TYPE6, makernote_tags.SONY_TYPE6_TAGS),
        (DirectoryKind.SIGMA, makernote_tags.SIGMA_TAGS),
        (DirectoryKind.KODAK, makernote_tags.KODAK_TAGS),
        (DirectoryKind.CANON, makernote_tags.CANON_TAGS),
        (DirectoryKind.CASIO_TYPE1, makernote_tags.CASIO_TYPE1_TAGS),
        (DirectoryKind.CASIO_TYPE2, makernote_tags.CASIO_TYPE2_TAGS),
        (DirectoryKind.FUJIFILM, makernote_tags.FUJIFILM_TAGS),
        (DirectoryKind.KYOCERA, makernote_tags.KYOCERA_TAGS),
        (DirectoryKind.LEICA, makernote_tags.LEICA_TAGS),
        (DirectoryKind.PANASONIC, makernote_tags.PANASONIC_TAGS),
        (DirectoryKind.PENTAX, makernote_tags.PENTAX_TAGS),
        (DirectoryKind.SANYO, makernote_tags.SANYO_TAGS),
        (DirectoryKind.RICOH, makernote_tags.RICOH_TAGS),
        (DirectoryKind.APPLE, makernote_tags.APPLE_TAGS),
        (DirectoryKind.SAMSUNG_TYPE2, makernote_tags.SAMSUNG_TYPE2_TAGS),
        (DirectoryKind.RECONYX_HYPERFIRE, makernote_tags.RECONYX_HYPERFIRE_TAGS),
        (DirectoryKind.RECONYX_HYPERFIRE2, makernote_tags.RECONYX_HYPERFIRE2_TAGS),
        (DirectoryKind.RECONYX_ULTRAFIRE, makernote_tags.RECONYX_ULTRAFIRE_TAGS),
    )
})


class Directory:
    """
    One decoded tag namespace.

    Typed getters return None when a tag is missing or its value has a
    different shape than requested; they never raise for those cases.
    """

    def __init__(
        self,
        kind: DirectoryKind,
        parent: Optional['Directory'] = None,
        offset: Optional[int] = None
    ):
        """
        Initialize an empty directory.

        Args:
            kind: Namespace of this directory
            parent: Directory that referenced this one (informational only)
            offset: Absolute buffer offset the directory was decoded from
        """
        self.kind = kind
        self.parent = parent
        self.offset = offset
        self.thumbnail_data: Optional[bytes] = None
        self._tags: Dict[int, Any] = {}
        self._errors: List[str] = []

    def __repr__(self) -> str:
        return (
            f"<Directory {self.kind.value!r} tags={len(self._tags)} "
            f"errors={len(self._errors)}>"
        )

    @property
    def name(self) -> str:
        return self.kind.value

    # ------------------------------------------------------------------
    # Tag storage
    # ------------------------------------------------------------------

    def set(self, tag_id: int, value: Any) -> None:
        """Store a raw value; a second write for the same id replaces the first."""
        if value is None:
            raise ValueError(f"Cannot store None for tag 0x{tag_id:04X}")
        self._tags[tag_id] = value

    def contains(self, tag_id: int) -> bool:
        return tag_id in self._tags

    def __contains__(self, tag_id: int) -> bool:
        return tag_id in self._tags

    def get(self, tag_id: int) -> Any:
        return self._tags.get(tag_id)

    def tag_ids(self) -> List[int]:
        """Tag ids in the order they were decoded."""
        return list(self._tags)

    @property
    def tag_count(self) -> int:
        return len(self._tags)

    def get_tag_name(self, tag_id: int) -> str:
        name = self.kind.tag_names.get(tag_id)
        if name is None:
            return f"Unknown tag (0x{tag_id:04x})"
        return name

    # ------------------------------------------------------------------
    # Typed views
    # ------------------------------------------------------------------

    def get_int(self, tag_id: int) -> Optional[int]:
        """
        Integer view of a tag.

        A single-element integer list is accepted as a scalar.
        """
        value = self._tags.get(tag_id)
        if isinstance(value, list) and len(value) == 1:
            value = value[0]
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return None

    def get_int_array(self, tag_id: int) -> Optional[List[int]]:
        value = self._tags.get(tag_id)
        if isinstance(value, int) and not isinstance(value, bool):
            return [value]
        if isinstance(value, list) and all(isinstance(v, int) for v in value):
            return list(value)
        return None

    def get_float(self, tag_id: int) -> Optional[float]:
        value = self._tags.get(tag_id)
        if isinstance(value, float):
            return value
        return None

    def get_string(self, tag_id: int) -> Optional[str]:
        value = self._tags.get(tag_id)
        if isinstance(value, str):
            return value
        return None

    def get_rational(self, tag_id: int) -> Optional[Rational]:
        value = self._tags.get(tag_id)
        if isinstance(value, list) and len(value) == 1:
            value = value[0]
        if isinstance(value, Rational):
            return value
        return None

    def get_rational_array(self, tag_id: int) -> Optional[List[Rational]]:
        value = self._tags.get(tag_id)
        if isinstance(value, Rational):
            return [value]
        if isinstance(value, list) and value and all(isinstance(v, Rational) for v in value):
            return list(value)
        return None

    def get_byte_sequence(self, tag_id: int) -> Optional[bytes]:
        value = self._tags.get(tag_id)
        if isinstance(value, bytes):
            return value
        return None

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def add_error(self, message: str) -> None:
        self._errors.append(message)
        logger.debug("%s: %s", self.kind.value, message)

    @property
    def errors(self) -> List[str]:
        return list(self._errors)

    @property
    def has_errors(self) -> bool:
        return bool(self._errors)
