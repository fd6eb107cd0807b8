# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
IFD walker

Recursive traversal of TIFF Image File Directories. One IFD is laid out as

    2 bytes   entry count
    12 bytes  per entry: tag id (2), format code (2), component count (4),
              inline value or pointer (4)
    4 bytes   offset of the next IFD (0 = none)

Pointers are relative to a caller-supplied base offset (the TIFF header for
standard directories, the makernote start for several vendors). The walk
never raises on malformed data: problems are recorded on the directory
being walked and either one entry or one directory is skipped.

Copyright 2025 DNAi inc.
"""

import logging
from typing import Dict, List, Optional, Set

from exifcore.byte_reader import INTEL, MOTOROLA, ByteOrderReader
from exifcore.config import DecoderConfig
from exifcore.directory import Directory, DirectoryKind
from exifcore.exceptions import BufferBoundsError
from exifcore.exif_tags import (
    TAG_EXIF_SUB_IFD_OFFSET,
    TAG_GPS_INFO_OFFSET,
    TAG_INTEROP_OFFSET,
    TAG_MAKERNOTE,
)
from exifcore.makernote import MakernoteDispatcher
from exifcore.value_codec import decode_tag_value, format_byte_width

logger = logging.getLogger(__name__)

IFD_ENTRY_SIZE = 12

# Tags that point at a nested IFD, per directory kind holding them
POINTER_TAGS: Dict[DirectoryKind, Dict[int, DirectoryKind]] = {
    DirectoryKind.IFD0: {
        TAG_EXIF_SUB_IFD_OFFSET: DirectoryKind.SUB_IFD,
        TAG_GPS_INFO_OFFSET: DirectoryKind.GPS,
    },
    DirectoryKind.SUB_IFD: {
        TAG_INTEROP_OFFSET: DirectoryKind.INTEROP,
    },
}

# Directory kinds whose MakerNote tag is handed to the dispatcher
MAKERNOTE_HOLDERS = frozenset((DirectoryKind.IFD0, DirectoryKind.SUB_IFD))

# Kinds whose next-IFD link is followed. IFD0 links to the thumbnail (IFD1) and
# thumbnails may be chained; other next links usually point at garbage.
FOLLOWER_KINDS: Dict[DirectoryKind, DirectoryKind] = {
    DirectoryKind.IFD0: DirectoryKind.THUMBNAIL,
    DirectoryKind.THUMBNAIL: DirectoryKind.THUMBNAIL,
}


def directory_length(entry_count: int) -> int:
    """Byte length of an IFD holding ``entry_count`` entries, including the next link."""
    return 2 + IFD_ENTRY_SIZE * entry_count + 4


class IfdWalker:
    """
    Walks the IFDs of one decode.

    A walker is created per decode call. It owns the reader (and therefore
    the current byte order) and the list of directories produced; the set
    of visited directory offsets is passed explicitly through the recursion.
    """

    def __init__(
        self,
        reader: ByteOrderReader,
        config: Optional[DecoderConfig] = None,
        dispatcher: Optional[MakernoteDispatcher] = None
    ):
        self.reader = reader
        self.config = config or DecoderConfig()
        self.dispatcher = dispatcher or MakernoteDispatcher()
        self.directories: List[Directory] = []
        self._walked = 0

    def new_directory(
        self,
        kind: DirectoryKind,
        parent: Optional[Directory] = None,
        offset: Optional[int] = None
    ) -> Directory:
        directory = Directory(kind, parent, offset)
        self.directories.append(directory)
        return directory

    def first_directory(self, kind: DirectoryKind) -> Optional[Directory]:
        for directory in self.directories:
            if directory.kind is kind:
                return directory
        return None

    def limit_error(self, depth: int) -> Optional[str]:
        """Error message when a directory at ``depth`` would exceed a configured limit."""
        if depth > self.config.max_depth:
            return f"Maximum directory depth of {self.config.max_depth} exceeded"
        if self._walked >= self.config.max_directories:
            return f"Maximum number of directories ({self.config.max_directories}) exceeded"
        return None

    def walk_sub_directory(
        self,
        kind: DirectoryKind,
        parent: Optional[Directory],
        visited: Set[int],
        ifd_offset: int,
        base_offset: int,
        depth: int
    ) -> Optional[Directory]:
        """
        Create a directory of ``kind`` and walk it.

        Nothing is created for an already visited offset, or when a limit
        is reached; the limit error is then recorded on ``parent``.

        Returns:
            The new directory, or None when the walk was skipped
        """
        error = self.limit_error(depth)
        if error is not None:
            logger.debug("Not walking %s at %d: %s", kind.value, ifd_offset, error)
            if parent is not None:
                parent.add_error(error)
            return None
        if ifd_offset in visited:
            logger.debug("Skipping %s at already visited offset %d", kind.value, ifd_offset)
            return None
        directory = self.new_directory(kind, parent, ifd_offset)
        self.walk(directory, visited, ifd_offset, base_offset, depth)
        return directory

    def walk(
        self,
        directory: Directory,
        visited: Set[int],
        ifd_offset: int,
        base_offset: int,
        depth: int = 0
    ) -> None:
        """
        Decode the IFD at ``ifd_offset`` into ``directory``.

        Args:
            directory: Directory receiving the entries
            visited: Absolute IFD offsets already entered during this decode
            ifd_offset: Absolute offset of the IFD's entry count
            base_offset: Offset that value and IFD pointers are relative to
            depth: Nesting level of this walk
        """
        if ifd_offset in visited:
            logger.debug("IFD at offset %d already visited", ifd_offset)
            return

        error = self.limit_error(depth)
        if error is not None:
            directory.add_error(error)
            return
        visited.add(ifd_offset)
        self._walked += 1

        reader = self.reader
        if ifd_offset < 0 or ifd_offset >= len(reader):
            directory.add_error("Ignored IFD marked to start outside data segment")
            return

        try:
            entry_count = reader.get_uint16(ifd_offset)
        except BufferBoundsError:
            directory.add_error("Illegally sized IFD")
            return

        # Some editors rewrite the byte order of a file but miss some IFDs (makernotes).
        # No known IFD holds more than 255 entries, so a count like 0x0300 means swapped bytes.
        swapped_order = None
        if (self.config.detect_swapped_byte_order
                and entry_count > 0xFF and (entry_count & 0xFF) == 0):
            entry_count >>= 8
            swapped_order = INTEL if reader.is_motorola else MOTOROLA
            logger.debug("IFD at %d looks byte-swapped; reading as %r", ifd_offset, swapped_order)

        with reader.byte_order(swapped_order):
            try:
                self._walk_entries(directory, visited, ifd_offset, entry_count, base_offset, depth)
            except BufferBoundsError as e:
                directory.add_error(f"Error reading IFD: {e.message}")

    def _walk_entries(
        self,
        directory: Directory,
        visited: Set[int],
        ifd_offset: int,
        entry_count: int,
        base_offset: int,
        depth: int
    ) -> None:
        reader = self.reader
        if ifd_offset + directory_length(entry_count) > len(reader):
            directory.add_error("Illegally sized IFD")
            return

        invalid_format_codes = 0
        for index in range(entry_count):
            entry_offset = ifd_offset + 2 + IFD_ENTRY_SIZE * index
            tag_id = reader.get_uint16(entry_offset)
            format_code = reader.get_uint16(entry_offset + 2)
            component_count = reader.get_uint32(entry_offset + 4)

            width = format_byte_width(format_code)
            if width is None:
                directory.add_error(
                    f"Invalid TIFF tag format code {format_code} for tag 0x{tag_id:04X}"
                )
                invalid_format_codes += 1
                if invalid_format_codes > self.config.max_invalid_format_codes:
                    # probably reading at a wrong position; the rest would be rubbish
                    directory.add_error("Stopping processing as too many errors seen in TIFF IFD")
                    return
                continue

            byte_count = component_count * width
            if byte_count > len(reader):
                directory.add_error(f"Illegal number of bytes for TIFF tag data: {byte_count}")
                continue

            if byte_count > 4:
                value_offset = base_offset + reader.get_uint32(entry_offset + 8)
            else:
                value_offset = entry_offset + 8

            if not reader.is_valid(value_offset, byte_count):
                directory.add_error("Illegal TIFF tag pointer offset")
                continue

            target_kind = POINTER_TAGS.get(directory.kind, {}).get(tag_id)
            if target_kind is not None and component_count > 0 and byte_count == 4 * component_count:
                for i in range(component_count):
                    sub_offset = base_offset + reader.get_uint32(value_offset + 4 * i)
                    walked = self.walk_sub_directory(
                        target_kind, directory, visited, sub_offset, base_offset, depth + 1
                    )
                    # the limit error is recorded once; the remaining pointers are dropped
                    if walked is None and self.limit_error(depth + 1) is not None:
                        break
                continue

            if tag_id == TAG_MAKERNOTE and directory.kind in MAKERNOTE_HOLDERS:
                handled = self.dispatcher.dispatch(
                    self, directory, visited, value_offset, base_offset, depth + 1
                )
                if handled:
                    continue

            value = decode_tag_value(
                reader, directory, tag_id, format_code, component_count, value_offset
            )
            if value is not None:
                directory.set(tag_id, value)

        follower_kind = FOLLOWER_KINDS.get(directory.kind)
        if follower_kind is not None:
            next_offset = reader.get_uint32(ifd_offset + 2 + IFD_ENTRY_SIZE * entry_count)
            if next_offset != 0:
                self._follow_next(directory, follower_kind, visited, ifd_offset,
                                  next_offset + base_offset, base_offset, depth)

    def _follow_next(
        self,
        directory: Directory,
        follower_kind: DirectoryKind,
        visited: Set[int],
        ifd_offset: int,
        next_offset: int,
        base_offset: int,
        depth: int
    ) -> None:
        if next_offset >= len(self.reader):
            # e.g. files whose thumbnail was cropped by old versions of jhead
            logger.debug("Next IFD offset %d is outside the buffer", next_offset)
            return
        if self.config.reject_backward_links and next_offset < ifd_offset:
            logger.debug("Ignoring backward link from IFD %d to %d", ifd_offset, next_offset)
            return
        self.walk_sub_directory(
            follower_kind, directory, visited, next_offset, base_offset, depth + 1
        )
