# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Decoder configuration

Tunable safety heuristics and limits for the Exif decoder.

Copyright 2025 DNAi inc.
"""

from typing import Any, Dict, Mapping


class DecoderConfig:
    """
    Configuration for a decode.

    The defaults reproduce the behaviour expected for camera files. The
    limits bound the work done on adversarial input; the heuristics can be
    switched off for files that legitimately break them.
    """

    def __init__(
        self,
        reject_backward_links: bool = True,
        detect_swapped_byte_order: bool = True,
        max_invalid_format_codes: int = 5,
        max_depth: int = 32,
        max_directories: int = 256,
        store_thumbnail_bytes: bool = True,
        accept_raw_markers: bool = True,
    ):
        """
        Initialize the configuration.

        Args:
            reject_backward_links: Ignore a next-IFD link that points before
                the start of the directory holding it
            detect_swapped_byte_order: Flip the byte order for an IFD whose
                entry count only makes sense byte-swapped (e.g. 0x0300)
            max_invalid_format_codes: Abort a directory once more than this
                many entries carry an unknown format code
            max_depth: Maximum nesting of directory walks
            max_directories: Maximum number of directories walked in one decode
            store_thumbnail_bytes: Copy the IFD1 thumbnail payload out of the buffer
            accept_raw_markers: Accept the Olympus ORF and Panasonic RW2
                header markers in addition to the standard 0x002A
        """
        self.reject_backward_links = reject_backward_links
        self.detect_swapped_byte_order = detect_swapped_byte_order
        self.max_invalid_format_codes = max_invalid_format_codes
        self.max_depth = max_depth
        self.max_directories = max_directories
        self.store_thumbnail_bytes = store_thumbnail_bytes
        self.accept_raw_markers = accept_raw_markers

        for name in ('max_invalid_format_codes', 'max_depth', 'max_directories'):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> 'DecoderConfig':
        """
        Build a configuration from a mapping of attribute names.

        Raises:
            ValueError: If the mapping holds an unknown key
        """
        known = set(cls().to_dict())
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown decoder settings: {', '.join(unknown)}")
        return cls(**dict(values))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'reject_backward_links': self.reject_backward_links,
            'detect_swapped_byte_order': self.detect_swapped_byte_order,
            'max_invalid_format_codes': self.max_invalid_format_codes,
            'max_depth': self.max_depth,
            'max_directories': self.max_directories,
            'store_thumbnail_bytes': self.store_thumbnail_bytes,
            'accept_raw_markers': self.accept_raw_markers,
        }

    def __repr__(self) -> str:
        settings = ', '.join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"DecoderConfig({settings})"
