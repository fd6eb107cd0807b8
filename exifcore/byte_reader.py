# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Byte-order aware reader

This module provides bounds-checked primitive reads over an immutable
byte buffer. The byte order can be switched at runtime (makernotes often
use a different order than the enclosing TIFF structure).

Copyright 2025 DNAi inc.
"""

import struct
from contextlib import contextmanager
from typing import Iterator, Optional

from exifcore.exceptions import BufferBoundsError

MOTOROLA = '>'
INTEL = '<'


class ByteOrderReader:
    """
    Random-access reader for a byte buffer.

    Every read validates that ``offset + width`` stays inside the buffer
    and raises BufferBoundsError otherwise. Multi-byte reads honour the
    current byte order unless an explicit ``endian`` is given.
    """

    def __init__(self, data: bytes, endian: str = MOTOROLA):
        """
        Initialize the reader.

        Args:
            data: Buffer to read from (bytes, bytearray or memoryview)
            endian: '>' for Motorola (big-endian), '<' for Intel (little-endian)
        """
        if isinstance(data, (bytearray, memoryview)):
            data = bytes(data)
        if not isinstance(data, bytes):
            raise TypeError(f"data must be bytes, not {type(data).__name__}")
        self._data = data
        self.endian = self._check_endian(endian)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def is_motorola(self) -> bool:
        """True when the current byte order is big-endian."""
        return self.endian == MOTOROLA

    def set_motorola(self, motorola: bool) -> None:
        self.endian = MOTOROLA if motorola else INTEL

    @contextmanager
    def byte_order(self, endian: Optional[str]) -> Iterator['ByteOrderReader']:
        """
        Temporarily switch the byte order, restoring the previous one on exit.

        Args:
            endian: New byte order, or None to keep the current one
        """
        previous = self.endian
        if endian is not None:
            self.endian = self._check_endian(endian)
        try:
            yield self
        finally:
            self.endian = previous

    @staticmethod
    def _check_endian(endian: str) -> str:
        if endian not in (MOTOROLA, INTEL):
            raise ValueError(f"endian must be '>' or '<', not {endian!r}")
        return endian

    def validate(self, offset: int, width: int) -> None:
        """Raise BufferBoundsError unless [offset, offset + width) is inside the buffer."""
        if width < 0:
            raise ValueError(f"width must not be negative: {width}")
        if offset < 0 or offset + width > len(self._data):
            raise BufferBoundsError(offset, width, len(self._data))

    def is_valid(self, offset: int, width: int) -> bool:
        return 0 <= offset and width >= 0 and offset + width <= len(self._data)

    def _unpack(self, fmt: str, offset: int, width: int, endian: Optional[str]):
        self.validate(offset, width)
        order = self.endian if endian is None else endian
        return struct.unpack_from(f'{order}{fmt}', self._data, offset)[0]

    def get_uint8(self, offset: int) -> int:
        self.validate(offset, 1)
        return self._data[offset]

    def get_int8(self, offset: int) -> int:
        return self._unpack('b', offset, 1, None)

    def get_uint16(self, offset: int, endian: Optional[str] = None) -> int:
        return self._unpack('H', offset, 2, endian)

    def get_int16(self, offset: int, endian: Optional[str] = None) -> int:
        return self._unpack('h', offset, 2, endian)

    def get_uint32(self, offset: int, endian: Optional[str] = None) -> int:
        return self._unpack('I', offset, 4, endian)

    def get_int32(self, offset: int, endian: Optional[str] = None) -> int:
        return self._unpack('i', offset, 4, endian)

    def get_float32(self, offset: int, endian: Optional[str] = None) -> float:
        return self._unpack('f', offset, 4, endian)

    def get_float64(self, offset: int, endian: Optional[str] = None) -> float:
        return self._unpack('d', offset, 8, endian)

    def get_bytes(self, offset: int, count: int) -> bytes:
        self.validate(offset, count)
        return self._data[offset:offset + count]

    def get_string(self, offset: int, length: int) -> str:
        """Fixed-length slice decoded one byte per character (latin-1)."""
        return self.get_bytes(offset, length).decode('latin-1')

    def get_null_terminated_string(self, offset: int, max_length: int) -> str:
        """
        Read up to max_length bytes, stopping at the first NUL.

        UTF-8 is tried first; invalid sequences fall back to latin-1 so that
        no byte is lost.
        """
        raw = self.get_bytes(offset, max_length)
        null_pos = raw.find(b'\x00')
        if null_pos >= 0:
            raw = raw[:null_pos]
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError:
            return raw.decode('latin-1')
