# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for exifcore

Malformed Exif data never escapes a decode as an exception; these classes
are raised by the low-level readers and converted into per-directory error
messages by the walker.

Copyright 2025 DNAi inc.
"""


class ExifCoreError(Exception):
    """
    Base exception for all exifcore errors.
    
    All exifcore exceptions inherit from this class, allowing
    catch-all error handling for any exifcore-related errors.
    """
    def __init__(self, message: str = ""):
        """
        Initialize the exception with an optional error message.
        
        Args:
            message: Descriptive error message explaining what went wrong
        """
        self.message = message
        super().__init__(message)


class BufferBoundsError(ExifCoreError):
    """
    Raised when a read would extend outside the byte buffer.
    
    This exception is raised when:
    - The requested offset is negative
    - offset + width exceeds the buffer length
    """
    def __init__(self, offset: int, width: int, length: int):
        self.offset = offset
        self.width = width
        self.length = length
        super().__init__(
            f"Attempt to read {width} byte(s) at offset {offset} "
            f"outside buffer of length {length}"
        )


class UnsupportedFormatError(ExifCoreError):
    """
    Raised when a TIFF format code is not supported.
    
    This exception is raised when:
    - The format code is outside the TIFF 6.0 range 1-12
    """
    def __init__(self, format_code: int):
        self.format_code = format_code
        super().__init__(f"Unsupported TIFF format code {format_code}")
