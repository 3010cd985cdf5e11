"""
Copyright 2025 DNAi inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

"""
Utility functions for zip64fix.

This module provides the little-endian integer decoders used on the tail of
an archive. They accept either a FileWindow (offsets in file coordinates) or
any bytes-like object (offsets are plain indexes).
"""

import struct

from .errors import WindowBoundsError

# Explicitly little-endian, whatever the byte order of the host
_UINT16 = struct.Struct("<H")
_UINT32 = struct.Struct("<I")
_UINT64 = struct.Struct("<Q")


def read_bytes(buf, offset: int, size: int) -> bytes:
    """Read exactly 'size' bytes at 'offset'.

    Args:
        buf: FileWindow or bytes-like object.
        offset: Offset of the first byte.
        size: Number of bytes to read.

    Returns:
        Exactly 'size' bytes of data.

    Raises:
        WindowBoundsError: If the range falls outside 'buf'.
    """
    reader = getattr(buf, "read", None)
    if reader is not None:
        return reader(offset, size)

    if offset < 0 or size < 0 or offset + size > len(buf):
        raise WindowBoundsError(
            f"Read of {size} bytes at {offset} outside buffer of {len(buf)} bytes"
        )
    return bytes(buf[offset : offset + size])


def read_uint16(buf, offset: int) -> int:
    """Read a little-endian 16-bit unsigned integer.

    Args:
        buf: FileWindow or bytes-like object.
        offset: Offset of the first (least significant) byte.

    Returns:
        16-bit unsigned integer value.
    """
    return _UINT16.unpack(read_bytes(buf, offset, 2))[0]


def read_uint32(buf, offset: int) -> int:
    """Read a little-endian 32-bit unsigned integer.

    Args:
        buf: FileWindow or bytes-like object.
        offset: Offset of the first (least significant) byte.

    Returns:
        32-bit unsigned integer value.
    """
    return _UINT32.unpack(read_bytes(buf, offset, 4))[0]


def read_uint64(buf, offset: int) -> int:
    """Read a little-endian 64-bit unsigned integer."""
    return _UINT64.unpack(read_bytes(buf, offset, 8))[0]


def align_down(value: int, alignment: int) -> int:
    """Round 'value' down to a multiple of 'alignment'."""
    return value - (value % alignment)
