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
ZIP structure definitions and parsing functions.

This module defines dataclasses for the two records at the end of a ZIP64
archive: the End of Central Directory record and the ZIP64 End of Central
Directory Locator. Parsers read them from a FileWindow (or any bytes-like
object) at a given offset.
"""

from dataclasses import dataclass

from .constants import (
    END_OF_CENTRAL_DIR,
    END_OF_CENTRAL_DIR_SIZE,
    EOCD_CD_DISK_OFFSET,
    EOCD_CD_OFFSET_OFFSET,
    EOCD_COMMENT_LEN_OFFSET,
    EOCD_DISK_NUM_OFFSET,
    MAX_CD_OFFSET,
    ZIP64_END_OF_CENTRAL_DIR_LOCATOR,
    ZIP64_LOCATOR_SIZE,
    ZIP64_LOCATOR_TOTAL_DISKS_OFFSET,
)
from .errors import ZipFormatError
from .utils import read_bytes, read_uint16, read_uint32, read_uint64


@dataclass
class EndOfCentralDirectory:
    """End of Central Directory record.

    This record marks the end of the central directory and contains
    information needed to locate the central directory. ``offset`` is the
    position of its signature in the file.
    """

    offset: int
    signature: int
    disk_num: int
    cd_disk: int
    cd_records_on_disk: int
    cd_records_total: int
    cd_size: int
    cd_offset: int
    comment_len: int
    comment: bytes

    @property
    def end(self) -> int:
        """Offset just past the comment."""
        return self.offset + END_OF_CENTRAL_DIR_SIZE + self.comment_len

    @property
    def is_zip64(self) -> bool:
        """True if the central directory offset defers to the ZIP64 record."""
        return self.cd_offset == MAX_CD_OFFSET

    @property
    def on_start_disk(self) -> bool:
        return self.disk_num == self.cd_disk


@dataclass
class Zip64Locator:
    """ZIP64 End of Central Directory Locator.

    This record points to the ZIP64 End of Central Directory record and
    sits immediately before the End of Central Directory record.
    """

    offset: int
    signature: int
    disk_num: int
    zip64_eocd_offset: int
    total_disks: int

    @property
    def total_disks_offset(self) -> int:
        """File offset of the "total number of disks" field."""
        return self.offset + ZIP64_LOCATOR_TOTAL_DISKS_OFFSET


def parse_eocd(buf, offset: int) -> EndOfCentralDirectory:
    """Parse an End of Central Directory record at 'offset'.

    The comment is included only when it lies entirely within 'buf';
    otherwise ``comment`` is empty and only ``comment_len`` is reported.

    Args:
        buf: FileWindow or bytes-like object.
        offset: Offset of the record signature.

    Returns:
        EndOfCentralDirectory object.

    Raises:
        ZipFormatError: If the signature is invalid.
        WindowBoundsError: If the fixed part does not fit in 'buf'.
    """
    signature = read_uint32(buf, offset)
    if signature != END_OF_CENTRAL_DIR:
        raise ZipFormatError(
            f"Invalid EOCD signature: 0x{signature:08X}, "
            f"expected 0x{END_OF_CENTRAL_DIR:08X}"
        )

    comment_len = read_uint16(buf, offset + EOCD_COMMENT_LEN_OFFSET)
    comment_start = offset + END_OF_CENTRAL_DIR_SIZE
    buf_end = getattr(buf, "end", None)
    if buf_end is None:
        buf_end = len(buf)
    if comment_start + comment_len <= buf_end:
        comment = read_bytes(buf, comment_start, comment_len)
    else:
        comment = b""

    return EndOfCentralDirectory(
        offset=offset,
        signature=signature,
        disk_num=read_uint16(buf, offset + EOCD_DISK_NUM_OFFSET),
        cd_disk=read_uint16(buf, offset + EOCD_CD_DISK_OFFSET),
        cd_records_on_disk=read_uint16(buf, offset + 8),
        cd_records_total=read_uint16(buf, offset + 10),
        cd_size=read_uint32(buf, offset + 12),
        cd_offset=read_uint32(buf, offset + EOCD_CD_OFFSET_OFFSET),
        comment_len=comment_len,
        comment=comment,
    )


def parse_zip64_locator(buf, offset: int) -> Zip64Locator:
    """Parse a ZIP64 locator at 'offset'.

    Args:
        buf: FileWindow or bytes-like object.
        offset: Offset of the locator signature.

    Returns:
        Zip64Locator object.

    Raises:
        ZipFormatError: If the signature is invalid.
        WindowBoundsError: If the locator does not fit in 'buf'.
    """
    signature = read_uint32(buf, offset)
    if signature != ZIP64_END_OF_CENTRAL_DIR_LOCATOR:
        raise ZipFormatError(
            f"Invalid ZIP64 locator signature: 0x{signature:08X}, "
            f"expected 0x{ZIP64_END_OF_CENTRAL_DIR_LOCATOR:08X}"
        )

    return Zip64Locator(
        offset=offset,
        signature=signature,
        disk_num=read_uint32(buf, offset + 4),
        zip64_eocd_offset=read_uint64(buf, offset + 8),
        total_disks=read_uint32(buf, offset + ZIP64_LOCATOR_TOTAL_DISKS_OFFSET),
    )


def locator_offset_for(eocd_offset: int) -> int:
    """Return where the ZIP64 locator for an EOCD at 'eocd_offset' starts."""
    return eocd_offset - ZIP64_LOCATOR_SIZE
