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
Read-write memory-mapped view of the tail of an archive.

Only the last part of the file can contain the End of Central Directory
record (with its comment) and the ZIP64 locator in front of it, so only that
part is mapped.
"""

import logging
import mmap
import os
from typing import BinaryIO, Optional

from .constants import END_OF_CENTRAL_DIR_SIZE, MAX_TAIL_SIZE
from .errors import WindowBoundsError, ZipTooSmallError
from .utils import align_down

logger = logging.getLogger(__name__)


class FileWindow:
    """Bounded view of the last bytes of a file, read-write by default.

    The logical window covers ``[start, end)`` in file coordinates, where
    ``end`` is the file size and ``start`` is ``end - 65577`` for large files
    or 0 otherwise. The mapping itself begins at ``map_offset``, the logical
    start rounded down to the mapping granularity.

    Every read and write is checked against the logical window. The mapping
    and the file handle are released by ``close()``, which the context
    manager calls on every exit path.

    Example:
        with FileWindow("archive.zip") as w:
            sig = w.read(w.end - 22, 4)
    """

    def __init__(
        self,
        path: str | os.PathLike,
        writable: bool = True,
        granularity: Optional[int] = None,
    ):
        """Map the tail of 'path'.

        Args:
            path: Path to the file.
            writable: Map read-write (default) or read-only.
            granularity: Alignment of the mapping offset. Defaults to
                ``mmap.ALLOCATIONGRANULARITY``.

        Raises:
            OSError: If the file cannot be stat'd, opened or mapped.
            ZipTooSmallError: If the file is smaller than an EOCD record.
        """
        self.path = os.fspath(path)
        self.writable = writable
        self._file: Optional[BinaryIO] = None
        self._map: Optional[mmap.mmap] = None
        self._dirty = False
        self._closed = False

        file_size = os.stat(self.path).st_size
        if file_size < END_OF_CENTRAL_DIR_SIZE:
            raise ZipTooSmallError(
                f"{self.path} is not a zip file: {file_size} bytes is smaller "
                f"than an End of Central Directory record ({END_OF_CENTRAL_DIR_SIZE} bytes)"
            )

        if granularity is None:
            granularity = mmap.ALLOCATIONGRANULARITY

        self.file_size = file_size
        self.end = file_size
        if file_size > MAX_TAIL_SIZE:
            self.start = file_size - MAX_TAIL_SIZE
            self.map_offset = align_down(self.start, granularity)
        else:
            self.start = 0
            self.map_offset = 0

        self._file = open(self.path, "r+b" if writable else "rb")
        try:
            self._map = mmap.mmap(
                self._file.fileno(),
                self.end - self.map_offset,
                access=mmap.ACCESS_WRITE if writable else mmap.ACCESS_READ,
                offset=self.map_offset,
            )
        except Exception:
            self._file.close()
            self._file = None
            raise

        logger.debug(
            "Mapped %s: file size %d, window [%d, %d), mapping offset %d",
            self.path,
            self.file_size,
            self.start,
            self.end,
            self.map_offset,
        )

    @property
    def length(self) -> int:
        """Number of bytes in the logical window."""
        return self.end - self.start

    @property
    def closed(self) -> bool:
        return self._closed

    def _check(self, offset: int, size: int) -> int:
        """Validate a file-coordinate range and return its mapping index."""
        if self._map is None:
            raise ValueError("Window is closed")
        if size < 0 or offset < self.start or offset + size > self.end:
            raise WindowBoundsError(
                f"Access of {size} bytes at {offset} outside window [{self.start}, {self.end})"
            )
        return offset - self.map_offset

    def read(self, offset: int, size: int) -> bytes:
        """Read 'size' bytes starting at file offset 'offset'."""
        index = self._check(offset, size)
        return self._map[index : index + size]

    def read_byte(self, offset: int) -> int:
        """Read the byte at file offset 'offset'."""
        return self._map[self._check(offset, 1)]

    def write_byte(self, offset: int, value: int) -> None:
        """Write a single byte at file offset 'offset'.

        Raises:
            WindowBoundsError: If 'offset' is outside the window.
            ValueError: If 'value' does not fit in a byte.
            TypeError: If the window is read-only.
        """
        if not self.writable:
            raise TypeError("Window is read-only")
        index = self._check(offset, 1)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Byte value out of range: {value}")
        self._map[index] = value
        self._dirty = True

    def flush(self) -> None:
        """Write modified bytes back to the file."""
        if self._map is not None and self._dirty:
            self._map.flush()
            self._dirty = False

    def close(self) -> None:
        """Flush pending writes, unmap the window and close the file."""
        if self._closed:
            return

        try:
            self.flush()
        finally:
            if self._map is not None:
                self._map.close()
                self._map = None
            if self._file is not None:
                self._file.close()
                self._file = None
            self._closed = True

    def __enter__(self) -> "FileWindow":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    def __repr__(self) -> str:
        return f"<FileWindow {self.path!r} [{self.start}, {self.end})>"


def open_window(path: str | os.PathLike, writable: bool = True) -> FileWindow:
    """Open a FileWindow over the tail of 'path'."""
    return FileWindow(path, writable=writable)
