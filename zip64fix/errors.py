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
Custom exception classes for zip64fix.

I/O failures (missing files, permission problems, mapping failures) are not
wrapped: they surface as the builtin OSError family.
"""


class ZipError(Exception):
    """Base exception class for all ZIP-related errors."""

    pass


class ZipFormatError(ZipError):
    """Raised when a file cannot be a ZIP archive we can work with.

    This exception is raised when:
    - The file is too small to hold an End of Central Directory record
    - No End of Central Directory record is found near the end of the file
    """

    pass


class ZipTooSmallError(ZipFormatError):
    """Raised when a file is smaller than the smallest possible EOCD record."""

    pass


class EndOfCentralDirectoryNotFound(ZipFormatError):
    """Raised when the backward scan finds no consistent EOCD record."""

    pass


class ZipUnsupportedFeature(ZipError):
    """Raised when encountering an unsupported ZIP feature.

    The archive looks well formed, but repairing it is out of scope
    (for example, an archive spanning several disks).
    """

    pass


class NotStartDiskError(ZipUnsupportedFeature):
    """Raised when the EOCD record is not on the central directory start disk."""

    pass


class WindowBoundsError(ZipError, IndexError):
    """Raised on a read or write outside a FileWindow.

    This signals a programming error in the caller, not a bad archive.
    """

    pass
