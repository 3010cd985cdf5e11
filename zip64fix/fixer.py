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
Per-file fixup pipeline.

Some Windows tools write ZIP64 archives whose ZIP64 End of Central Directory
Locator claims a "total number of disks" of 0. Unix and macOS unzip tools
reject those archives. This module finds the locator and sets the field to 1:

1. Map the tail of the file (FileWindow).
2. Scan backward for an End of Central Directory record whose comment
   length reaches the end of the file.
3. Check the record is on the start disk and defers to ZIP64, and that a
   locator signature precedes it. If the signature is missing, the record
   was a false match and the scan resumes.
4. Patch the locator's disk count if it is zero.

Example:
    result = fixup("backup.zip")
    if result.status is FixStatus.PATCHED:
        print("fixed")
"""

import enum
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .constants import RESULT_ERROR, RESULT_PATCHED, RESULT_UNCHANGED
from .errors import (
    EndOfCentralDirectoryNotFound,
    NotStartDiskError,
    WindowBoundsError,
    ZipError,
)
from .locator import iter_eocd_candidates
from .patcher import patch
from .validator import Zip64Outcome, validate
from .window import FileWindow

logger = logging.getLogger(__name__)


class FixStatus(enum.Enum):
    PATCHED = "patched"
    WOULD_PATCH = "would_patch"
    UNNECESSARY = "unnecessary"
    NOT_FOUND = "not_found"
    FAILED = "failed"


_STATUS_CODES = {
    FixStatus.PATCHED: RESULT_PATCHED,
    FixStatus.WOULD_PATCH: RESULT_PATCHED,
    FixStatus.UNNECESSARY: RESULT_UNCHANGED,
    FixStatus.NOT_FOUND: RESULT_ERROR,
    FixStatus.FAILED: RESULT_ERROR,
}


@dataclass
class FixResult:
    """Result of processing one file."""

    path: str
    status: FixStatus
    message: str = ""
    eocd_offset: Optional[int] = None
    total_disks_offset: Optional[int] = None

    @property
    def code(self) -> int:
        """-1 on error, 0 if unchanged, 1 if patched (or would be)."""
        return _STATUS_CODES[self.status]

    @property
    def ok(self) -> bool:
        return self.code >= 0


def fix_archive(path: str | os.PathLike, dry_run: bool = False) -> FixResult:
    """Find and fix a zero disk count in the ZIP64 locator of 'path'.

    Args:
        path: Path to the archive.
        dry_run: If True, never write to the file.

    Returns:
        FixResult with status PATCHED, WOULD_PATCH or UNNECESSARY.

    Raises:
        OSError: If the file cannot be stat'd, opened or mapped.
        ZipTooSmallError: If the file is too small to be a ZIP archive.
        EndOfCentralDirectoryNotFound: If no EOCD record is found.
        NotStartDiskError: If the archive spans several disks.
    """
    path = os.fspath(path)
    logger.debug("Processing %s (dry run: %s)", path, dry_run)

    with FileWindow(path) as window:
        for eocd_offset in iter_eocd_candidates(window):
            result = validate(window, eocd_offset)

            if result.outcome is Zip64Outcome.SIGNATURE_MISMATCH:
                continue

            if result.outcome is Zip64Outcome.NOT_START_DISK:
                raise NotStartDiskError(
                    f"Not start disk: EOCD record is on disk {result.eocd.disk_num}, "
                    f"central directory starts on disk {result.eocd.cd_disk}"
                )

            if result.outcome is Zip64Outcome.NO_ZIP64:
                return FixResult(
                    path,
                    FixStatus.UNNECESSARY,
                    "not a ZIP64 archive",
                    eocd_offset=eocd_offset,
                )

            code = patch(window, result.total_disks_offset, result.total_disks, dry_run)
            if code == RESULT_PATCHED:
                status = FixStatus.WOULD_PATCH if dry_run else FixStatus.PATCHED
                message = "total number of disks 0 -> 1"
            else:
                status = FixStatus.UNNECESSARY
                message = f"total number of disks is already {result.total_disks}"
            return FixResult(
                path,
                status,
                message,
                eocd_offset=eocd_offset,
                total_disks_offset=result.total_disks_offset,
            )

    raise EndOfCentralDirectoryNotFound(
        f"No End of Central Directory record found in {path}; is it a zip file?"
    )


def fixup(path: str | os.PathLike, dry_run: bool = False) -> FixResult:
    """Like fix_archive(), but report failures as a FixResult instead of raising.

    Out-of-window accesses are programming errors and still propagate.
    """
    path = os.fspath(path)
    try:
        return fix_archive(path, dry_run=dry_run)
    except WindowBoundsError:
        raise
    except EndOfCentralDirectoryNotFound as e:
        logger.warning("%s", e)
        return FixResult(path, FixStatus.NOT_FOUND, str(e))
    except (OSError, ZipError) as e:
        message = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
        logger.warning("Failed to fix %s: %s", path, message)
        return FixResult(path, FixStatus.FAILED, message)


def _file_identity(path: str):
    """Key that is equal for two paths naming the same file, hard links included."""
    try:
        st = os.stat(path)
    except OSError:
        return os.path.realpath(path)
    return (st.st_dev, st.st_ino)


def fixup_many(
    paths: Iterable[str | os.PathLike], dry_run: bool = False, jobs: int = 1
) -> List[FixResult]:
    """Run fixup() on each path and return the results in input order.

    Files share no state, so with ``jobs > 1`` they are processed by a
    thread pool. A batch naming the same file twice (by any path or hard
    link) runs sequentially.
    """
    paths = [os.fspath(p) for p in paths]
    if jobs < 1:
        raise ValueError(f"jobs must be at least 1, got {jobs}")

    unique = {_file_identity(p) for p in paths}
    if jobs == 1 or len(paths) < 2 or len(unique) != len(paths):
        return [fixup(p, dry_run=dry_run) for p in paths]

    with ThreadPoolExecutor(max_workers=jobs) as executor:
        return list(executor.map(lambda p: fixup(p, dry_run=dry_run), paths))
