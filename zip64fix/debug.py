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
Debugging utilities for zip64fix.

This module provides tools for looking at the end-of-archive records of a
ZIP file without modifying it.
"""

import os
from typing import Optional

from .constants import END_OF_CENTRAL_DIR_SIZE, ZIP64_LOCATOR_SIZE
from .locator import iter_eocd_candidates
from .structures import EndOfCentralDirectory, Zip64Locator
from .validator import Zip64Outcome, validate
from .window import FileWindow


def hex_dump(data: bytes, offset: int = 0, length: Optional[int] = None) -> str:
    """Create a hex dump of binary data.

    Args:
        data: Binary data to dump.
        offset: Starting offset for display.
        length: Maximum length to dump (None for all).

    Returns:
        Formatted hex dump string.
    """
    if length is not None:
        data = data[:length]

    lines = []
    for i in range(0, len(data), 16):
        chunk = data[i : i + 16]
        hex_part = " ".join(f"{b:02X}" for b in chunk)
        ascii_part = "".join(chr(b) if 32 <= b < 127 else "." for b in chunk)
        lines.append(f"{offset + i:08X}  {hex_part:<48}  {ascii_part}")

    return "\n".join(lines)


def _describe_eocd(eocd: EndOfCentralDirectory) -> list[str]:
    return [
        f"End of Central Directory: 0x{eocd.offset:08X}",
        f"  This disk:            {eocd.disk_num}",
        f"  Central dir disk:     {eocd.cd_disk}",
        f"  Entries on disk:      {eocd.cd_records_on_disk}",
        f"  Entries total:        {eocd.cd_records_total}",
        f"  Central dir size:     {eocd.cd_size}",
        f"  Central dir offset:   0x{eocd.cd_offset:08X}",
        f"  Comment length:       {eocd.comment_len}",
    ]


def _describe_locator(locator: Zip64Locator) -> list[str]:
    return [
        f"ZIP64 Locator: 0x{locator.offset:08X}",
        f"  ZIP64 EOCD disk:      {locator.disk_num}",
        f"  ZIP64 EOCD offset:    0x{locator.zip64_eocd_offset:016X}",
        f"  Total disks:          {locator.total_disks}",
    ]


def describe_tail(file_path: str | os.PathLike) -> str:
    """Describe the End of Central Directory and ZIP64 locator of a file.

    The file is opened read-only.

    Args:
        file_path: Path to ZIP file.

    Returns:
        Formatted string describing the records.

    Raises:
        OSError: If the file cannot be read.
        ZipTooSmallError: If the file is too small to be a ZIP archive.
    """
    output = [f"ZIP Tail Records: {os.fspath(file_path)}", "=" * 80]

    with FileWindow(file_path, writable=False) as window:
        output.append(f"File size: {window.file_size} bytes")
        output.append(f"Scanned window: [{window.start}, {window.end})")

        for eocd_offset in iter_eocd_candidates(window):
            result = validate(window, eocd_offset)
            if result.outcome is Zip64Outcome.SIGNATURE_MISMATCH:
                output.append(f"Skipped EOCD candidate at 0x{eocd_offset:08X}: no ZIP64 locator before it")
                continue

            output.append("")
            output.extend(_describe_eocd(result.eocd))

            if result.outcome is Zip64Outcome.NOT_START_DISK:
                output.append("Not start disk: multi-disk archives are not supported")
            elif result.outcome is Zip64Outcome.NO_ZIP64:
                output.append("Not a ZIP64 archive")
            else:
                output.append("")
                output.extend(_describe_locator(result.locator))
                if result.total_disks == 0:
                    output.append("Total disks is 0: needs fixing")
                output.append("")
                tail_start = result.locator.offset
                tail = window.read(tail_start, ZIP64_LOCATOR_SIZE + END_OF_CENTRAL_DIR_SIZE)
                output.append(hex_dump(tail, offset=tail_start))
            break
        else:
            output.append("No End of Central Directory record found")

    return "\n".join(output)
