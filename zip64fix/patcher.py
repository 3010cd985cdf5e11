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
In-place fix of the ZIP64 locator disk count.
"""

import logging

from .constants import FIXED_TOTAL_DISKS, RESULT_PATCHED, RESULT_UNCHANGED

logger = logging.getLogger(__name__)


def patch(window, total_disks_offset: int, total_disks: int, dry_run: bool = False) -> int:
    """Set a zero "total number of disks" field to 1.

    The field is little-endian and already zero, so only its low-order byte
    is written.

    Args:
        window: FileWindow over the tail of the archive.
        total_disks_offset: File offset of the 4-byte field.
        total_disks: Current value of the field.
        dry_run: If True, report what would happen without writing.

    Returns:
        1 if the field was (or would be) patched, 0 if it needs no change.
    """
    if total_disks != 0:
        return RESULT_UNCHANGED

    if dry_run:
        logger.info("Would set total number of disks at %d to %d", total_disks_offset, FIXED_TOTAL_DISKS)
    else:
        window.write_byte(total_disks_offset, FIXED_TOTAL_DISKS)
        logger.info("Set total number of disks at %d to %d", total_disks_offset, FIXED_TOTAL_DISKS)
    return RESULT_PATCHED
