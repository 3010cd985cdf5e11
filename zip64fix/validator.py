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
ZIP64 checks on a located End of Central Directory record.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from .constants import ZIP64_END_OF_CENTRAL_DIR_LOCATOR
from .structures import (
    EndOfCentralDirectory,
    Zip64Locator,
    locator_offset_for,
    parse_eocd,
    parse_zip64_locator,
)
from .utils import read_uint32

logger = logging.getLogger(__name__)


class Zip64Outcome(enum.Enum):
    NO_ZIP64 = "no_zip64"
    NOT_START_DISK = "not_start_disk"
    SIGNATURE_MISMATCH = "signature_mismatch"
    READY_TO_PATCH = "ready_to_patch"


@dataclass
class ValidationResult:
    """Outcome of validating one EOCD candidate.

    ``locator``, ``total_disks_offset`` and ``total_disks`` are set only
    for READY_TO_PATCH.
    """

    outcome: Zip64Outcome
    eocd: EndOfCentralDirectory
    locator: Optional[Zip64Locator] = None
    total_disks_offset: Optional[int] = None
    total_disks: Optional[int] = None


def validate(window, eocd_offset: int) -> ValidationResult:
    """Check the EOCD record at 'eocd_offset' and find its ZIP64 locator.

    Args:
        window: FileWindow over the tail of the archive.
        eocd_offset: Offset of an EOCD record whose comment length is consistent.

    Returns:
        ValidationResult. SIGNATURE_MISMATCH means the candidate was not a
        real EOCD record and the scan should continue.
    """
    eocd = parse_eocd(window, eocd_offset)

    if not eocd.on_start_disk:
        logger.debug(
            "EOCD at %d is on disk %d, central directory starts on disk %d",
            eocd_offset,
            eocd.disk_num,
            eocd.cd_disk,
        )
        return ValidationResult(Zip64Outcome.NOT_START_DISK, eocd)

    if not eocd.is_zip64:
        return ValidationResult(Zip64Outcome.NO_ZIP64, eocd)

    locator_offset = locator_offset_for(eocd_offset)
    if locator_offset < window.start:
        logger.debug("No room for a ZIP64 locator before EOCD candidate at %d", eocd_offset)
        return ValidationResult(Zip64Outcome.SIGNATURE_MISMATCH, eocd)

    signature = read_uint32(window, locator_offset)
    if signature != ZIP64_END_OF_CENTRAL_DIR_LOCATOR:
        logger.debug(
            "No ZIP64 locator before EOCD candidate at %d (found 0x%08X)",
            eocd_offset,
            signature,
        )
        return ValidationResult(Zip64Outcome.SIGNATURE_MISMATCH, eocd)

    locator = parse_zip64_locator(window, locator_offset)
    return ValidationResult(
        Zip64Outcome.READY_TO_PATCH,
        eocd,
        locator=locator,
        total_disks_offset=locator.total_disks_offset,
        total_disks=locator.total_disks,
    )
