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
Backward scan for the End of Central Directory record.

The EOCD record is followed by a comment of unknown length (up to 65535
bytes), so its position is found by scanning backward from the end of the
file for its signature. The signature bytes can also occur inside the
comment, so every match is checked against the comment length field: a
genuine record ends exactly at the end of the file.
"""

import enum
import logging
from typing import Iterator, Optional

from .constants import (
    END_OF_CENTRAL_DIR_SIGNATURE,
    END_OF_CENTRAL_DIR_SIZE,
    EOCD_COMMENT_LEN_OFFSET,
)
from .utils import read_uint16

logger = logging.getLogger(__name__)


class ScanState(enum.Enum):
    """Progress of the reverse signature match.

    The signature is matched last byte first, so PARTIAL_1 means the last
    signature byte has been seen, PARTIAL_3 the last three.
    """

    SCANNING = 0
    PARTIAL_1 = 1
    PARTIAL_2 = 2
    PARTIAL_3 = 3
    VALIDATING = 4


# Byte each state waits for, and the state a match moves to
_EXPECTED = {
    ScanState.SCANNING: END_OF_CENTRAL_DIR_SIGNATURE[3],
    ScanState.PARTIAL_1: END_OF_CENTRAL_DIR_SIGNATURE[2],
    ScanState.PARTIAL_2: END_OF_CENTRAL_DIR_SIGNATURE[1],
    ScanState.PARTIAL_3: END_OF_CENTRAL_DIR_SIGNATURE[0],
}
_ADVANCE = {
    ScanState.SCANNING: ScanState.PARTIAL_1,
    ScanState.PARTIAL_1: ScanState.PARTIAL_2,
    ScanState.PARTIAL_2: ScanState.PARTIAL_3,
    ScanState.PARTIAL_3: ScanState.VALIDATING,
}


def next_state(state: ScanState, byte: int) -> ScanState:
    """Return the scan state after examining 'byte' in 'state'.

    A byte that breaks a partial match resets to SCANNING and is tested
    again as the possible last byte of a new signature.
    """
    if state is ScanState.VALIDATING:
        state = ScanState.SCANNING
    if state is not ScanState.SCANNING and byte != _EXPECTED[state]:
        state = ScanState.SCANNING
    if byte == _EXPECTED[state]:
        return _ADVANCE[state]
    return state


def comment_length_matches(window, offset: int) -> bool:
    """Check that an EOCD record at 'offset' ends exactly at the end of the file."""
    comment_len = read_uint16(window, offset + EOCD_COMMENT_LEN_OFFSET)
    return offset + END_OF_CENTRAL_DIR_SIZE + comment_len == window.file_size


def scan_bounds(window) -> tuple[int, int]:
    """Return the first and last byte positions examined by the scan.

    The scan starts where the last signature byte of a comment-less EOCD
    record would be, and stops at the start of the window. Room for a ZIP64
    locator in front of a candidate is checked by the validator.
    """
    first = window.end - END_OF_CENTRAL_DIR_SIZE + len(END_OF_CENTRAL_DIR_SIGNATURE) - 1
    last = window.start
    return first, last


def iter_eocd_candidates(window) -> Iterator[int]:
    """Yield offsets of EOCD signatures whose comment length is consistent.

    Candidates are produced from the end of the file backward. The generator
    can be resumed after a caller rejects a candidate for other reasons.

    Args:
        window: FileWindow over the tail of the archive.

    Yields:
        File offset of each candidate EOCD record.
    """
    position, lowest = scan_bounds(window)
    state = ScanState.SCANNING

    while position >= lowest:
        state = next_state(state, window.read_byte(position))
        if state is ScanState.VALIDATING:
            if comment_length_matches(window, position):
                yield position
            else:
                logger.debug(
                    "Ignoring EOCD signature at %d: comment length does not reach end of file",
                    position,
                )
            state = ScanState.SCANNING

        position -= 1


def locate_eocd(window) -> Optional[int]:
    """Return the offset of the last consistent EOCD record, or None."""
    for offset in iter_eocd_candidates(window):
        return offset
    return None
