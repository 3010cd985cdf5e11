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
ZIP format constants for the end-of-archive records.

This module defines the signatures, record sizes and field offsets used to
locate the End of Central Directory record and the ZIP64 locator that
precedes it, plus the result codes reported per file.
"""

# ZIP file signatures (magic numbers)
END_OF_CENTRAL_DIR = 0x06054B50  # "PK\x05\x06"
ZIP64_END_OF_CENTRAL_DIR_LOCATOR = 0x07064B50  # "PK\x06\x07"

# Signature bytes as they appear in the file
END_OF_CENTRAL_DIR_SIGNATURE = b"PK\x05\x06"

# End of central directory size (fixed part, excluding comment)
END_OF_CENTRAL_DIR_SIZE = 22

# ZIP64 locator size (fixed part)
ZIP64_LOCATOR_SIZE = 20

# Maximum EOCD comment length
MAX_COMMENT_SIZE = 0xFFFF

# Tail of the file that can hold a ZIP64 locator plus an EOCD with a
# maximum-length comment: 20 + 22 + 65535 = 65577 bytes
MAX_TAIL_SIZE = ZIP64_LOCATOR_SIZE + END_OF_CENTRAL_DIR_SIZE + MAX_COMMENT_SIZE

# Field offsets within the EOCD record
EOCD_DISK_NUM_OFFSET = 4
EOCD_CD_DISK_OFFSET = 6
EOCD_CD_OFFSET_OFFSET = 16
EOCD_COMMENT_LEN_OFFSET = 20

# Field offset of "total number of disks" within the ZIP64 locator
ZIP64_LOCATOR_TOTAL_DISKS_OFFSET = 16

# Classic ZIP limits (32-bit); a central directory offset with this value
# means the real one is in the ZIP64 end of central directory record
MAX_CD_OFFSET = 0xFFFFFFFF  # 4 GiB - 1

# Value written into a locator whose disk count is zero
FIXED_TOTAL_DISKS = 1

# Per-file result codes
RESULT_ERROR = -1
RESULT_UNCHANGED = 0
RESULT_PATCHED = 1
