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
ZIP64FIX - fix ZIP64 archives whose locator claims zero disks.

Large archives written by some Windows tools store 0 in the "total number
of disks" field of the ZIP64 End of Central Directory Locator, which makes
Unix and macOS unzip tools reject them. This library finds that field and
sets it to 1 in place, using only Python standard library modules.
"""

from .fixer import FixResult, FixStatus, fix_archive, fixup, fixup_many
from .window import FileWindow

__all__ = ["FileWindow", "FixResult", "FixStatus", "fix_archive", "fixup", "fixup_many"]

__version__ = "0.1.0"
