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

from __future__ import annotations

"""
Command-line interface for ZIP64FIX (``zip64fix``).

Example usages:

    # Fix archives in place
    python -m zip64fix backup1.zip backup2.zip

    # Report what would change, one line per file
    python -m zip64fix -n -v backup.zip

    # Show the end-of-archive records without changing anything
    python -m zip64fix --inspect backup.zip

Exit status is 0 if every file was fixed or needed no fix, 1 otherwise.
"""

import argparse
import errno
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .debug import describe_tail
from .errors import ZipError
from .fixer import FixResult, FixStatus, fixup_many

logger = logging.getLogger("zip64fix")

_STATUS_LABELS = {
    FixStatus.PATCHED: "Succeeded",
    FixStatus.WOULD_PATCH: "Would patch",
    FixStatus.UNNECESSARY: "Unnecessary",
    FixStatus.NOT_FOUND: "Failed",
    FixStatus.FAILED: "Failed",
}


def _print_error(message: str, exit_code: int = 1) -> None:
    """Print an error message to stderr and exit with the given code."""
    sys.stderr.write(f"zip64fix: {message}\n")
    sys.exit(exit_code)


def _configure_logging(verbose: int) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="zip64fix: %(message)s", stream=sys.stderr)


def _check_writable(path: Path) -> Optional[FixResult]:
    """Return a FAILED result if 'path' cannot be written, else None."""
    if os.access(path, os.W_OK):
        return None
    code = errno.EACCES if os.path.exists(path) else errno.ENOENT
    message = os.strerror(code)
    logger.warning("Failed to fix %s: %s", path, message)
    return FixResult(os.fspath(path), FixStatus.FAILED, message)


def _cmd_fix(paths: List[Path], dry_run: bool, verbose: int, jobs: int) -> int:
    """Fix each archive and return the number of files that failed."""
    results: dict[int, FixResult] = {}
    pending = []
    for index, path in enumerate(paths):
        rejected = None if dry_run else _check_writable(path)
        if rejected is not None:
            results[index] = rejected
        else:
            pending.append(index)

    for index, result in zip(pending, fixup_many([paths[i] for i in pending], dry_run=dry_run, jobs=jobs)):
        results[index] = result

    problems = 0
    for index, path in enumerate(paths):
        result = results[index]
        if not result.ok:
            problems += 1
        if verbose:
            print(f"Fixing {path}...{_STATUS_LABELS[result.status]}")
    sys.stdout.flush()
    return problems


def _cmd_inspect(paths: List[Path]) -> int:
    """Print the end-of-archive records of each file and return the failure count."""
    problems = 0
    for path in paths:
        try:
            print(describe_tail(path))
        except (OSError, ZipError) as e:
            message = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
            logger.warning("Failed to inspect %s: %s", path, message)
            problems += 1
        print()
    return problems


def _build_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="zip64fix",
        description="Fix ZIP64 archives whose locator records zero disks, "
        "so that Unix and macOS unzip tools accept them.",
    )
    parser.add_argument("paths", type=Path, nargs="+", metavar="zipfile", help="Archive to fix")
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Report what would be changed without writing to any file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Print a status line per file; repeat for debug logging",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=1,
        help="Number of files to process in parallel (default: 1)",
    )
    parser.add_argument(
        "--inspect",
        action="store_true",
        help="Describe the end-of-archive records instead of fixing them (read-only)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """
    Entry point for the ZIP64FIX CLI.

    This function is invoked when running:

        python -m zip64fix ...

    or, through the console script, via:

        zip64fix ...
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.jobs < 1:
        parser.error("--jobs must be at least 1")

    _configure_logging(args.verbose)

    try:
        if args.inspect:
            problems = _cmd_inspect(args.paths)
        else:
            problems = _cmd_fix(args.paths, args.dry_run, args.verbose, args.jobs)
    except KeyboardInterrupt:
        _print_error("Interrupted by user", exit_code=130)

    if problems:
        _print_error("Errors were encountered during fixup", exit_code=1)


if __name__ == "__main__":
    main()
