import re

import pytest

from zip64fix.debug import describe_tail, hex_dump
from zip64fix.errors import ZipTooSmallError


def test_hex_dump():
    dump = hex_dump(b"PK\x06\x07" + b"\x00" * 16, offset=0x10)
    lines = dump.splitlines()

    assert len(lines) == 2
    assert lines[0].startswith("00000010  50 4B 06 07 00")
    assert lines[0].endswith("PK" + "." * 14)
    assert lines[1].startswith("00000020  00 00 00 00")


def test_hex_dump_length():
    assert hex_dump(b"A" * 40, length=4) == "00000000  41 41 41 41" + " " * 39 + "AAAA"


def test_describe_broken_zip64(broken_zip64):
    before = broken_zip64.read_bytes()
    text = describe_tail(broken_zip64)

    assert "End of Central Directory: 0x00000014" in text
    assert "ZIP64 Locator: 0x00000000" in text
    assert "Total disks is 0: needs fixing" in text
    assert broken_zip64.read_bytes() == before


def test_describe_classic(write_archive, tail):
    text = describe_tail(write_archive(tail(cd_offset=0x100)))

    assert "Not a ZIP64 archive" in text
    assert "ZIP64 Locator" not in text


def test_describe_skips_false_candidate(write_archive, tail):
    path = write_archive(tail(total_disks=1, comment=tail(with_locator=False)))
    text = describe_tail(path)

    assert "Skipped EOCD candidate at 0x0000002A" in text
    assert re.search(r"Total disks:\s+1$", text, re.MULTILINE)
    assert "needs fixing" not in text


def test_describe_not_found(write_archive):
    assert "No End of Central Directory record found" in describe_tail(write_archive(b"x" * 100))


def test_describe_too_small(write_archive):
    with pytest.raises(ZipTooSmallError):
        describe_tail(write_archive(b"x"))
