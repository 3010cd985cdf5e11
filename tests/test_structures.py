import struct

import pytest

from zip64fix.errors import ZipFormatError
from zip64fix.structures import locator_offset_for, parse_eocd, parse_zip64_locator


def test_parse_eocd(tail):
    data = tail(this_disk=0, start_disk=0, cd_offset=0xFFFFFFFF, comment=b"hello")
    eocd = parse_eocd(data, 20)

    assert eocd.offset == 20
    assert eocd.disk_num == 0
    assert eocd.cd_disk == 0
    assert eocd.cd_offset == 0xFFFFFFFF
    assert eocd.comment_len == 5
    assert eocd.comment == b"hello"
    assert eocd.end == len(data)
    assert eocd.is_zip64
    assert eocd.on_start_disk


def test_parse_eocd_classic(tail):
    eocd = parse_eocd(tail(this_disk=1, start_disk=0, cd_offset=1234, with_locator=False), 0)

    assert not eocd.is_zip64
    assert not eocd.on_start_disk


def test_parse_eocd_comment_past_end(tail):
    eocd = parse_eocd(tail(comment_len=500, with_locator=False), 0)

    assert eocd.comment_len == 500
    assert eocd.comment == b""


def test_parse_eocd_bad_signature():
    with pytest.raises(ZipFormatError, match="Invalid EOCD signature"):
        parse_eocd(b"\x00" * 22, 0)


def test_parse_zip64_locator():
    data = struct.pack("<IIQI", 0x07064B50, 3, 0x123456789, 0)
    locator = parse_zip64_locator(data, 0)

    assert locator.disk_num == 3
    assert locator.zip64_eocd_offset == 0x123456789
    assert locator.total_disks == 0
    assert locator.total_disks_offset == 16


def test_parse_zip64_locator_bad_signature():
    with pytest.raises(ZipFormatError, match="Invalid ZIP64 locator signature"):
        parse_zip64_locator(b"A" * 20, 0)


def test_locator_offset_for():
    assert locator_offset_for(20) == 0
