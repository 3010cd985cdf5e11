import struct

import pytest

EOCD_SIG = 0x06054B50
LOCATOR_SIG = 0x07064B50


def build_tail(
    total_disks=0,
    this_disk=0,
    start_disk=0,
    cd_offset=0xFFFFFFFF,
    comment=b"",
    comment_len=None,
    locator_sig=LOCATOR_SIG,
    with_locator=True,
    prefix=b"",
):
    """Return archive bytes ending in [ZIP64 locator] + EOCD record + comment."""
    locator = struct.pack("<IIQI", locator_sig, 0, 0, total_disks)
    eocd = struct.pack(
        "<IHHHHIIH",
        EOCD_SIG,
        this_disk,
        start_disk,
        0,
        0,
        0,
        cd_offset,
        len(comment) if comment_len is None else comment_len,
    )
    return prefix + (locator if with_locator else b"") + eocd + comment


@pytest.fixture
def tail():
    return build_tail


@pytest.fixture
def write_archive(tmp_path):
    def _write(data, name="archive.zip"):
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def broken_zip64(write_archive):
    """The smallest archive with the zero-disk defect: locator + EOCD, 42 bytes."""
    return write_archive(build_tail(total_disks=0))
