from zip64fix.patcher import patch
from zip64fix.window import FileWindow


def test_patch_zero(broken_zip64):
    before = broken_zip64.read_bytes()

    with FileWindow(broken_zip64) as window:
        assert patch(window, 16, 0) == 1

    after = broken_zip64.read_bytes()
    assert after[16:20] == b"\x01\x00\x00\x00"
    assert after[:16] == before[:16]
    assert after[17:] == before[17:]


def test_patch_dry_run(broken_zip64):
    before = broken_zip64.read_bytes()

    with FileWindow(broken_zip64) as window:
        assert patch(window, 16, 0, dry_run=True) == 1

    assert broken_zip64.read_bytes() == before


def test_patch_nonzero(write_archive, tail):
    path = write_archive(tail(total_disks=1))
    before = path.read_bytes()

    with FileWindow(path) as window:
        assert patch(window, 16, 1) == 0
        assert patch(window, 16, 1, dry_run=True) == 0

    assert path.read_bytes() == before
