from zip64fix.validator import Zip64Outcome, validate
from zip64fix.window import FileWindow


def test_ready_to_patch(broken_zip64):
    with FileWindow(broken_zip64) as window:
        result = validate(window, 20)

    assert result.outcome is Zip64Outcome.READY_TO_PATCH
    assert result.total_disks_offset == 16
    assert result.total_disks == 0
    assert result.locator.offset == 0
    assert result.eocd.offset == 20


def test_ready_with_nonzero_disks(write_archive, tail):
    path = write_archive(tail(total_disks=1))

    with FileWindow(path) as window:
        result = validate(window, 20)

    assert result.outcome is Zip64Outcome.READY_TO_PATCH
    assert result.total_disks == 1


def test_not_start_disk(write_archive, tail):
    path = write_archive(tail(this_disk=1, start_disk=0))

    with FileWindow(path) as window:
        result = validate(window, 20)

    assert result.outcome is Zip64Outcome.NOT_START_DISK
    assert result.locator is None


def test_no_zip64(write_archive, tail):
    path = write_archive(tail(cd_offset=0x1000))

    with FileWindow(path) as window:
        result = validate(window, 20)

    assert result.outcome is Zip64Outcome.NO_ZIP64
    assert result.total_disks_offset is None


def test_signature_mismatch(write_archive, tail):
    path = write_archive(tail(locator_sig=0x12345678))

    with FileWindow(path) as window:
        result = validate(window, 20)

    assert result.outcome is Zip64Outcome.SIGNATURE_MISMATCH


def test_disk_check_comes_before_zip64_check(write_archive, tail):
    path = write_archive(tail(this_disk=2, start_disk=1, cd_offset=0, locator_sig=0))

    with FileWindow(path) as window:
        assert validate(window, 20).outcome is Zip64Outcome.NOT_START_DISK


def test_zip64_record_at_window_start(write_archive, tail):
    # No bytes in front of the record, so it cannot have a locator
    path = write_archive(tail(with_locator=False))

    with FileWindow(path) as window:
        result = validate(window, 0)

    assert result.outcome is Zip64Outcome.SIGNATURE_MISMATCH
    assert result.locator is None
