import zipfile

import pytest

from zip64fix import __version__
from zip64fix.__main__ import main


def test_fix(broken_zip64, capsys):
    main([str(broken_zip64)])

    assert broken_zip64.read_bytes()[16] == 1
    assert capsys.readouterr().out == ""


def test_verbose(broken_zip64, write_archive, tail, capsys):
    unchanged = write_archive(tail(total_disks=1), "ok.zip")

    main(["-v", str(broken_zip64), str(unchanged)])

    out = capsys.readouterr().out.splitlines()
    assert out == [
        f"Fixing {broken_zip64}...Succeeded",
        f"Fixing {unchanged}...Unnecessary",
    ]


def test_empty_archive(tmp_path, capsys):
    path = tmp_path / "empty.zip"
    with zipfile.ZipFile(path, "w"):
        pass

    main(["-v", str(path)])

    assert capsys.readouterr().out.strip() == f"Fixing {path}...Unnecessary"


def test_dry_run(broken_zip64, capsys):
    main(["--dry-run", "--verbose", str(broken_zip64)])

    assert capsys.readouterr().out.strip() == f"Fixing {broken_zip64}...Would patch"
    assert broken_zip64.read_bytes()[16] == 0


def test_failure_sets_exit_status(broken_zip64, write_archive, capsys):
    tiny = write_archive(b"tiny", "tiny.zip")

    with pytest.raises(SystemExit) as excinfo:
        main(["-v", str(tiny), str(broken_zip64)])

    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert f"Fixing {tiny}...Failed" in captured.out
    assert f"Fixing {broken_zip64}...Succeeded" in captured.out
    assert "Errors were encountered during fixup" in captured.err
    assert broken_zip64.read_bytes()[16] == 1


def test_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["-v", str(tmp_path / "missing.zip")])

    assert excinfo.value.code == 1
    assert "...Failed" in capsys.readouterr().out


def test_jobs(write_archive, tail, capsys):
    paths = [str(write_archive(tail(), f"{i}.zip")) for i in range(4)]

    main(["-v", "-j", "2"] + paths)

    out = capsys.readouterr().out.splitlines()
    assert out == [f"Fixing {p}...Succeeded" for p in paths]


def test_bad_jobs(broken_zip64):
    with pytest.raises(SystemExit) as excinfo:
        main(["-j", "0", str(broken_zip64)])

    assert excinfo.value.code == 2


def test_no_paths():
    with pytest.raises(SystemExit) as excinfo:
        main([])

    assert excinfo.value.code == 2


def test_inspect(broken_zip64, capsys):
    main(["--inspect", str(broken_zip64)])

    assert "Total disks is 0: needs fixing" in capsys.readouterr().out
    assert broken_zip64.read_bytes()[16] == 0


def test_inspect_failure(write_archive):
    with pytest.raises(SystemExit) as excinfo:
        main(["--inspect", str(write_archive(b"x"))])

    assert excinfo.value.code == 1


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])

    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out
