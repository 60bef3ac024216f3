import logging

import pytest

from conftest import FakeTool
import photos_cleaner.main as main_module
from photos_cleaner.exceptions import ExternalToolError


@pytest.fixture(autouse=True)
def restore_root_logging():
    """main() reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    level = root.level
    yield
    for h in list(root.handlers):
        if type(h) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


class AvailableFakeTool(FakeTool):
    def __init__(self, executable):
        super().__init__(time_report="CreateDate : 2021:05:01 10:00:00")
        self.executable = executable

    def ensure_available(self):
        return "/usr/bin/exiftool"


class MissingTool(FakeTool):
    def __init__(self, executable):
        super().__init__()

    def ensure_available(self):
        raise ExternalToolError("exiftool not found (exiftool)")


def test_parse_args_defaults(tmp_path):
    args = main_module.parse_args([str(tmp_path / "in"), str(tmp_path / "out")])

    assert args.scan_dir == tmp_path / "in"
    assert args.output_dir == tmp_path / "out"
    assert args.exiftool == "exiftool"
    assert not args.ignore_write_errors
    assert not args.no_progress


def test_missing_scan_dir_exits(tmp_path, monkeypatch):
    monkeypatch.setattr(main_module, "ExifTool", AvailableFakeTool)

    with pytest.raises(SystemExit) as exc:
        main_module.main([str(tmp_path / "missing"), str(tmp_path / "out")])

    assert exc.value.code == 1
    assert not (tmp_path / "out").exists()


def test_non_empty_output_exits(tmp_path, monkeypatch):
    monkeypatch.setattr(main_module, "ExifTool", AvailableFakeTool)
    (tmp_path / "in").mkdir()
    out = tmp_path / "out"
    out.mkdir()
    (out / "old.jpg").write_bytes(b"x")

    with pytest.raises(SystemExit) as exc:
        main_module.main([str(tmp_path / "in"), str(out)])

    assert exc.value.code == 1
    assert [p.name for p in out.iterdir()] == ["old.jpg"]


def test_missing_exiftool_exits_before_bootstrap(tmp_path, monkeypatch):
    monkeypatch.setattr(main_module, "ExifTool", MissingTool)
    (tmp_path / "in").mkdir()

    with pytest.raises(SystemExit) as exc:
        main_module.main([str(tmp_path / "in"), str(tmp_path / "out")])

    assert exc.value.code == 1
    assert not (tmp_path / "out").exists()


def test_full_run(tmp_path, monkeypatch):
    monkeypatch.setattr(main_module, "ExifTool", AvailableFakeTool)
    scan = tmp_path / "in"
    (scan / "Google Photos").mkdir(parents=True)
    (scan / "Google Photos" / "IMG_01.heic").write_bytes(b"\x00" * 1024)
    out = tmp_path / "out"

    main_module.main([str(scan), str(out), "--no-progress"])

    assert (out / "safe" / "2021-05-01-10-00-00.1024.heic").exists()
    log_text = (out / "cleaner.log").read_text(encoding="utf-8")
    assert "ok 1/1 [IMG_01.heic]" in log_text
