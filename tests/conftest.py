import os
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from photos_cleaner.metadata.extract import MetadataTool
from photos_cleaner.models import WriteResult
from photos_cleaner.organization.layout import prepare_output_dirs
from photos_cleaner.scanning.filesystem import DiskScanner


class FakeTool(MetadataTool):
    """
    Scripted stand-in for exiftool. Reports are looked up by file name
    (source files and placed copies alike), falling back to the defaults.
    """

    def __init__(self, validation: str = "Validate: OK", time_report: str = "",
                 write_ok: bool = True):
        self.default_validation = validation
        self.default_time_report = time_report
        self.validation_reports: Dict[str, str] = {}
        self.time_reports: Dict[str, str] = {}
        self.write_ok = write_ok

        self.validate_calls: List[Path] = []
        self.time_calls: List[Path] = []
        self.writes: List[Tuple[Path, Dict[str, str]]] = []

    def validate(self, path: Path) -> str:
        self.validate_calls.append(path)
        return self.validation_reports.get(path.name, self.default_validation)

    def read_time_fields(self, path: Path) -> str:
        self.time_calls.append(path)
        return self.time_reports.get(path.name, self.default_time_report)

    def write_time_fields(self, path: Path, fields: Dict[str, str]) -> WriteResult:
        self.writes.append((path, dict(fields)))
        if self.write_ok:
            return WriteResult(ok=True, returncode=0, output="1 image files updated")
        return WriteResult(ok=False, returncode=1, output="Error: Not a valid HEIC")


@pytest.fixture
def fake_tool():
    return FakeTool()


@pytest.fixture
def scan_dir(tmp_path: Path) -> Path:
    d = tmp_path / "takeout"
    d.mkdir()
    return d


@pytest.fixture
def layout(tmp_path: Path):
    """Bootstrapped output layout under tmp_path/out."""
    return prepare_output_dirs(tmp_path / "out")


@pytest.fixture
def make_media(scan_dir: Path):
    """
    Factory writing a media file of `size` bytes under the scan dir and
    returning its FileRecord. `mtime` (a datetime) backdates the file.
    """
    scanner = DiskScanner()

    def _make(name: str, size: int = 1024, content: Optional[bytes] = None,
              mtime: Optional[datetime] = None, subdir: str = ""):
        folder = scan_dir / subdir if subdir else scan_dir
        folder.mkdir(parents=True, exist_ok=True)
        path = folder / name
        path.write_bytes(content if content is not None else os.urandom(size))
        if mtime is not None:
            ts = mtime.timestamp()
            os.utime(path, (ts, ts))
        return scanner.build_record(path)

    return _make
