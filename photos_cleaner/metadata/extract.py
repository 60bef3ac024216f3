import abc
import logging
import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

from .. import config
from ..exceptions import ExternalToolError
from ..models import WriteResult


def parse_tag_report(report: str) -> Dict[str, str]:
    """
    Parses exiftool's "Key : value" text output into a dict.

    Values may themselves contain ':' (dates, times), so only the first
    separator splits. Repeated keys keep the last value seen.
    """
    tags: Dict[str, str] = {}
    for key, value in iter_report_lines(report):
        tags[key] = value
    return tags


def iter_report_lines(report: str):
    """Yields (key, value) pairs for every non-blank line of a report."""
    for line in report.splitlines():
        if not line.strip():
            continue
        key, _, value = line.partition(":")
        yield key.strip(), value.strip()


class MetadataTool(abc.ABC):
    """
    Capability the pipeline needs from an external metadata program.

    Implementations never raise for a broken file: a report that cannot be
    produced comes back as empty text.
    """

    @abc.abstractmethod
    def validate(self, path: Path) -> str:
        """Returns the raw validation report (one 'Key: value' per diagnostic)."""

    @abc.abstractmethod
    def read_time_fields(self, path: Path) -> str:
        """Returns the raw time-metadata report (one 'Tag: value' per time tag)."""

    @abc.abstractmethod
    def write_time_fields(self, path: Path, fields: Dict[str, str]) -> WriteResult:
        """Overwrites the given tags in place on `path`."""


class ExifTool(MetadataTool):
    """
    Wraps the 'exiftool' command line utility.
    Must be installed and on the system PATH (or given explicitly).
    """

    def __init__(self, executable: str = config.EXIFTOOL_BIN):
        self.executable = executable

    def ensure_available(self) -> str:
        """Returns the resolved executable path or raises ExternalToolError."""
        resolved = shutil.which(self.executable)
        if resolved is None:
            raise ExternalToolError(
                f"exiftool not found ({self.executable}). "
                "Install it with: sudo apt install libimage-exiftool-perl"
            )
        return resolved

    def validate(self, path: Path) -> str:
        return self._run([*config.VALIDATE_ARGS, str(path)]) or ""

    def read_time_fields(self, path: Path) -> str:
        return self._run([*config.TIME_REPORT_ARGS, str(path)]) or ""

    def write_time_fields(self, path: Path, fields: Dict[str, str]) -> WriteResult:
        assignments = [f"-{tag}={value}" for tag, value in fields.items()]
        cmd = [self.executable, *config.WRITE_ARGS, *assignments, str(path)]
        try:
            proc = subprocess.run(cmd, capture_output=True)
        except OSError as e:
            return WriteResult(ok=False, returncode=None, output=str(e))

        output = self._decode(proc.stdout) + self._decode(proc.stderr)
        return WriteResult(ok=proc.returncode == 0, returncode=proc.returncode, output=output.strip())

    # --- Internal Helpers ---

    def _run(self, args: List[str]) -> Optional[str]:
        """
        Runs exiftool and returns stdout whatever the exit status.
        exiftool still prints diagnostics when it exits non-zero on a damaged file.
        """
        cmd = [self.executable, *args]
        try:
            proc = subprocess.run(cmd, capture_output=True)
        except OSError as e:
            logging.warning(f"Could not run {self.executable}: {e}")
            return None

        if proc.returncode != 0:
            logging.debug(f"exiftool exited {proc.returncode} for {args[-1]}: {self._decode(proc.stderr).strip()}")
        return self._decode(proc.stdout)

    @staticmethod
    def _decode(data: Optional[bytes]) -> str:
        if not data:
            return ""
        return data.decode("utf-8", errors="replace")
