import enum
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional


class ValidationStatus(enum.Enum):
    """Integrity verdict derived from the validation report."""
    OK = "ok"
    ERROR = "error"
    WARNING = "warning"
    EXTENSION_MISMATCH = "change extensions"


class Bucket(enum.Enum):
    SAFE = "safe"
    UNSAFE = "unsafe"
    CORRUPTED = "corrupted"
    WARNINGS = "warnings"
    CHANGED_EXTENSIONS = "changed_extensions"
    DUPLICATES = "duplicates"


@dataclass(frozen=True)
class FileRecord:
    """
    A discovered media file. Filesystem facts are read once at construction.
    """
    path: Path
    size: int
    create_time: datetime
    modify_time: datetime
    extension: str          # lowercased, no leading dot

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class ValidationOutcome:
    status: ValidationStatus
    corrected_extension: Optional[str] = None
    raw_report: str = ""


@dataclass(frozen=True)
class ResolvedDate:
    """
    Canonical capture time. `trusted` is False only for the filesystem fallback.
    """
    timestamp: datetime
    trusted: bool
    source: str = ""        # tag name, "sidecar" or "filesystem"


@dataclass(frozen=True)
class OutputIdentity:
    file_name: str
    bucket: Bucket


@dataclass(frozen=True)
class PlacementResult:
    final_path: Path
    was_duplicate: bool
    duplicate_index: Optional[int] = None


@dataclass(frozen=True)
class WriteResult:
    """Outcome of an in-place metadata write on a placed copy."""
    ok: bool
    returncode: Optional[int] = None
    output: str = ""


@dataclass
class FileOutcome:
    """
    Everything the pipeline learned and did for one input file.
    """
    record: FileRecord
    index: int              # 1-based position in the run
    total: int
    validation: ValidationOutcome
    resolved: Optional[ResolvedDate] = None
    identity: Optional[OutputIdentity] = None
    placement: Optional[PlacementResult] = None
    write_result: Optional[WriteResult] = None
    error: Optional[str] = None

    @property
    def status(self) -> ValidationStatus:
        return self.validation.status

    @property
    def write_failed(self) -> bool:
        return self.write_result is not None and not self.write_result.ok

    @property
    def bucket(self) -> Optional[Bucket]:
        if self.placement is None:
            return None
        if self.placement.was_duplicate:
            return Bucket.DUPLICATES
        if self.identity is not None:
            return self.identity.bucket
        return Bucket.CORRUPTED

    def summary_line(self) -> str:
        return f"{self.status.value} {self.index}/{self.total} [{self.record.name}]"
