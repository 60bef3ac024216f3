import shutil
import logging
from pathlib import Path
from typing import Dict, Optional

from ..exceptions import FileOperationError
from ..models import Bucket, FileRecord, OutputIdentity, PlacementResult
from .layout import OutputLayout


class PlacementEngine:
    """
    Copies files into their bucket, rerouting name collisions to
    duplicates/<name>/<file index>_<name>.

    Bucket contents are only ever added to; an existing target is never
    overwritten and sources are never moved.
    """

    def __init__(self, layout: OutputLayout, duplicate_counts: Optional[Dict[str, int]] = None):
        self.layout = layout
        # Output file name -> duplicates seen so far in this run
        self.duplicate_counts: Dict[str, int] = duplicate_counts if duplicate_counts is not None else {}

    def target_path(self, identity: OutputIdentity) -> Path:
        return self.layout.bucket_dir(identity.bucket) / identity.file_name

    def place(self, record: FileRecord, identity: OutputIdentity, file_index: int) -> PlacementResult:
        """
        Args:
            file_index: zero-based position of the file in the run, used as the
                        prefix of rerouted duplicates.
        """
        target = self.target_path(identity)

        if not target.exists():
            self._copy(record.path, target)
            return PlacementResult(final_path=target, was_duplicate=False)

        return self._place_duplicate(record, identity.file_name, file_index)

    def _place_duplicate(self, record: FileRecord, file_name: str, file_index: int) -> PlacementResult:
        logging.warning(f"Duplicate {record.path}")

        dup_dir = self.layout.bucket_dir(Bucket.DUPLICATES) / file_name
        dest = dup_dir / f"{file_index}_{file_name}"

        count = self.duplicate_counts.get(file_name, 0) + 1
        self.duplicate_counts[file_name] = count

        self._copy(record.path, dest)
        return PlacementResult(final_path=dest, was_duplicate=True, duplicate_index=count)

    def _copy(self, src: Path, dest: Path):
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(str(src), str(dest))
        except OSError as e:
            raise FileOperationError(f"Failed to copy {src} -> {dest}: {e}") from e
        logging.debug(f"Copied {src} -> {dest}")
