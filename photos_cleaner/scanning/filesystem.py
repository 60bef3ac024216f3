import os
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional, Set

from .. import config
from ..exceptions import ScanDirectoryError
from ..models import FileRecord


def media_extension(path: Path) -> str:
    return path.suffix.lower().lstrip(".")


class DiskScanner:
    def __init__(self, extensions: Optional[Set[str]] = None):
        self.extensions = extensions if extensions is not None else config.MEDIA_EXTS

    def discover(self, root: Path) -> List[Path]:
        """
        Returns every media file under root in a stable, depth-first order.
        """
        if not root.is_dir():
            raise ScanDirectoryError(f"The directory to scan must exist: {root}")

        files = [p for p in self._iter_files(root) if media_extension(p) in self.extensions]
        logging.info(f"Found {len(files)} media files under {root}")
        return files

    def build_record(self, path: Path) -> FileRecord:
        """Stats the file once and captures everything the pipeline needs."""
        st = path.stat()
        created = getattr(st, "st_birthtime", None)
        if created is None:
            created = st.st_ctime

        return FileRecord(
            path=path.absolute(),
            size=st.st_size,
            create_time=self._to_datetime(created),
            modify_time=self._to_datetime(st.st_mtime),
            extension=media_extension(path),
        )

    def _iter_files(self, root: Path) -> Iterator[Path]:
        """Depth-first walker using os.scandir for speed."""
        stack = [root]
        while stack:
            current = stack.pop()

            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except OSError:
                logging.warning(f"Permission denied: {current}")
                continue

            # Sort for stable traversal order
            entries.sort(key=lambda e: e.name.lower())

            dirs = []
            files = []
            for e in entries:
                # Hidden entries are skipped, as a shell glob would
                if e.name.startswith("."):
                    continue
                if e.is_dir(follow_symlinks=False):
                    dirs.append(Path(e.path))
                # Symlinked files are media too; symlinked dirs are not descended
                elif e.is_file():
                    files.append(Path(e.path))

            # Push dirs to stack (reversed so we process A before Z)
            for d in reversed(dirs):
                stack.append(d)

            for f in files:
                yield f

    @staticmethod
    def _to_datetime(ts: float) -> datetime:
        # Output names and exif dates have second precision
        return datetime.fromtimestamp(int(ts))
