"""
Output directory bootstrap: one sub-directory per bucket under the output root.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

from .. import config
from ..exceptions import OutputDirectoryError
from ..models import Bucket


@dataclass(frozen=True)
class OutputLayout:
    root: Path

    def bucket_dir(self, bucket: Bucket) -> Path:
        return self.root / config.BUCKET_DIRS[bucket.value]

    def all_dirs(self) -> Dict[Bucket, Path]:
        return {bucket: self.bucket_dir(bucket) for bucket in Bucket}


def prepare_output_dirs(output_root: Path) -> OutputLayout:
    """
    Creates the output root and bucket directories.
    Refuses an existing root that already has content, so a run never mixes
    with a previous one.
    """
    if output_root.exists():
        if not output_root.is_dir():
            raise OutputDirectoryError(f"Output path is not a directory: {output_root}")
        if any(output_root.iterdir()):
            raise OutputDirectoryError(f"Output directory must be empty: {output_root}")

    layout = OutputLayout(output_root)
    for path in layout.all_dirs().values():
        path.mkdir(parents=True, exist_ok=True)

    logging.debug(f"Output layout ready under {output_root}")
    return layout
