import logging
from pathlib import Path

from .. import config
from ..models import ResolvedDate, WriteResult
from .extract import MetadataTool


def format_exif_date(resolved: ResolvedDate) -> str:
    return resolved.timestamp.strftime(config.EXIF_DATE_FORMAT)


class MetadataWriter:
    """
    Stamps the canonical capture time onto a placed copy.

    Only ever pointed at files inside the output layout; the source library
    is never written to.
    """

    def __init__(self, tool: MetadataTool, ignore_failures: bool = False):
        self.tool = tool
        self.ignore_failures = ignore_failures

    def commit(self, placed_path: Path, resolved: ResolvedDate) -> WriteResult:
        value = format_exif_date(resolved)
        fields = {tag: value for tag in config.TIME_FIELDS}

        result = self.tool.write_time_fields(placed_path, fields)

        if result.ok:
            logging.debug(f"Set capture time {value} on {placed_path}")
        elif self.ignore_failures:
            logging.debug(f"Ignoring failed metadata write on {placed_path}: {result.output}")
        else:
            logging.warning(
                f"Metadata write failed on {placed_path} "
                f"(exit {result.returncode}): {result.output}"
            )
        return result
