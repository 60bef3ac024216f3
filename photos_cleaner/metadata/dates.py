import re
from datetime import datetime
from typing import Dict, Optional

from .. import config
from ..models import FileRecord, ResolvedDate
from .extract import parse_tag_report
from .linking import read_photo_taken_time

# Leading "YYYY:MM:DD[ HH:MM[:SS]]"; exiftool may append sub-seconds or a UTC offset.
# IPTC DateCreated is date-only; missing time parts read as 00.
_EXIF_DATE_PREFIX = re.compile(r"^\s*(\d{4}):(\d{2}):(\d{2})(?: (\d{2}):(\d{2})(?::(\d{2}))?)?")


def parse_exif_date(value: Optional[str]) -> Optional[datetime]:
    """Parses an exiftool date string into a naive datetime, or None if invalid."""
    if not value:
        return None
    match = _EXIF_DATE_PREFIX.match(value)
    if not match:
        return None
    try:
        return datetime(*(int(part) if part else 0 for part in match.groups()))
    except ValueError:
        # e.g. "0000:00:00 00:00:00"
        return None


def filesystem_fallback(record: FileRecord) -> datetime:
    return min(record.create_time, record.modify_time)


class DateResolver:
    """
    Resolves the canonical capture time of a file.

    Order: embedded tags (TIME_FIELDS order) -> Takeout sidecar -> the earlier
    of the filesystem creation/modification times. The last step cannot fail.
    """

    def resolve(self, record: FileRecord, time_report: str) -> ResolvedDate:
        tags = parse_tag_report(time_report)

        embedded = self._from_tags(tags)
        if embedded is not None:
            return embedded

        taken = read_photo_taken_time(record.path)
        if taken is not None:
            return ResolvedDate(timestamp=taken, trusted=True, source="sidecar")

        return ResolvedDate(
            timestamp=filesystem_fallback(record),
            trusted=False,
            source="filesystem",
        )

    def _from_tags(self, tags: Dict[str, str]) -> Optional[ResolvedDate]:
        for tag in config.TIME_FIELDS:
            dt = parse_exif_date(tags.get(tag))
            if dt is not None:
                return ResolvedDate(timestamp=dt, trusted=True, source=tag)
        return None
