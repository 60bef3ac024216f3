#!/usr/bin/env python3
"""
Show what the cleaner sees for a single file: the raw exiftool reports and
the status, capture time and output name derived from them.

Usage:
  python tools/inspect_exiftool.py <media_file>

Example:
  python tools/inspect_exiftool.py "Takeout/Google Photos/2019/IMG_0001.HEIC"
"""

import sys
from pathlib import Path

from photos_cleaner import config
from photos_cleaner.exceptions import PhotosCleanerError
from photos_cleaner.metadata.dates import DateResolver
from photos_cleaner.metadata.extract import ExifTool
from photos_cleaner.metadata.linking import sidecar_path_for
from photos_cleaner.metadata.validation import classify_validation
from photos_cleaner.models import ValidationStatus
from photos_cleaner.organization.rules import build_identity
from photos_cleaner.scanning.filesystem import DiskScanner


def inspect_file(media_path):
    path = Path(media_path)
    if not path.is_file():
        print(f"Error: File not found: {media_path}")
        sys.exit(1)

    tool = ExifTool()
    try:
        tool.ensure_available()
    except PhotosCleanerError as e:
        print(f"Error: {e}")
        sys.exit(1)

    record = DiskScanner().build_record(path)
    print(f"Inspecting: {record.name} ({record.size} bytes)\n")

    print("=" * 70)
    print("VALIDATION REPORT")
    print("=" * 70)
    report = tool.validate(record.path)
    print(report.rstrip() or "  (empty)")

    validation = classify_validation(report)
    print(f"\n  -> status: {validation.status.value}")
    if validation.corrected_extension:
        print(f"  -> corrected extension: {validation.corrected_extension}")

    if validation.status == ValidationStatus.ERROR:
        print(f"\n  -> would be copied to corrupted/{record.name}")
        return

    print("\n" + "=" * 70)
    print("TIME REPORT")
    print("=" * 70)
    time_report = tool.read_time_fields(record.path)
    print(time_report.rstrip() or "  (empty)")

    sidecar = sidecar_path_for(record.path)
    print(f"\n  sidecar: {sidecar} ({'present' if sidecar.is_file() else 'absent'})")

    resolved = DateResolver().resolve(record, time_report)
    identity = build_identity(record, validation, resolved)
    print(f"  -> capture time: {resolved.timestamp} from {resolved.source} (trusted={resolved.trusted})")
    print(f"  -> would be copied to {config.BUCKET_DIRS[identity.bucket.value]}/{identity.file_name}")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python inspect_exiftool.py <media_file>")
        sys.exit(1)
    inspect_file(sys.argv[1])
