from typing import Optional

from .. import config
from ..exceptions import UnsupportedStatusError
from ..models import (
    Bucket,
    FileRecord,
    OutputIdentity,
    ResolvedDate,
    ValidationOutcome,
    ValidationStatus,
)

# (status, trusted) -> bucket. ERROR never gets here: corrupted files keep their name.
_BUCKETS = {
    (ValidationStatus.OK, True): Bucket.SAFE,
    (ValidationStatus.OK, False): Bucket.UNSAFE,
    (ValidationStatus.WARNING, True): Bucket.WARNINGS,
    (ValidationStatus.WARNING, False): Bucket.WARNINGS,
    (ValidationStatus.EXTENSION_MISMATCH, True): Bucket.CHANGED_EXTENSIONS,
    (ValidationStatus.EXTENSION_MISMATCH, False): Bucket.CHANGED_EXTENSIONS,
}


def bucket_for(status: ValidationStatus, trusted: bool) -> Bucket:
    try:
        return _BUCKETS[(status, trusted)]
    except KeyError:
        raise UnsupportedStatusError(f"Unsupported validation status = {status!r}") from None


def format_output_name(resolved: ResolvedDate, size: int, extension: str) -> str:
    """
    "<YYYY-MM-DD-HH-mm-ss>.<size>.<ext>". Two files agreeing on all three
    parts get the same name and are treated as duplicates.
    """
    stamp = resolved.timestamp.strftime(config.OUTPUT_NAME_FORMAT)
    return f"{stamp}.{size}.{extension}"


def final_extension(record: FileRecord, corrected: Optional[str]) -> str:
    return corrected if corrected else record.extension


def build_identity(record: FileRecord,
                   validation: ValidationOutcome,
                   resolved: ResolvedDate) -> OutputIdentity:
    bucket = bucket_for(validation.status, resolved.trusted)
    ext = final_extension(record, validation.corrected_extension)
    return OutputIdentity(
        file_name=format_output_name(resolved, record.size, ext),
        bucket=bucket,
    )


def corrupted_identity(record: FileRecord) -> OutputIdentity:
    """Corrupted files are placed as-is under their original name."""
    return OutputIdentity(file_name=record.name, bucket=Bucket.CORRUPTED)
