import re
from typing import Optional

from ..models import ValidationOutcome, ValidationStatus
from .extract import iter_report_lines

WRONG_EXTENSION_PREFIX = "File has wrong extension"
MINOR_PREFIX = "[minor]"

# "File has wrong extension, should be MOV, not mp4"
_EXTENSION_HINT = re.compile(r"be (\w+), not (\w+)")


def classify_validation(report: str) -> ValidationOutcome:
    """
    Turns an exiftool validation report into a ValidationOutcome.

    Every line proposes a status and the last proposal wins; there is no
    severity ranking, so a trailing "[minor]" line can mask an earlier
    warning. A `Validate` summary line only ever proposes OK.
    """
    status = ValidationStatus.OK
    corrected_extension: Optional[str] = None

    for key, value in iter_report_lines(report):
        if key == "Validate":
            if value.lower() == "ok" or "all minor" in value:
                status = ValidationStatus.OK
        elif "error" in key.lower() or "error" in value.lower():
            status = ValidationStatus.ERROR
        elif value.startswith(WRONG_EXTENSION_PREFIX):
            hints = _EXTENSION_HINT.findall(value)
            if hints:
                corrected_extension = hints[-1][0].lower()
            status = ValidationStatus.EXTENSION_MISMATCH
        elif value.startswith(MINOR_PREFIX):
            status = ValidationStatus.OK
        else:
            status = ValidationStatus.WARNING

    return ValidationOutcome(
        status=status,
        corrected_extension=corrected_extension,
        raw_report=report,
    )
