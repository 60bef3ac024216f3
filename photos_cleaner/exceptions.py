"""
Custom exception hierarchy for the photos cleaner.

Fatal conditions stop the whole run; FileOperationError is the only
per-file failure and the pipeline moves on to the next file after it.
"""


class PhotosCleanerError(Exception):
    """Base exception for all photos cleaner errors."""
    pass


class ScanDirectoryError(PhotosCleanerError):
    """Raised when the directory to scan does not exist."""
    pass


class OutputDirectoryError(PhotosCleanerError):
    """Raised when the output root cannot be used (non-empty or not a directory)."""
    pass


class UnsupportedStatusError(PhotosCleanerError):
    """Raised when a validation status has no output bucket."""
    pass


class ExternalToolError(PhotosCleanerError):
    """Raised when the exiftool executable is not available."""
    pass


class FileOperationError(PhotosCleanerError):
    """Raised when copying a file into the output layout fails."""
    pass
