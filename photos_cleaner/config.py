"""
Configuration constants for the photos cleaner.
"""

# --- File Type Definitions ---
IMAGE_EXTS = {'jpg', 'jpeg', 'png', 'webp', 'heic', 'heif'}
VIDEO_EXTS = {
    'mov', 'mpg', 'mpeg', 'm2v', 'wmv', 'asf', 'avi', 'divx', 'm4v',
    '3gp', '3g2', 'mp4', 'm2t', 'm2ts', 'mts', 'mkv',
}
MEDIA_EXTS = IMAGE_EXTS | VIDEO_EXTS

# Google Takeout writes "<media file>.json" next to every exported item
SIDECAR_SUFFIX = ".json"

# --- Output Layout ---
# Bucket value -> directory name under the output root
BUCKET_DIRS = {
    'safe': 'safe',
    'unsafe': 'unsafe',
    'corrupted': 'corrupted',
    'warnings': 'warnings',
    'duplicates': 'duplicates',
    'changed_extensions': 'changed-extensions',
}

# --- Metadata Parsing ---
# Read in this order when resolving the capture time; all four are rewritten.
TIME_FIELDS = [
    'CreateDate',
    'DateTimeOriginal',
    'DateCreated',
    'FileCreateDate',
]

EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"
OUTPUT_NAME_FORMAT = "%Y-%m-%d-%H-%M-%S"

# --- External Tool ---
EXIFTOOL_BIN = "exiftool"

# Validation status, errors and warnings as "Key: value" text
VALIDATE_ARGS = ["-validate", "-error", "-warning"]
# Every time-related tag, duplicates allowed, short tag names
TIME_REPORT_ARGS = ["-time:all", "-a", "-s"]
# In-place write, no "_original" backup left behind
WRITE_ARGS = ["-overwrite_original"]
