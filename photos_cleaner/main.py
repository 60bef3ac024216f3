import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import config
from .core import PhotosCleanerApp
from .exceptions import OutputDirectoryError, PhotosCleanerError, ScanDirectoryError
from .metadata.extract import ExifTool
from .organization.layout import prepare_output_dirs

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_FILE_NAME = "cleaner.log"

USAGE = """Usage:

photos-cleaner ./dir-to-scan ./output-dir
"""


def setup_logging(verbose: bool):
    """Console logging; the file handler is attached once the output root exists."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )


def attach_log_file(output_root: Path) -> Path:
    log_file = output_root / LOG_FILE_NAME
    handler = logging.FileHandler(log_file, encoding='utf-8')
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(handler)
    return log_file


def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(
        prog="photos-cleaner",
        description="Sort an exported photo library into safe/unsafe/corrupted/... buckets by verified capture date",
    )

    p.add_argument("scan_dir", type=Path, help="Directory to scan recursively")
    p.add_argument("output_dir", type=Path, help="Output root (must be absent or empty)")

    p.add_argument("--exiftool", default=config.EXIFTOOL_BIN, help="exiftool executable (default: exiftool on PATH)")
    p.add_argument("--ignore-write-errors", action="store_true",
                   help="Do not report failed capture-time writes on placed copies")
    p.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    setup_logging(args.verbose)

    scan_root = args.scan_dir.resolve()
    output_root = args.output_dir.resolve()

    try:
        if not scan_root.is_dir():
            raise ScanDirectoryError(f"The directory to scan must exist: {scan_root}")

        tool = ExifTool(args.exiftool)
        logging.debug(f"Using exiftool at {tool.ensure_available()}")

        layout = prepare_output_dirs(output_root)
        attach_log_file(output_root)

        logging.info("=== Photos Cleaner Started ===")
        logging.info(f"Source: {scan_root}")
        logging.info(f"Output: {output_root}")

        app = PhotosCleanerApp(
            tool,
            layout,
            ignore_write_errors=args.ignore_write_errors,
            show_progress=not args.no_progress,
        )
        app.clean_directory(scan_root)
    except (ScanDirectoryError, OutputDirectoryError) as e:
        logging.error(f"{e}\n\n{USAGE}")
        sys.exit(1)
    except PhotosCleanerError as e:
        logging.error(f"Fatal: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        sys.exit(1)

    logging.info("=== Photos Cleaner Finished ===")


if __name__ == "__main__":
    main()
