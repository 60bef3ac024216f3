import logging
from collections import Counter
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from .exceptions import FileOperationError
from .metadata.dates import DateResolver
from .metadata.extract import MetadataTool
from .metadata.validation import classify_validation
from .metadata.writer import MetadataWriter
from .models import FileOutcome, FileRecord, ValidationStatus
from .organization.layout import OutputLayout
from .organization.mover import PlacementEngine
from .organization.rules import build_identity, corrupted_identity
from .scanning.filesystem import DiskScanner


class PhotosCleanerApp:
    def __init__(self,
                 tool: MetadataTool,
                 layout: OutputLayout,
                 ignore_write_errors: bool = False,
                 show_progress: bool = False,
                 duplicate_counts: Optional[Dict[str, int]] = None):
        self.tool = tool
        self.layout = layout
        self.show_progress = show_progress
        self.resolver = DateResolver()
        self.placement = PlacementEngine(layout, duplicate_counts)
        self.writer = MetadataWriter(tool, ignore_failures=ignore_write_errors)

    def clean_directory(self, scan_root: Path) -> List[FileOutcome]:
        """Discovers media under scan_root and cleans it."""
        scanner = DiskScanner()
        paths = scanner.discover(scan_root)
        return self.clean([scanner.build_record(p) for p in paths])

    def clean(self, records: Sequence[FileRecord]) -> List[FileOutcome]:
        """
        Processes files strictly one after another, in the given order.

        File N+1 is not started before file N is placed and stamped, which
        keeps duplicate prefixes deterministic and the log in discovery order.
        """
        total = len(records)
        outcomes: List[FileOutcome] = []

        with logging_redirect_tqdm():
            progress = tqdm(records, total=total, desc="Cleaning", unit="file",
                            disable=not self.show_progress)
            for file_index, record in enumerate(progress):
                outcomes.append(self.process_file(record, file_index, total))

        self._log_summary(outcomes)
        return outcomes

    def process_file(self, record: FileRecord, file_index: int, total: int) -> FileOutcome:
        """
        Runs probe -> classify -> resolve -> identity -> place -> write for one file.

        Args:
            file_index: zero-based position in the run.
        """
        validation = classify_validation(self.tool.validate(record.path))
        outcome = FileOutcome(record=record, index=file_index + 1, total=total, validation=validation)

        try:
            if validation.status == ValidationStatus.ERROR:
                outcome.identity = corrupted_identity(record)
                outcome.placement = self.placement.place(record, outcome.identity, file_index)
            else:
                outcome.resolved = self.resolver.resolve(record, self.tool.read_time_fields(record.path))
                outcome.identity = build_identity(record, validation, outcome.resolved)
                outcome.placement = self.placement.place(record, outcome.identity, file_index)

                if not outcome.placement.was_duplicate:
                    outcome.write_result = self.writer.commit(outcome.placement.final_path, outcome.resolved)
        except FileOperationError as e:
            logging.error(str(e))
            outcome.error = str(e)

        self._report(outcome)
        return outcome

    def _report(self, outcome: FileOutcome):
        if outcome.status in (ValidationStatus.ERROR, ValidationStatus.WARNING):
            logging.warning(outcome.validation.raw_report.rstrip())
        logging.info(outcome.summary_line())

    def _log_summary(self, outcomes: List[FileOutcome]):
        buckets = Counter(o.bucket.value for o in outcomes if o.bucket is not None)
        failed = sum(1 for o in outcomes if o.error)
        write_failures = sum(1 for o in outcomes if o.write_failed)

        logging.info(f"Processed {len(outcomes)} files.")
        for name, count in sorted(buckets.items()):
            logging.info(f"  {name}: {count}")
        if failed:
            logging.info(f"  failed to copy: {failed}")
        if write_failures:
            logging.info(f"  metadata write failures: {write_failures}")
