"""
Append-only record store for red tag submissions.

Holds submitted records in creation order and hands out point-in-time
snapshots to the analytics and export code. When a log path is configured,
each accepted submission is also appended to a JSONL records log.
"""

import sys
import threading
from dataclasses import replace
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple

from metrics.jsonl_utils import JSONLReader, JSONLWriter

from .schema import SubmissionRecord


class RecordStore:
    """Ordered, append-only collection of submission records."""

    def __init__(
        self,
        records: Iterable[SubmissionRecord] = (),
        log_path: Optional[Path] = None,
    ):
        """
        Initialize the store.

        Args:
            records: Existing records, in creation order
            log_path: Optional JSONL log that new submissions are appended to
        """
        self._lock = threading.Lock()
        self._records = []
        self._ids = set()
        for record in records:
            self._add(record)

        self.log_path = Path(log_path) if log_path else None
        self.writer = JSONLWriter(self.log_path) if self.log_path else None

    @classmethod
    def load(cls, log_path: Path, missing_ok: bool = False) -> "RecordStore":
        """
        Load a store from a JSONL records log.

        Args:
            log_path: Path to the records log
            missing_ok: If True, a missing log yields an empty store

        Returns:
            RecordStore that appends new submissions to the same log

        Raises:
            FileNotFoundError: If the log does not exist and missing_ok is False
        """
        log_path = Path(log_path)
        if not log_path.exists() and not missing_ok:
            raise FileNotFoundError(f"Records log not found: {log_path}")

        records = [SubmissionRecord.from_dict(entry) for entry in JSONLReader.read_log(log_path)]
        return cls(records, log_path=log_path)

    def _add(self, record: SubmissionRecord) -> SubmissionRecord:
        if not isinstance(record, SubmissionRecord):
            raise TypeError(f"Expected SubmissionRecord, got {type(record).__name__}")
        if record.id is not None and record.id in self._ids:
            print(f"Warning: Duplicate record id {record.id!r} in store", file=sys.stderr)
        self._records.append(record)
        self._ids.add(record.id)
        return record

    def append(self, record: SubmissionRecord) -> SubmissionRecord:
        """
        Append an already created record.

        Args:
            record: Record to append

        Returns:
            The appended record
        """
        with self._lock:
            self._add(record)
        if self.writer:
            self.writer.append(record.to_dict())
        return record

    def submit(
        self,
        data: Mapping[str, Any],
        attached_files: Iterable[str] = (),
    ) -> SubmissionRecord:
        """
        Validate submitted form values and store a new record.

        Ids are creation times in milliseconds; a colliding id is bumped to
        the next free value so ids stay unique within the store.

        Args:
            data: Submitted form values
            attached_files: Names of files attached to the form

        Returns:
            The stored record

        Raises:
            SubmissionError: If any required field is missing
        """
        record = SubmissionRecord.create(data, attached_files=attached_files)

        with self._lock:
            record_id = record.id
            while record_id in self._ids:
                record_id += 1
            if record_id != record.id:
                record = replace(record, id=record_id)
            self._add(record)

        if self.writer:
            self.writer.append(record.to_dict())
        return record

    def snapshot(self) -> Tuple[SubmissionRecord, ...]:
        """Point-in-time, read-only copy of all records in creation order."""
        with self._lock:
            return tuple(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[SubmissionRecord]:
        return iter(self.snapshot())
