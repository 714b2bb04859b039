"""
JSONL utilities for reading and writing the red tag records log.

Provides JSONL reading with per-line error handling and appends guarded
by file locking.
"""

import json
import sys
from pathlib import Path
from typing import Callable, List, Optional
import fcntl


class JSONLReader:
    """Read and filter JSONL logs with error handling."""

    @staticmethod
    def read_log(
        path: Path,
        filter_fn: Optional[Callable[[dict], bool]] = None
    ) -> List[dict]:
        """
        Read JSONL with optional filtering.

        Blank lines are ignored. Malformed lines and lines that are not JSON
        objects are skipped with a warning.

        Args:
            path: Path to JSONL file
            filter_fn: Optional filter function (entry) -> bool

        Returns:
            List of dict entries in file order
        """
        path = Path(path)
        if not path.exists():
            return []

        entries = []
        with open(path, 'r', encoding='utf-8') as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    entry = json.loads(line)
                except json.JSONDecodeError as e:
                    print(f"Warning: Malformed JSON at {path}:{line_num}: {e}",
                          file=sys.stderr)
                    continue

                if not isinstance(entry, dict):
                    print(f"Warning: Expected an object at {path}:{line_num}, "
                          f"got {type(entry).__name__}", file=sys.stderr)
                    continue

                if filter_fn and not filter_fn(entry):
                    continue

                entries.append(entry)

        return entries


class JSONLWriter:
    """Append-only JSONL writer with file locking."""

    def __init__(self, path: Path):
        """
        Initialize writer.

        Args:
            path: Path to JSONL file
        """
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def append(self, data: dict):
        """
        Atomically append entry to JSONL file.

        Args:
            data: Dictionary to append as JSON line
        """
        self.append_batch([data])

    def append_batch(self, data_list: List[dict]):
        """
        Atomically append multiple entries.

        Args:
            data_list: List of dictionaries to append
        """
        if not data_list:
            return

        with open(self.path, 'a', encoding='utf-8') as f:
            try:
                fcntl.flock(f.fileno(), fcntl.LOCK_EX)
                for data in data_list:
                    f.write(json.dumps(data, ensure_ascii=False, default=str) + '\n')
                f.flush()
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
