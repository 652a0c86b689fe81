"""Thread-safe access to a JSON array file.

Every store in this package keeps its records as a JSON array on disk and
guards all access with a single lock per file.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Union

from docbot.src.services.store.base import StoreError

logger = logging.getLogger(__name__)

Records = List[Dict[str, Any]]


class JsonFile:
    """A JSON array file with locked read and read-modify-write access.

    Attributes:
        file_path (Path): Path to the JSON file
        lock (threading.Lock): Lock serializing access to the file
    """

    def __init__(self, file_path: Union[str, Path]) -> None:
        self.file_path = Path(file_path)
        self.lock = threading.Lock()
        self.initialize_storage()

    def initialize_storage(self) -> None:
        """Create the file with an empty array if it doesn't exist."""
        try:
            if not self.file_path.exists():
                self.file_path.parent.mkdir(parents=True, exist_ok=True)
                with open(self.file_path, "w", encoding="utf-8") as f:
                    json.dump([], f)
                logger.info(f"Storage file initialized at {self.file_path}")
        except OSError as e:
            logger.error(f"Error initializing storage file {self.file_path}: {str(e)}")

    def read(self) -> Records:
        """Return all records.

        Raises:
            StoreError: If the file is unreadable or not a JSON array
        """
        with self.lock:
            return self._load()

    def update(self, mutate: Callable[[Records], Any]) -> Any:
        """Apply a mutation to the records and write them back atomically.

        Args:
            mutate: Callable receiving the record list; it may change it in place

        Returns:
            Whatever the mutation returns

        Raises:
            StoreError: If the file cannot be read or written
        """
        with self.lock:
            records = self._load()
            result = mutate(records)
            self._dump(records)
            return result

    def _load(self) -> Records:
        try:
            if not self.file_path.exists() or os.path.getsize(self.file_path) == 0:
                return []
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Could not read {self.file_path}: {str(e)}") from e
        if not isinstance(data, list):
            raise StoreError(f"Expected a JSON array in {self.file_path}")
        return data

    def _dump(self, records: Records) -> None:
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.file_path.parent), suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.file_path)
        except (OSError, TypeError, ValueError) as e:
            raise StoreError(f"Could not write {self.file_path}: {str(e)}") from e
