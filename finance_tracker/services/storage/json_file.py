"""
JSON File Storage Implementation

DESIGN DECISION: One file per key under a data directory.
This mirrors how the browser kept one localStorage entry per key:
1. A user's transactions live in a single, human-readable file
2. No database setup required
3. Deleting a user's data is deleting one file

TRADEOFFS:
- A whole collection is rewritten on every change (fine for personal use)
- No cross-key transactions (each key is written atomically on its own)
"""

import os
import tempfile
from pathlib import Path
from typing import Optional
from urllib.parse import quote, unquote

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from finance_tracker.services.storage.interface import KeyValueStore, StorageError


FILE_SUFFIX = ".json"


class JsonFileKeyValueStore(KeyValueStore):
    """Key-value store keeping each key in its own file."""

    def __init__(self, data_dir: Path):
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path_for(self, key: str) -> Path:
        if not key:
            raise StorageError("Storage key must not be empty")
        return self._data_dir / f"{quote(key, safe='')}{FILE_SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read '{key}': {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        try:
            self._write_file(path, value)
        except OSError as e:
            raise StorageError(f"Failed to write '{key}': {e}") from e

    @retry(
        retry=retry_if_exception_type(PermissionError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.05, max=0.5),
        reraise=True,
    )
    def _write_file(self, path: Path, value: str) -> None:
        """
        Replace a file's contents atomically.

        Retries when another process briefly holds the target open
        (os.replace raises PermissionError on Windows in that case).
        """
        self._data_dir.mkdir(parents=True, exist_ok=True)
        # Write to a temp file first so a crash never leaves half a file
        fd, tmp_name = tempfile.mkstemp(dir=self._data_dir, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def delete(self, key: str) -> bool:
        path = self._path_for(key)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to delete '{key}': {e}") from e

    def keys(self) -> list[str]:
        if not self._data_dir.exists():
            return []
        return sorted(
            unquote(path.name[: -len(FILE_SUFFIX)])
            for path in self._data_dir.glob(f"*{FILE_SUFFIX}")
        )
