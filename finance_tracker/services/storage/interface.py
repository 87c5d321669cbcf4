"""
Abstract Storage Interface

DESIGN DECISION: Persistence is an opaque key-value store, the same
shape as the browser localStorage the app was first written against.
This allows us to:
1. Keep a JSON file per key on disk for local use
2. Use in-memory storage for testing
3. Swap in a real database later without touching business logic

Values are strings. Callers that store structured data go through
read_json/write_json so that decoding failures surface as
CorruptDataError instead of a bare ValueError.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Optional


class KeyValueStore(ABC):
    """
    Abstract interface for key-value storage operations.

    Any storage implementation (file, memory, database)
    must implement these methods.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Returns:
            The stored string, or None if the key does not exist

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if the key existed and was removed
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List all stored keys in sorted order."""
        pass

    def read_json(self, key: str) -> Optional[Any]:
        """
        Read and decode a JSON value.

        Raises:
            CorruptDataError: If the stored value is not valid JSON
        """
        raw = self.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            raise CorruptDataError(f"Value under '{key}' is not valid JSON: {e}") from e

    def write_json(self, key: str, value: Any) -> None:
        """Encode a value as JSON and store it."""
        self.set(key, json.dumps(value, ensure_ascii=False))


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class CorruptDataError(StorageError):
    """Stored data could not be decoded."""
    pass
