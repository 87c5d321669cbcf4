"""
Storage Services Package

Provides the abstract key-value interface and its implementations.
The JSON file backend is the default; the in-memory one is for tests.
"""

from finance_tracker.services.storage.interface import (
    CorruptDataError,
    KeyValueStore,
    NotFoundError,
    StorageError,
)
from finance_tracker.services.storage.json_file import JsonFileKeyValueStore
from finance_tracker.services.storage.memory import InMemoryKeyValueStore

__all__ = [
    # Interface
    "KeyValueStore",
    # Exceptions
    "CorruptDataError",
    "NotFoundError",
    "StorageError",
    # Implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
]
