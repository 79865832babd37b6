"""Persistence layer for fixit application."""

from fixit.storage.base import KeyValueStore, PersistenceWriteError, StorageError
from fixit.storage.factories import create_sqlite_store
from fixit.storage.memory import InMemoryKeyValueStore

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "PersistenceWriteError",
    "StorageError",
    "create_sqlite_store",
]
