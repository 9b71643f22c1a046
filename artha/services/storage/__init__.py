"""
Storage Services Package

Provides abstract interfaces and concrete implementations for the local
store and the remote backup store.
"""

from artha.services.storage.interface import (
    ConnectionError,
    LocalStoreInterface,
    NotFoundError,
    PayloadTooLargeError,
    RemoteBackupStoreInterface,
    StorageError,
)
from artha.services.storage.google_sheets import (
    GoogleSheetsBackupStore,
    GoogleSheetsClient,
)
from artha.services.storage.memory import InMemoryBackupStore
from artha.services.storage.sqlite_store import SQLiteLocalStore

__all__ = [
    # Interfaces
    "LocalStoreInterface",
    "RemoteBackupStoreInterface",
    # Exceptions
    "ConnectionError",
    "NotFoundError",
    "PayloadTooLargeError",
    "StorageError",
    # Implementations
    "GoogleSheetsBackupStore",
    "GoogleSheetsClient",
    "InMemoryBackupStore",
    "SQLiteLocalStore",
]
