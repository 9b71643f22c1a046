"""Services package."""

from artha.services.identity import (
    IdentityProviderInterface,
    SessionIdentityProvider,
)
from artha.services.storage import (
    ConnectionError,
    GoogleSheetsBackupStore,
    GoogleSheetsClient,
    InMemoryBackupStore,
    LocalStoreInterface,
    NotFoundError,
    PayloadTooLargeError,
    RemoteBackupStoreInterface,
    SQLiteLocalStore,
    StorageError,
)

__all__ = [
    # Identity
    "IdentityProviderInterface",
    "SessionIdentityProvider",
    # Storage services
    "ConnectionError",
    "GoogleSheetsBackupStore",
    "GoogleSheetsClient",
    "InMemoryBackupStore",
    "LocalStoreInterface",
    "NotFoundError",
    "PayloadTooLargeError",
    "RemoteBackupStoreInterface",
    "SQLiteLocalStore",
    "StorageError",
]
