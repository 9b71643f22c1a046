"""
Abstract Storage Interfaces

DESIGN DECISION: The sync engine and the notification triggers talk to
storage only through these interfaces.
This allows us to:
1. Swap Google Sheets for another document store later
2. Use in-memory storage for testing
3. Keep the engine ignorant of the local data model

The interfaces are intentionally small: just the capabilities the
backup/restore engine and the notification triggers need.
"""

from abc import ABC, abstractmethod
from typing import Optional

from artha.models.backup import DomainSnapshot, RemoteBackupDocument
from artha.models.notification import NotificationDraft


class LocalStoreInterface(ABC):
    """
    Capabilities of the on-device store.

    Setting values are raw strings, exactly as the app wrote them.
    """

    @abstractmethod
    async def export_snapshot(self) -> DomainSnapshot:
        """
        Capture every locally owned domain record.

        Returns:
            An opaque snapshot that import_snapshot accepts unchanged
        """
        pass

    @abstractmethod
    async def import_snapshot(self, snapshot: DomainSnapshot) -> None:
        """
        Replace all local domain records with the snapshot's contents.

        This is destructive: records absent from the snapshot are gone
        afterwards.

        Raises:
            StorageError: If the import fails
        """
        pass

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Read a loose setting.

        Returns:
            The stored string, or None if the key is absent
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """
        Write a loose setting.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def create_notification(self, draft: NotificationDraft) -> str:
        """
        Persist a notification draft.

        Returns:
            The id assigned to the stored notification

        Raises:
            StorageError: If the write fails
        """
        pass


class RemoteBackupStoreInterface(ABC):
    """
    Abstract interface for the remote backup document store.

    One document per user id. Writes replace the whole document.
    """

    @abstractmethod
    async def get_document(self, user_id: str) -> Optional[RemoteBackupDocument]:
        """
        Read the backup document for a user.

        Returns:
            The document if one exists, None otherwise

        Raises:
            StorageError: If the store cannot be reached
        """
        pass

    @abstractmethod
    async def set_document(
        self,
        user_id: str,
        document: RemoteBackupDocument,
    ) -> Optional[RemoteBackupDocument]:
        """
        Replace the backup document for a user.

        The store assigns ``updated_at``; any value on the incoming
        document is ignored.

        Returns:
            The document as stored. Its ``updated_at`` may still be None
            when the store resolves timestamps asynchronously.

        Raises:
            StorageError: If the write is rejected or the store is unreachable
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass


class PayloadTooLargeError(StorageError):
    """A value exceeds what the backend can hold."""
    pass
