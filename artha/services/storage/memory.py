"""
In-Memory Remote Backup Store

Keeps backup documents in a dict. Used for offline runs and tests.
"""

from datetime import datetime, timezone
from typing import Optional

from artha.models.backup import RemoteBackupDocument
from artha.services.storage.interface import RemoteBackupStoreInterface


class InMemoryBackupStore(RemoteBackupStoreInterface):
    """
    Dict-backed implementation of the remote backup store.

    Args:
        assign_timestamps: When False, stored documents keep
            ``updated_at=None``, like a server timestamp that has not
            resolved yet.
    """

    def __init__(self, assign_timestamps: bool = True):
        self._documents: dict[str, RemoteBackupDocument] = {}
        self._assign_timestamps = assign_timestamps

    async def get_document(self, user_id: str) -> Optional[RemoteBackupDocument]:
        document = self._documents.get(user_id)
        return document.model_copy(deep=True) if document else None

    async def set_document(
        self,
        user_id: str,
        document: RemoteBackupDocument,
    ) -> Optional[RemoteBackupDocument]:
        updated_at = datetime.now(timezone.utc) if self._assign_timestamps else None
        stored = document.model_copy(update={"updated_at": updated_at}, deep=True)
        self._documents[user_id] = stored
        return stored.model_copy(deep=True)

    def __len__(self) -> int:
        return len(self._documents)
