"""
Sync Errors

Every failure the backup/restore engine can report. The engine converts
these into result values at its boundary; ``code`` is what callers see
as ``error_code``.
"""


class SyncError(Exception):
    """Base exception for backup/restore failures."""

    code = "SyncError"


class NotAuthenticatedError(SyncError):
    """No user is signed in."""

    code = "NotAuthenticated"

    def __init__(self, message: str = "User not logged in"):
        super().__init__(message)


class RemoteUnavailableError(SyncError):
    """The remote backup store rejected a read or write, or was unreachable."""

    code = "RemoteUnavailable"


class NoBackupFoundError(SyncError):
    """Restore was requested but the account has no backup."""

    code = "NoBackupFound"


class MalformedPayloadError(SyncError):
    """A stored or captured payload could not be (de)serialized."""

    code = "MalformedPayload"


class IncompatibleBackupVersionError(MalformedPayloadError):
    """The backup was written in a payload format this build cannot read."""

    code = "IncompatibleBackupVersion"

    def __init__(self, version: str):
        self.version = version
        super().__init__(
            f"Backup format version '{version or 'unknown'}' is not supported by this app"
        )


class LocalPersistFailureError(SyncError):
    """Writing restored data or a notification to the local store failed."""

    code = "LocalPersistFailure"
