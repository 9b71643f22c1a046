"""
Google Sheets Remote Backup Store

DESIGN DECISION: Google Sheets holds the remote backups because:
1. Users can see (and download) their backup row directly
2. No server or database to operate
3. Built-in durability (Google's infrastructure)

TRADEOFFS:
- A cell holds at most 50,000 characters, which caps the snapshot size.
  Oversized payloads are rejected, never truncated.
- No transactions and no concurrency token: the row is rewritten as a
  whole, so the last backup wins.
- No server timestamps: the store stamps ``updated_at`` when it writes.

Layout: one row per user id in the configured worksheet.
"""

from datetime import datetime, timezone
from typing import Optional

import gspread
from google.oauth2.service_account import Credentials

from artha.config import get_settings
from artha.config.settings import GoogleSheetsSettings
from artha.models.backup import RemoteBackupDocument
from artha.services.storage.interface import (
    ConnectionError,
    PayloadTooLargeError,
    RemoteBackupStoreInterface,
    StorageError,
)


# Column mappings for Backups sheet
BACKUP_COLUMNS = [
    "user_id",
    "backup_data",
    "settings_data",
    "updated_at",
    "device",
    "email",
    "version",
]

# Google Sheets hard limit per cell
MAX_CELL_CHARACTERS = 50_000


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and worksheet lookup.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = settings or get_settings().google_sheets

    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise ConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise ConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise ConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def get_backups_sheet(self) -> gspread.Worksheet:
        """Get or create the Backups worksheet."""
        spreadsheet = self.get_spreadsheet()
        try:
            sheet = spreadsheet.worksheet(self._settings.backups_sheet_name)
        except gspread.WorksheetNotFound:
            # Create the sheet with headers
            sheet = spreadsheet.add_worksheet(
                title=self._settings.backups_sheet_name,
                rows=100,
                cols=len(BACKUP_COLUMNS),
            )
            sheet.append_row(BACKUP_COLUMNS)
        return sheet


class GoogleSheetsBackupStore(RemoteBackupStoreInterface):
    """
    Google Sheets implementation of the remote backup store.

    Each user's backup is a single row keyed by user id in column A.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    def _document_to_row(self, user_id: str, document: RemoteBackupDocument) -> list:
        """Convert a backup document to a spreadsheet row."""
        return [
            user_id,
            document.backup_data or "",
            document.settings_data or "",
            document.updated_at.isoformat() if document.updated_at else "",
            document.device,
            document.email or "",
            document.version,
        ]

    def _row_to_document(self, row: list) -> RemoteBackupDocument:
        """Convert a spreadsheet row to a backup document."""
        # Trailing empty cells are not returned by the API
        def safe_get(index: int, default: str = "") -> str:
            try:
                return row[index] if row[index] else default
            except IndexError:
                return default

        return RemoteBackupDocument(
            backup_data=safe_get(1) or None,
            settings_data=safe_get(2) or None,
            updated_at=datetime.fromisoformat(safe_get(3)) if safe_get(3) else None,
            device=safe_get(4),
            email=safe_get(5) or None,
            version=safe_get(6),
        )

    def _find_row_index(self, sheet: gspread.Worksheet, user_id: str) -> Optional[int]:
        """Return the 1-based row number holding a user's backup."""
        user_ids = sheet.col_values(1)
        # Row 1 is the header
        for idx, value in enumerate(user_ids[1:], start=2):
            if value == user_id:
                return idx
        return None

    async def get_document(self, user_id: str) -> Optional[RemoteBackupDocument]:
        """Read the backup row for a user."""
        try:
            sheet = self._client.get_backups_sheet()
            idx = self._find_row_index(sheet, user_id)
            if idx is None:
                return None
            return self._row_to_document(sheet.row_values(idx))
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to read backup: {e}")

    async def set_document(
        self,
        user_id: str,
        document: RemoteBackupDocument,
    ) -> Optional[RemoteBackupDocument]:
        """Write (or fully rewrite) the backup row for a user."""
        for field_name in ("backup_data", "settings_data"):
            value = getattr(document, field_name) or ""
            if len(value) > MAX_CELL_CHARACTERS:
                raise PayloadTooLargeError(
                    f"Backup too large for Google Sheets: {field_name} has "
                    f"{len(value)} characters (limit {MAX_CELL_CHARACTERS})"
                )

        stored = document.model_copy(
            update={"updated_at": datetime.now(timezone.utc)}
        )
        row = self._document_to_row(user_id, stored)

        try:
            sheet = self._client.get_backups_sheet()
            idx = self._find_row_index(sheet, user_id)
            if idx is None:
                sheet.append_row(row, value_input_option="RAW")
            else:
                last_column = chr(ord("A") + len(BACKUP_COLUMNS) - 1)
                sheet.update(
                    range_name=f"A{idx}:{last_column}{idx}",
                    values=[row],
                    value_input_option="RAW",
                )
            return stored
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to write backup: {e}")
