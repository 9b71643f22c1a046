"""
SQLite Local Store

The on-device store: domain tables, loose settings and in-app
notifications in one SQLite file.

DESIGN DECISION: Column names keep the camelCase used by the mobile app
(``categoryId``, ``createdAt``...). Snapshots are plain rows, so backups
written by either client restore on the other.

Usage:
    store = SQLiteLocalStore("./data/artha.db")
    snapshot = await store.export_snapshot()
    await store.import_snapshot(snapshot)
    store.close()
"""

import json
import sqlite3
from pathlib import Path
from typing import Any, Optional
from uuid import uuid4

import structlog

from artha.models.backup import DomainSnapshot
from artha.models.notification import Notification, NotificationDraft
from artha.services.storage.interface import (
    LocalStoreInterface,
    NotFoundError,
    StorageError,
)


logger = structlog.get_logger(__name__)

DEFAULT_CATEGORIES = [
    {"id": "1", "name": "Makanan & Minuman", "icon": "🍔", "color": "#FF6B6B"},
    {"id": "2", "name": "Transport", "icon": "🚗", "color": "#4ECDC4"},
    {"id": "3", "name": "Belanja", "icon": "🛍️", "color": "#95E1D3"},
    {"id": "4", "name": "Tagihan", "icon": "💳", "color": "#F38181"},
    {"id": "5", "name": "Hiburan", "icon": "🎮", "color": "#AA96DA"},
    {"id": "6", "name": "Kesehatan", "icon": "🏥", "color": "#FCBAD3"},
    {"id": "7", "name": "Pendidikan", "icon": "📚", "color": "#A8D8EA"},
    {"id": "8", "name": "Lainnya", "icon": "📦", "color": "#FFFFD2"},
]

SCHEMA = """
    CREATE TABLE IF NOT EXISTS categories (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        icon TEXT,
        color TEXT,
        isDefault INTEGER DEFAULT 0
    );

    CREATE TABLE IF NOT EXISTS transactions (
        id TEXT PRIMARY KEY,
        amount REAL NOT NULL,
        categoryId TEXT,
        type TEXT CHECK(type IN ('income', 'expense')),
        description TEXT,
        note TEXT,
        date TEXT,
        createdAt TEXT,
        isRecurring INTEGER DEFAULT 0,
        recurringId TEXT
    );

    CREATE TABLE IF NOT EXISTS recurring_transactions (
        id TEXT PRIMARY KEY,
        type TEXT CHECK(type IN ('income', 'expense')),
        amount REAL NOT NULL,
        description TEXT,
        categoryId TEXT,
        frequency TEXT CHECK(frequency IN ('daily', 'weekly', 'monthly', 'yearly')),
        startDate TEXT,
        endDate TEXT,
        lastGenerated TEXT,
        isActive INTEGER DEFAULT 1,
        notes TEXT,
        createdAt TEXT
    );

    CREATE TABLE IF NOT EXISTS budgets (
        month TEXT PRIMARY KEY,
        totalIncome REAL,
        categoryBudgets TEXT
    );

    CREATE TABLE IF NOT EXISTS goals (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        targetAmount REAL NOT NULL,
        currentAmount REAL DEFAULT 0,
        icon TEXT,
        color TEXT,
        deadline TEXT,
        createdAt TEXT
    );

    CREATE TABLE IF NOT EXISTS notifications (
        id TEXT PRIMARY KEY,
        type TEXT CHECK(type IN ('budget_warning', 'bill_reminder', 'goal_achieved',
                                 'recurring_transaction', 'general')),
        title TEXT NOT NULL,
        message TEXT NOT NULL,
        isRead INTEGER DEFAULT 0,
        createdAt TEXT NOT NULL,
        relatedId TEXT,
        icon TEXT,
        priority TEXT CHECK(priority IN ('low', 'medium', 'high')) DEFAULT 'medium'
    );

    CREATE TABLE IF NOT EXISTS settings (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    );

    CREATE INDEX IF NOT EXISTS idx_notifications_created_at
        ON notifications(createdAt);
"""

TRANSACTION_COLUMNS = [
    "id", "amount", "categoryId", "type", "description", "note",
    "date", "createdAt", "isRecurring", "recurringId",
]
RECURRING_COLUMNS = [
    "id", "type", "amount", "description", "categoryId", "frequency",
    "startDate", "endDate", "lastGenerated", "isActive", "notes", "createdAt",
]
GOAL_COLUMNS = [
    "id", "name", "targetAmount", "currentAmount", "icon", "color",
    "deadline", "createdAt",
]

# Default categories survive a restore
CLEAR_USER_DATA = [
    "DELETE FROM transactions",
    "DELETE FROM budgets",
    "DELETE FROM goals",
    "DELETE FROM recurring_transactions",
    "DELETE FROM categories WHERE isDefault = 0",
]


def _insert_sql(table: str, columns: list[str]) -> str:
    placeholders = ", ".join("?" for _ in columns)
    return f"INSERT OR REPLACE INTO {table} ({', '.join(columns)}) VALUES ({placeholders})"


class SQLiteLocalStore(LocalStoreInterface):
    """Local store backed by a single SQLite database file."""

    def __init__(self, db_path: str = "./data/artha.db"):
        self.db_path = db_path
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._create_tables()
        logger.info("local_store_opened", db_path=db_path)

    def _create_tables(self) -> None:
        """Create tables and seed default categories on first open."""
        self._conn.executescript(SCHEMA)
        count = self._conn.execute("SELECT COUNT(*) FROM categories").fetchone()[0]
        if count == 0:
            with self._conn:
                self._conn.executemany(
                    "INSERT INTO categories (id, name, icon, color, isDefault) "
                    "VALUES (:id, :name, :icon, :color, 1)",
                    DEFAULT_CATEGORIES,
                )

    def close(self) -> None:
        self._conn.close()

    # =========================================================================
    # SNAPSHOT
    # =========================================================================

    async def export_snapshot(self) -> DomainSnapshot:
        """Export user data; default categories are not part of a snapshot."""
        try:
            transactions = [
                {**dict(r), "isRecurring": bool(r["isRecurring"])}
                for r in self._conn.execute(
                    "SELECT * FROM transactions ORDER BY date DESC, createdAt DESC, id"
                )
            ]
            categories = [
                {**dict(r), "isDefault": False}
                for r in self._conn.execute(
                    "SELECT * FROM categories WHERE isDefault = 0 ORDER BY id"
                )
            ]
            budgets = [
                {
                    "month": r["month"],
                    "totalIncome": r["totalIncome"],
                    "categoryBudgets": json.loads(r["categoryBudgets"] or "{}"),
                }
                for r in self._conn.execute("SELECT * FROM budgets ORDER BY month")
            ]
            goals = [
                dict(r)
                for r in self._conn.execute("SELECT * FROM goals ORDER BY createdAt DESC, id")
            ]
            recurring = [
                {**dict(r), "isActive": bool(r["isActive"])}
                for r in self._conn.execute(
                    "SELECT * FROM recurring_transactions ORDER BY createdAt DESC, id"
                )
            ]
        except (sqlite3.Error, ValueError) as e:
            raise StorageError(f"Failed to export local data: {e}")

        return DomainSnapshot(data={
            "transactions": transactions,
            "categories": categories,
            "budgets": budgets,
            "goals": goals,
            "recurring_transactions": recurring,
        })

    async def import_snapshot(self, snapshot: DomainSnapshot) -> None:
        """
        Replace all user data with the snapshot.

        Runs in one SQLite transaction: either everything is replaced
        or nothing is.
        """
        data = snapshot.data

        def rows(key: str, columns: list[str], **overrides) -> list[tuple]:
            result = []
            for record in data.get(key) or []:
                values = {column: record.get(column) for column in columns}
                for column, convert in overrides.items():
                    values[column] = convert(record)
                result.append(tuple(values[column] for column in columns))
            return result

        try:
            with self._conn:
                # executescript() would commit first, so clear row by statement
                for statement in CLEAR_USER_DATA:
                    self._conn.execute(statement)
                self._conn.executemany(
                    _insert_sql("categories", ["id", "name", "icon", "color", "isDefault"]),
                    rows(
                        "categories",
                        ["id", "name", "icon", "color", "isDefault"],
                        isDefault=lambda r: 0,
                    ),
                )
                self._conn.executemany(
                    _insert_sql("transactions", TRANSACTION_COLUMNS),
                    rows(
                        "transactions",
                        TRANSACTION_COLUMNS,
                        isRecurring=lambda r: 1 if r.get("isRecurring") else 0,
                    ),
                )
                self._conn.executemany(
                    _insert_sql("budgets", ["month", "totalIncome", "categoryBudgets"]),
                    rows(
                        "budgets",
                        ["month", "totalIncome", "categoryBudgets"],
                        categoryBudgets=_budget_mapping_text,
                    ),
                )
                self._conn.executemany(
                    _insert_sql("goals", GOAL_COLUMNS),
                    rows("goals", GOAL_COLUMNS),
                )
                self._conn.executemany(
                    _insert_sql("recurring_transactions", RECURRING_COLUMNS),
                    rows(
                        "recurring_transactions",
                        RECURRING_COLUMNS,
                        isActive=lambda r: 1 if r.get("isActive", True) else 0,
                    ),
                )
        except (sqlite3.Error, AttributeError, TypeError) as e:
            raise StorageError(f"Failed to import local data: {e}")

        logger.info(
            "local_snapshot_imported",
            transactions=len(data.get("transactions") or []),
            goals=len(data.get("goals") or []),
        )

    # =========================================================================
    # SETTINGS
    # =========================================================================

    async def get(self, key: str) -> Optional[str]:
        try:
            row = self._conn.execute(
                "SELECT value FROM settings WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read setting {key}: {e}")
        return row["value"] if row else None

    async def set(self, key: str, value: str) -> None:
        try:
            with self._conn:
                self._conn.execute(
                    "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
                    (key, value),
                )
        except sqlite3.Error as e:
            raise StorageError(f"Failed to write setting {key}: {e}")

    async def remove(self, key: str) -> None:
        try:
            with self._conn:
                self._conn.execute("DELETE FROM settings WHERE key = ?", (key,))
        except sqlite3.Error as e:
            raise StorageError(f"Failed to remove setting {key}: {e}")

    # =========================================================================
    # NOTIFICATIONS
    # =========================================================================

    async def create_notification(self, draft: NotificationDraft) -> str:
        notification_id = str(uuid4())
        try:
            with self._conn:
                self._conn.execute(
                    """INSERT INTO notifications (
                        id, type, title, message, isRead, createdAt, relatedId, icon, priority
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                    (
                        notification_id,
                        draft.type.value,
                        draft.title,
                        draft.message,
                        1 if draft.is_read else 0,
                        draft.created_at.isoformat(),
                        draft.related_id,
                        draft.icon,
                        draft.priority.value,
                    ),
                )
        except sqlite3.Error as e:
            raise StorageError(f"Failed to save notification: {e}")
        return notification_id

    async def list_notifications(self) -> list[Notification]:
        """All notifications, newest first."""
        rows = self._conn.execute(
            "SELECT * FROM notifications ORDER BY createdAt DESC"
        ).fetchall()
        return [
            Notification(
                id=r["id"],
                type=r["type"],
                title=r["title"],
                message=r["message"],
                is_read=bool(r["isRead"]),
                created_at=r["createdAt"],
                related_id=r["relatedId"],
                icon=r["icon"],
                priority=r["priority"],
            )
            for r in rows
        ]

    async def get_unread_count(self) -> int:
        return self._conn.execute(
            "SELECT COUNT(*) FROM notifications WHERE isRead = 0"
        ).fetchone()[0]

    async def mark_notification_read(self, notification_id: str) -> None:
        with self._conn:
            cursor = self._conn.execute(
                "UPDATE notifications SET isRead = 1 WHERE id = ?", (notification_id,)
            )
        if cursor.rowcount == 0:
            raise NotFoundError(f"Notification not found: {notification_id}")

    async def mark_all_notifications_read(self) -> None:
        with self._conn:
            self._conn.execute("UPDATE notifications SET isRead = 1")

    async def delete_notification(self, notification_id: str) -> None:
        with self._conn:
            self._conn.execute("DELETE FROM notifications WHERE id = ?", (notification_id,))


def _budget_mapping_text(record: dict[str, Any]) -> str:
    """Budgets may arrive with the per-category mapping as text or as a dict."""
    value = record.get("categoryBudgets")
    if isinstance(value, str):
        return value
    return json.dumps(value or {})
