"""
Pytest configuration and shared fixtures.

Fixtures available to all tests:
  • sample_snapshot_data  : a small but complete set of user records
  • local_store           : empty in-memory SQLite local store
  • remote_store          : in-memory remote backup store
  • user                  : a signed-in identity
  • sync_settings         : engine settings that need no environment
  • notification_settings : id-ID formatting with the Rp symbol
"""

import copy

import pytest

from artha.config.settings import NotificationSettings, SyncSettings
from artha.models.backup import UserIdentity
from artha.services.storage import InMemoryBackupStore, SQLiteLocalStore


SAMPLE_SNAPSHOT_DATA = {
    "transactions": [
        {
            "id": "t1",
            "amount": 50000,
            "categoryId": "1",
            "type": "expense",
            "description": "Makan siang",
            "note": None,
            "date": "2024-03-01",
            "createdAt": "2024-03-01T12:00:00",
            "isRecurring": False,
            "recurringId": None,
        },
        {
            "id": "t2",
            "amount": 10000000,
            "categoryId": None,
            "type": "income",
            "description": "Gaji",
            "note": "Maret",
            "date": "2024-03-01",
            "createdAt": "2024-03-01T08:00:00",
            "isRecurring": True,
            "recurringId": "r1",
        },
    ],
    "categories": [
        {"id": "c9", "name": "Kopi", "icon": "☕", "color": "#6F4E37"},
    ],
    "budgets": [
        {"month": "2024-03", "totalIncome": 10000000, "categoryBudgets": {"1": 2000000}},
    ],
    "goals": [
        {
            "id": "g1",
            "name": "Laptop",
            "targetAmount": 15000000,
            "currentAmount": 5000000,
            "icon": "💻",
            "color": "#123456",
            "deadline": "2024-12-31",
            "createdAt": "2024-01-01",
        },
    ],
    "recurring_transactions": [
        {
            "id": "r1",
            "type": "income",
            "amount": 10000000,
            "description": "Gaji",
            "categoryId": None,
            "frequency": "monthly",
            "startDate": "2024-01-01",
            "endDate": None,
            "lastGenerated": "2024-03-01",
            "isActive": True,
            "notes": None,
            "createdAt": "2024-01-01",
        },
    ],
}


@pytest.fixture
def sample_snapshot_data():
    return copy.deepcopy(SAMPLE_SNAPSHOT_DATA)


@pytest.fixture
def local_store():
    store = SQLiteLocalStore(":memory:")
    yield store
    store.close()


@pytest.fixture
def remote_store():
    return InMemoryBackupStore()


@pytest.fixture
def user():
    return UserIdentity(id="user-1", email="budi@example.com")


@pytest.fixture
def sync_settings():
    return SyncSettings(
        remote_backend="memory",
        device_label="Test Device",
        settings_keys="@theme_preference,@pin_enabled,@notification_settings",
    )


@pytest.fixture
def notification_settings():
    return NotificationSettings(locale="id-ID", currency_symbol="Rp")
