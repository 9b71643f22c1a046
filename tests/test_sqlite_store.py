"""
Tests for the SQLite local store.
"""

import pytest

from artha.models.backup import DomainSnapshot
from artha.models.notification import NotificationDraftBuilder
from artha.services.storage import NotFoundError, SQLiteLocalStore, StorageError


class TestSchema:

    @pytest.mark.asyncio
    async def test_default_categories_not_exported(self, local_store):
        """Seeded categories exist but are not user data."""
        count = local_store._conn.execute("SELECT COUNT(*) FROM categories").fetchone()[0]
        snapshot = await local_store.export_snapshot()

        assert count == 8
        assert snapshot.data["categories"] == []

    @pytest.mark.asyncio
    async def test_snapshot_keys(self, local_store):
        snapshot = await local_store.export_snapshot()
        assert set(snapshot.data) == {
            "transactions",
            "categories",
            "budgets",
            "goals",
            "recurring_transactions",
        }

    def test_database_file_created(self, tmp_path):
        path = tmp_path / "nested" / "artha.db"
        store = SQLiteLocalStore(str(path))
        store.close()
        assert path.exists()


class TestSnapshot:

    @pytest.mark.asyncio
    async def test_import_then_export(self, local_store, sample_snapshot_data):
        await local_store.import_snapshot(DomainSnapshot(data=sample_snapshot_data))
        snapshot = await local_store.export_snapshot()

        assert [t["id"] for t in snapshot.data["transactions"]] == ["t1", "t2"]
        assert snapshot.data["transactions"][1]["isRecurring"] is True
        assert snapshot.data["budgets"][0]["categoryBudgets"] == {"1": 2000000}
        assert snapshot.data["categories"][0]["isDefault"] is False
        assert snapshot.data["recurring_transactions"][0]["isActive"] is True

    @pytest.mark.asyncio
    async def test_import_is_destructive(self, local_store, sample_snapshot_data):
        await local_store.import_snapshot(DomainSnapshot(data=sample_snapshot_data))
        await local_store.import_snapshot(DomainSnapshot(data={}))

        snapshot = await local_store.export_snapshot()
        assert all(records == [] for records in snapshot.data.values())

    @pytest.mark.asyncio
    async def test_import_keeps_default_categories(self, local_store, sample_snapshot_data):
        await local_store.import_snapshot(DomainSnapshot(data=sample_snapshot_data))
        count = local_store._conn.execute(
            "SELECT COUNT(*) FROM categories WHERE isDefault = 1"
        ).fetchone()[0]
        assert count == 8

    @pytest.mark.asyncio
    async def test_budget_mapping_as_text(self, local_store):
        await local_store.import_snapshot(DomainSnapshot(data={
            "budgets": [{"month": "2024-04", "totalIncome": 1, "categoryBudgets": '{"2": 5}'}],
        }))
        snapshot = await local_store.export_snapshot()
        assert snapshot.data["budgets"][0]["categoryBudgets"] == {"2": 5}

    @pytest.mark.asyncio
    async def test_failed_import_changes_nothing(self, local_store, sample_snapshot_data):
        await local_store.import_snapshot(DomainSnapshot(data=sample_snapshot_data))
        before = await local_store.export_snapshot()

        # Second transaction violates the type CHECK constraint
        bad = {
            "transactions": [
                {"id": "x1", "amount": 1, "type": "expense"},
                {"id": "x2", "amount": 1, "type": "transfer"},
            ],
        }
        with pytest.raises(StorageError):
            await local_store.import_snapshot(DomainSnapshot(data=bad))

        assert await local_store.export_snapshot() == before


class TestSettings:

    @pytest.mark.asyncio
    async def test_get_missing(self, local_store):
        assert await local_store.get("@theme_preference") is None

    @pytest.mark.asyncio
    async def test_set_overwrites(self, local_store):
        await local_store.set("@theme_preference", "dark")
        await local_store.set("@theme_preference", "light")
        assert await local_store.get("@theme_preference") == "light"

    @pytest.mark.asyncio
    async def test_remove(self, local_store):
        await local_store.set("@pin_enabled", "true")
        await local_store.remove("@pin_enabled")
        assert await local_store.get("@pin_enabled") is None

    @pytest.mark.asyncio
    async def test_settings_survive_snapshot_import(self, local_store):
        await local_store.set("@theme_preference", "dark")
        await local_store.import_snapshot(DomainSnapshot(data={}))
        assert await local_store.get("@theme_preference") == "dark"


class TestNotifications:

    @pytest.mark.asyncio
    async def test_create_assigns_id(self, local_store):
        first = await local_store.create_notification(NotificationDraftBuilder.welcome())
        second = await local_store.create_notification(NotificationDraftBuilder.welcome())
        assert first != second
        assert len(await local_store.list_notifications()) == 2

    @pytest.mark.asyncio
    async def test_mark_read(self, local_store):
        notification_id = await local_store.create_notification(
            NotificationDraftBuilder.budget_threshold("Transport", 90)
        )
        await local_store.mark_notification_read(notification_id)

        assert await local_store.get_unread_count() == 0

    @pytest.mark.asyncio
    async def test_mark_read_unknown_id(self, local_store):
        with pytest.raises(NotFoundError):
            await local_store.mark_notification_read("missing")

    @pytest.mark.asyncio
    async def test_mark_all_and_delete(self, local_store):
        first = await local_store.create_notification(NotificationDraftBuilder.welcome())
        await local_store.create_notification(NotificationDraftBuilder.welcome())

        await local_store.mark_all_notifications_read()
        assert await local_store.get_unread_count() == 0

        await local_store.delete_notification(first)
        remaining = await local_store.list_notifications()
        assert first not in [n.id for n in remaining]
        assert len(remaining) == 1

    @pytest.mark.asyncio
    async def test_notifications_not_in_snapshot(self, local_store):
        await local_store.create_notification(NotificationDraftBuilder.welcome())
        snapshot = await local_store.export_snapshot()
        assert "notifications" not in snapshot.data


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
