"""
Supabase repository tests against a mocked client
"""
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from config.constants import ValidationSource
from core.exceptions import DatabaseError
from core.models import ValidationLogEntry
from database.repositories import SearchHistoryRepository, ValidationLogRepository


@pytest.fixture
def db():
    return MagicMock()


class TestValidationLogRepository:

    async def test_append_inserts_row(self, db):
        db.table.return_value.insert.return_value.execute.return_value = SimpleNamespace(data=[{"id": 1}])
        entry = ValidationLogEntry(domain="aihub.com", source=ValidationSource.SECONDARY, status="mismatch")

        await ValidationLogRepository(db=db).append(entry)

        db.table.assert_called_with("validation_logs")
        row = db.table.return_value.insert.call_args.args[0]
        assert row["source"] == "secondary"
        assert row["status"] == "mismatch"

    async def test_list_recent_filters_and_orders(self, db):
        query = db.table.return_value.select.return_value
        query.eq.return_value = query
        query.order.return_value = query
        query.limit.return_value = query
        query.execute.return_value = SimpleNamespace(data=[{
            "domain": "aihub.com",
            "source": "buy_link",
            "status": "404",
            "message": None,
            "created_at": "2026-03-01T12:00:00+00:00"
        }])

        entries = await ValidationLogRepository(db=db).list_recent(source=ValidationSource.BUY_LINK, limit=10)

        query.eq.assert_called_once_with("source", "buy_link")
        query.order.assert_called_once_with("created_at", desc=True)
        query.limit.assert_called_once_with(10)
        assert entries[0].source == ValidationSource.BUY_LINK
        assert entries[0].created_at.year == 2026

    async def test_trimmed_fractional_seconds(self, db):
        query = db.table.return_value.select.return_value
        query.order.return_value = query
        query.limit.return_value = query
        query.execute.return_value = SimpleNamespace(data=[{
            "domain": "aihub.com",
            "source": "primary",
            "status": "timeout",
            "created_at": "2026-01-01T10:00:00.1234+00:00"
        }])

        entries = await ValidationLogRepository(db=db).list_recent()

        assert entries[0].created_at.microsecond == 123400
        assert entries[0].created_at.tzinfo is not None

    async def test_insert_failure(self, db):
        db.table.return_value.insert.return_value.execute.side_effect = RuntimeError("timeout")
        entry = ValidationLogEntry(domain="aihub.com", source=ValidationSource.PRIMARY, status="timeout")

        with pytest.raises(DatabaseError):
            await ValidationLogRepository(db=db).append(entry)


class TestSearchHistoryRepository:

    async def test_record(self, db):
        db.table.return_value.insert.return_value.execute.return_value = SimpleNamespace(data=[{"id": 1}])

        await SearchHistoryRepository(db=db).record("user-1", "ai*", "wildcard_explore", 4, available_count=2)

        row = db.table.return_value.insert.call_args.args[0]
        assert row["keyword"] == "ai*"
        assert row["available_count"] == 2
