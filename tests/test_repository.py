"""SqlSessionStore tests — statement shape and result mapping.

Statements are compiled with the PostgreSQL dialect and inspected as SQL
text; a FakeDatabase supplies canned results instead of a live server.
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy.dialects import postgresql

from devprofile_db.repository import DOCUMENT_FIELDS, SqlSessionStore
from helpers.fake_db import FakeDatabase, FakeResult

NOW = datetime(2024, 10, 15, 9, 0, tzinfo=timezone.utc)


def _sql(stmt) -> str:
    return str(stmt.compile(dialect=postgresql.dialect()))


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def store(fake_db):
    return SqlSessionStore(fake_db)


class TestUpsert:

    @pytest.mark.asyncio
    async def test_insert_reported(self, store, fake_db):
        fake_db.next_result = FakeResult(scalar=True)
        outcome = await store.upsert_by_key(
            "s1",
            {"responses": {}, "progress": {}, "total_score": 0, "updated_at": NOW},
            {"created_at": NOW, "started_at": NOW, "questionnaire_id": "dev-profile-2024"},
        )
        assert outcome.inserted is True
        assert outcome.changed is False

    @pytest.mark.asyncio
    async def test_update_reported(self, store, fake_db):
        fake_db.next_result = FakeResult(scalar=False)
        outcome = await store.upsert_by_key("s1", {"updated_at": NOW}, {})
        assert outcome.inserted is False
        assert outcome.changed is True

    @pytest.mark.asyncio
    async def test_statement_shape(self, store, fake_db):
        fake_db.next_result = FakeResult(scalar=True)
        await store.upsert_by_key(
            "s1",
            {"total_score": 10, "is_completed": True, "updated_at": NOW},
            {"created_at": NOW, "questionnaire_id": "dev-profile-2024"},
            {"completed_at": NOW},
        )
        sql = _sql(fake_db.statements[0])
        assert "INSERT INTO questionnaire_sessions" in sql
        assert "ON CONFLICT (session_id) DO UPDATE SET" in sql
        assert "total_score = excluded.total_score" in sql
        assert "is_completed = excluded.is_completed" in sql
        assert (
            "completed_at = coalesce(questionnaire_sessions.completed_at, "
            "excluded.completed_at)"
        ) in sql
        # Insert-only fields never appear in the update branch
        assert "created_at = excluded.created_at" not in sql
        assert "questionnaire_id = excluded.questionnaire_id" not in sql
        assert "RETURNING (xmax = 0) AS inserted" in sql

    @pytest.mark.asyncio
    async def test_unknown_field_rejected(self, store, fake_db):
        with pytest.raises(ValueError, match="Unknown session field"):
            await store.upsert_by_key("s1", {"bogus": 1}, {})
        assert fake_db.statements == []

    @pytest.mark.asyncio
    async def test_empty_set_fields_rejected(self, store):
        with pytest.raises(ValueError):
            await store.upsert_by_key("s1", {}, {"created_at": NOW})


class TestReads:

    @pytest.mark.asyncio
    async def test_find_by_key_projection(self, store, fake_db):
        fake_db.next_result = FakeResult(rows=[{"session_id": "s1", "total_score": 70}])
        doc = await store.find_by_key("s1", ["session_id", "total_score"])
        assert doc == {"session_id": "s1", "total_score": 70}

        sql = _sql(fake_db.statements[0])
        assert "SELECT questionnaire_sessions.session_id, questionnaire_sessions.total_score" in sql
        assert "WHERE questionnaire_sessions.session_id = " in sql

    @pytest.mark.asyncio
    async def test_find_by_key_missing(self, store, fake_db):
        fake_db.next_result = FakeResult(rows=[])
        assert await store.find_by_key("nope") is None

    @pytest.mark.asyncio
    async def test_find_many_sort_and_page(self, store, fake_db):
        fake_db.next_result = FakeResult(rows=[{"session_id": "a"}, {"session_id": "b"}])
        docs = await store.find_many(
            {"is_completed": True, "user_id": "u1"},
            sort=[("completed_at", -1)],
            skip=20,
            limit=10,
        )
        assert [d["session_id"] for d in docs] == ["a", "b"]

        sql = _sql(fake_db.statements[0])
        assert "questionnaire_sessions.is_completed" in sql
        assert "questionnaire_sessions.user_id = " in sql
        assert "ORDER BY questionnaire_sessions.completed_at DESC NULLS LAST" in sql
        assert "LIMIT" in sql and "OFFSET" in sql

    @pytest.mark.asyncio
    async def test_find_many_rejects_unknown_sort(self, store):
        with pytest.raises(ValueError):
            await store.find_many({}, sort=[("bogus", 1)])

    @pytest.mark.asyncio
    async def test_count_matching(self, store, fake_db):
        fake_db.next_result = FakeResult(scalar=4)
        assert await store.count_matching({"is_completed": True}) == 4
        assert "count(*)" in _sql(fake_db.statements[0])


class TestWrites:

    @pytest.mark.asyncio
    async def test_update_by_key(self, store, fake_db):
        fake_db.next_result = FakeResult(rowcount=1)
        assert await store.update_by_key("s1", {"total_score": 50}) is True
        fake_db.next_result = FakeResult(rowcount=0)
        assert await store.update_by_key("s1", {"total_score": 50}) is False

    @pytest.mark.asyncio
    async def test_delete_by_key(self, store, fake_db):
        fake_db.next_result = FakeResult(rowcount=1)
        assert await store.delete_by_key("s1") is True
        assert "DELETE FROM questionnaire_sessions" in _sql(fake_db.statements[0])


def test_document_fields_hide_primary_key():
    assert "id" not in DOCUMENT_FIELDS
    assert "session_id" in DOCUMENT_FIELDS
    assert "completed_at" in DOCUMENT_FIELDS
