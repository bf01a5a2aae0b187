"""SqlSessionStore — PostgreSQL implementation of ``SessionStore``.

Each public method opens its own session and transaction, so every call is
atomic on its own and nothing spans calls.  Documents are plain dicts keyed
by column name; the surrogate ``id`` primary key is never exposed.

The upsert is a single ``INSERT .. ON CONFLICT (session_id) DO UPDATE``
statement.  ``RETURNING (xmax = 0)`` reports whether the row was freshly
inserted: PostgreSQL leaves ``xmax`` at zero for a new tuple and sets it
when the conflict branch updated an existing one.
"""

from __future__ import annotations

from typing import Any, Iterable

from sqlalchemy import Column, delete, func, literal_column, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert

from devprofile_db.engine import Database
from devprofile_db.models.session import QuestionnaireSession
from devprofile_scoring.interfaces import SessionStore, UpsertOutcome

_TABLE = QuestionnaireSession.__table__

# Every column except the surrogate primary key is a document field.
DOCUMENT_FIELDS: tuple[str, ...] = tuple(c.name for c in _TABLE.columns if c.name != "id")


def _column(name: str) -> Column:
    """Map a document field name to its column; reject unknown names."""
    if name not in DOCUMENT_FIELDS:
        raise ValueError(f"Unknown session field: {name!r}")
    return _TABLE.c[name]


def _where(filter: dict[str, Any]) -> list:
    return [_column(name) == value for name, value in filter.items()]


class SqlSessionStore(SessionStore):
    """Async read/write operations on the ``questionnaire_sessions`` table."""

    def __init__(self, database: Database) -> None:
        self._db = database

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def upsert_by_key(
        self,
        key: str,
        set_fields: dict[str, Any],
        set_on_insert: dict[str, Any],
        set_if_null: dict[str, Any] | None = None,
    ) -> UpsertOutcome:
        if not set_fields:
            raise ValueError("upsert_by_key needs at least one field to set")
        set_if_null = set_if_null or {}

        values = {**set_on_insert, **set_if_null, **set_fields, "session_id": key}
        for name in values:
            _column(name)

        stmt = pg_insert(QuestionnaireSession).values(**values)
        update_cols: dict[str, Any] = {
            name: stmt.excluded[name] for name in set_fields
        }
        for name in set_if_null:
            update_cols[name] = func.coalesce(_TABLE.c[name], stmt.excluded[name])

        stmt = stmt.on_conflict_do_update(
            index_elements=[_TABLE.c.session_id],
            set_=update_cols,
        ).returning(literal_column("(xmax = 0)").label("inserted"))

        factory = await self._db.get_session_factory()
        async with factory() as session, session.begin():
            result = await session.execute(stmt)
            inserted = bool(result.scalar_one())

        # An update always rewrites updated_at, so any non-insert changed the row
        return UpsertOutcome(inserted=inserted, changed=not inserted)

    async def update_by_key(self, key: str, set_fields: dict[str, Any]) -> bool:
        for name in set_fields:
            _column(name)
        stmt = (
            update(QuestionnaireSession)
            .where(_TABLE.c.session_id == key)
            .values(**set_fields)
        )
        factory = await self._db.get_session_factory()
        async with factory() as session, session.begin():
            result = await session.execute(stmt)
        return result.rowcount > 0

    async def delete_by_key(self, key: str) -> bool:
        stmt = delete(QuestionnaireSession).where(_TABLE.c.session_id == key)
        factory = await self._db.get_session_factory()
        async with factory() as session, session.begin():
            result = await session.execute(stmt)
        return result.rowcount > 0

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def find_by_key(
        self, key: str, fields: Iterable[str] | None = None
    ) -> dict[str, Any] | None:
        columns = [_column(f) for f in (fields or DOCUMENT_FIELDS)]
        stmt = select(*columns).where(_TABLE.c.session_id == key)
        factory = await self._db.get_session_factory()
        async with factory() as session:
            row = (await session.execute(stmt)).mappings().first()
        return dict(row) if row is not None else None

    async def find_many(
        self,
        filter: dict[str, Any],
        sort: list[tuple[str, int]] | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        stmt = select(*(_TABLE.c[f] for f in DOCUMENT_FIELDS)).where(*_where(filter))
        for name, direction in sort or []:
            col = _column(name)
            stmt = stmt.order_by(col.desc().nulls_last() if direction < 0 else col.asc())
        if skip:
            stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)

        factory = await self._db.get_session_factory()
        async with factory() as session:
            rows = (await session.execute(stmt)).mappings().all()
        return [dict(r) for r in rows]

    async def count_matching(self, filter: dict[str, Any]) -> int:
        stmt = select(func.count()).select_from(_TABLE).where(*_where(filter))
        factory = await self._db.get_session_factory()
        async with factory() as session:
            return (await session.execute(stmt)).scalar_one()
