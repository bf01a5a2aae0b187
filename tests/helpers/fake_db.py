"""Fakes for exercising devprofile_db without a running PostgreSQL.

``FakeEngine`` stands in for ``AsyncEngine`` inside ``Database``;
``FakeDatabase`` hands ``SqlSessionStore`` a session factory whose sessions
record every executed statement and return canned results.
"""

import asyncio


class FakeConnection:
    def __init__(self, engine):
        self._engine = engine

    async def __aenter__(self):
        # Yield to the loop so concurrent initialisers interleave
        await asyncio.sleep(0)
        if self._engine.fail_connect:
            raise OSError("connection refused")
        return self

    async def __aexit__(self, *exc):
        return False

    async def execute(self, stmt):
        self._engine.executed.append(str(stmt))


class FakeEngine:
    def __init__(self, url, fail_connect=False, **kwargs):
        self.url = url
        self.kwargs = kwargs
        self.fail_connect = fail_connect
        self.executed = []
        self.disposed = False

    def connect(self):
        return FakeConnection(self)

    async def dispose(self):
        self.disposed = True


class FakeResult:
    def __init__(self, scalar=None, rowcount=0, rows=()):
        self._scalar = scalar
        self.rowcount = rowcount
        self._rows = list(rows)

    def scalar_one(self):
        return self._scalar

    def mappings(self):
        return self

    def first(self):
        return self._rows[0] if self._rows else None

    def all(self):
        return self._rows


class _Transaction:
    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    def __init__(self, db):
        self._db = db

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    def begin(self):
        return _Transaction()

    async def execute(self, stmt):
        self._db.statements.append(stmt)
        return self._db.next_result


class FakeDatabase:
    """Quacks like ``devprofile_db.Database`` for ``SqlSessionStore``."""

    def __init__(self):
        self.statements = []
        self.next_result = FakeResult()

    async def get_session_factory(self):
        return lambda: FakeSession(self)
