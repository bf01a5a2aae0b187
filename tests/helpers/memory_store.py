"""In-memory SessionStore used across the test suite.

Stores documents in a dict keyed by ``session_id`` and mirrors the
behaviour of ``SqlSessionStore``: set-on-insert fields only on creation,
write-once ``set_if_null`` fields, ``changed`` true when any stored value
differs after an update.
"""

import copy
from typing import Any, Iterable

from devprofile_scoring.interfaces import SessionStore, UpsertOutcome


class InMemorySessionStore(SessionStore):
    """Dict-backed store.  ``fail_with`` makes every call raise that exception."""

    def __init__(self):
        self.documents: dict[str, dict[str, Any]] = {}
        self.fail_with: Exception | None = None
        self.upsert_calls = 0

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    @staticmethod
    def _matches(doc, filter):
        return all(doc.get(k) == v for k, v in filter.items())

    async def upsert_by_key(self, key, set_fields, set_on_insert, set_if_null=None):
        self._check()
        self.upsert_calls += 1
        set_if_null = set_if_null or {}
        existing = self.documents.get(key)
        if existing is None:
            doc = {"session_id": key}
            doc.update(copy.deepcopy(set_on_insert))
            doc.update(copy.deepcopy(set_if_null))
            doc.update(copy.deepcopy(set_fields))
            self.documents[key] = doc
            return UpsertOutcome(inserted=True, changed=False)

        before = copy.deepcopy(existing)
        existing.update(copy.deepcopy(set_fields))
        for name, value in set_if_null.items():
            if existing.get(name) is None:
                existing[name] = value
        return UpsertOutcome(inserted=False, changed=existing != before)

    async def find_by_key(self, key, fields: Iterable[str] | None = None):
        self._check()
        doc = self.documents.get(key)
        if doc is None:
            return None
        if fields is None:
            return copy.deepcopy(doc)
        return {f: copy.deepcopy(doc.get(f)) for f in fields}

    async def find_many(self, filter, sort=None, skip=0, limit=None):
        self._check()
        docs = [d for d in self.documents.values() if self._matches(d, filter)]
        # Apply sort keys last-to-first so the first key dominates; nulls last
        for name, direction in reversed(sort or []):
            present = [d for d in docs if d.get(name) is not None]
            missing = [d for d in docs if d.get(name) is None]
            present.sort(key=lambda d: d[name], reverse=direction < 0)
            docs = present + missing
        end = None if limit is None else skip + limit
        return [copy.deepcopy(d) for d in docs[skip:end]]

    async def count_matching(self, filter):
        self._check()
        return sum(1 for d in self.documents.values() if self._matches(d, filter))

    async def update_by_key(self, key, set_fields):
        self._check()
        doc = self.documents.get(key)
        if doc is None:
            return False
        doc.update(copy.deepcopy(set_fields))
        return True

    async def delete_by_key(self, key):
        self._check()
        return self.documents.pop(key, None) is not None
