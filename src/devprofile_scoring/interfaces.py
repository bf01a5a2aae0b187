"""Abstract persistence interface consumed by the session service.

The SDK ships no concrete store; ``devprofile_db.SqlSessionStore`` is the
PostgreSQL implementation and the test suite uses an in-memory one.

Documents are plain dicts keyed by the snake_case field names of
:class:`~devprofile_scoring.models.session.SessionDocument`.  Filters are
equality maps over those names; sort specs are ``(field, direction)``
pairs with direction ``1`` (ascending) or ``-1`` (descending).

Only single-document atomicity is required: ``upsert_by_key`` must insert
or update one document atomically, nothing more.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable


@dataclass(frozen=True)
class UpsertOutcome:
    """What an upsert did: inserted a new document or changed an existing one."""

    inserted: bool
    changed: bool


class SessionStore(ABC):
    """Keyed document store holding one document per ``session_id``."""

    @abstractmethod
    async def upsert_by_key(
        self,
        key: str,
        set_fields: dict[str, Any],
        set_on_insert: dict[str, Any],
        set_if_null: dict[str, Any] | None = None,
    ) -> UpsertOutcome:
        """Insert or update the document whose ``session_id`` is *key*.

        Parameters
        ----------
        set_fields:
            Written on insert and on every update.
        set_on_insert:
            Written only when the document is created.
        set_if_null:
            Written on insert, and on update only where the stored value
            is null (write-once fields such as ``completed_at``).
        """
        ...

    @abstractmethod
    async def find_by_key(
        self, key: str, fields: Iterable[str] | None = None
    ) -> dict[str, Any] | None:
        """Return the document for *key*, optionally projected to *fields*."""
        ...

    @abstractmethod
    async def find_many(
        self,
        filter: dict[str, Any],
        sort: list[tuple[str, int]] | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return documents matching *filter* in *sort* order."""
        ...

    @abstractmethod
    async def count_matching(self, filter: dict[str, Any]) -> int:
        """Count documents matching *filter*."""
        ...

    @abstractmethod
    async def update_by_key(self, key: str, set_fields: dict[str, Any]) -> bool:
        """Update an existing document.  Returns False if *key* is unknown."""
        ...

    @abstractmethod
    async def delete_by_key(self, key: str) -> bool:
        """Delete the document for *key*.  Returns False if it did not exist."""
        ...
