"""SessionService — idempotent save and retrieval of questionnaire sessions.

Stateless service pattern: every call goes straight to the injected
:class:`SessionStore`; nothing is cached between calls, so concurrent
requests only share the store handle.

Save semantics (one upsert per call, keyed by the client's ``session_id``):

    always          responses, progress, total_score, user_id, updated_at
    on insert       created_at, started_at, questionnaire_id
    on final step   is_completed = True, completed_at (first time only)

Completion is sticky: a later save on an earlier step does not clear it.
Two concurrent saves for the same ``session_id`` resolve at the store's
upsert as last-write-wins; no application lock is taken.

Store errors propagate unchanged; the caller maps them to a response.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from devprofile_scoring.constants import MAX_TOTAL_SCORE, QUESTIONNAIRE_ID
from devprofile_scoring.interfaces import SessionStore
from devprofile_scoring.models.session import (
    SaveSessionRequest,
    SaveSessionResult,
    ScoreUpdateResult,
    SessionDocument,
    SessionPage,
)
from devprofile_scoring.scoring import ScoreCalculator

logger = logging.getLogger(__name__)

# Fields returned by get_session_by_id
SESSION_FIELDS: tuple[str, ...] = (
    "session_id",
    "responses",
    "progress",
    "total_score",
    "user_id",
    "is_completed",
    "questionnaire_id",
    "created_at",
    "started_at",
    "updated_at",
    "completed_at",
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionService:
    """Saves, reads and lists questionnaire sessions.

    Args:
        store: the persistence backend
        calculator: score calculator (a fresh :class:`ScoreCalculator` by default)
        questionnaire_id: identifier stamped on new sessions
        now: clock returning timezone-aware datetimes
    """

    def __init__(
        self,
        store: SessionStore,
        *,
        calculator: ScoreCalculator | None = None,
        questionnaire_id: str = QUESTIONNAIRE_ID,
        now: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._calculator = calculator or ScoreCalculator()
        self._questionnaire_id = questionnaire_id
        self._now = now

    # ==================================================================
    # Write
    # ==================================================================

    async def save_session(self, request: SaveSessionRequest) -> SaveSessionResult:
        """Create or update the session named by ``request.session_id``.

        The score is the caller's ``total_score`` when supplied, otherwise
        it is computed from ``request.responses``.
        """
        if request.total_score is not None:
            score = request.total_score
        else:
            score = self._calculator.calculate_total_score(request.responses)

        now = self._now()
        set_fields: dict[str, Any] = {
            "responses": request.responses,
            "progress": request.progress.model_dump(by_alias=True),
            "total_score": score,
            "user_id": request.user_id or None,
            "updated_at": now,
        }
        set_on_insert: dict[str, Any] = {
            "created_at": now,
            "started_at": now,
            "questionnaire_id": self._questionnaire_id,
        }
        set_if_null: dict[str, Any] = {}

        if request.progress.is_final:
            set_fields["is_completed"] = True
            set_if_null["completed_at"] = now
        else:
            set_on_insert["is_completed"] = False
            set_on_insert["completed_at"] = None

        outcome = await self._store.upsert_by_key(
            request.session_id, set_fields, set_on_insert, set_if_null,
        )

        logger.info(
            "Session %s %s: score=%d step=%d/%d",
            request.session_id,
            "created" if outcome.inserted else "updated",
            score,
            request.progress.current_step,
            request.progress.total_steps,
        )
        return SaveSessionResult(
            session_id=request.session_id,
            created=outcome.inserted,
            modified=outcome.changed,
            calculated_score=score,
        )

    async def update_session_score(
        self, session_id: str, new_score: int
    ) -> ScoreUpdateResult:
        """Overwrite the stored score of an existing session.

        ``modified`` is False when the session does not exist.
        """
        if not 0 <= new_score <= MAX_TOTAL_SCORE:
            raise ValueError(f"Score out of range 0-{MAX_TOTAL_SCORE}: {new_score}")
        modified = await self._store.update_by_key(
            session_id, {"total_score": new_score, "updated_at": self._now()},
        )
        if modified:
            logger.info("Session %s score set to %d", session_id, new_score)
        return ScoreUpdateResult(session_id=session_id, modified=modified)

    async def delete_session(self, session_id: str) -> bool:
        """Permanently delete a session.  Returns False if it did not exist."""
        deleted = await self._store.delete_by_key(session_id)
        if deleted:
            logger.info("Session %s deleted", session_id)
        return deleted

    # ==================================================================
    # Read
    # ==================================================================

    async def get_session_by_id(self, session_id: str) -> SessionDocument | None:
        """Return the session or None if it does not exist."""
        doc = await self._store.find_by_key(session_id, SESSION_FIELDS)
        if doc is None:
            logger.debug("Session %s not found", session_id)
            return None
        return SessionDocument.model_validate(doc)

    async def list_completed_sessions(
        self,
        *,
        user_id: str | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> SessionPage:
        """List completed sessions, most recently completed first.

        *page* is 1-based.  *user_id* narrows the listing to one user.
        """
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")

        filter: dict[str, Any] = {"is_completed": True}
        if user_id is not None:
            filter["user_id"] = user_id

        docs = await self._store.find_many(
            filter,
            sort=[("completed_at", -1)],
            skip=(page - 1) * limit,
            limit=limit,
        )
        total = await self._store.count_matching(filter)
        logger.debug("Listed %d/%d completed sessions (page=%d)", len(docs), total, page)
        return SessionPage(
            items=[SessionDocument.model_validate(d) for d in docs],
            total=total,
            page=page,
            limit=limit,
        )
