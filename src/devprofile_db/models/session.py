"""QuestionnaireSession ORM model — one row per client session.

Responses and progress are JSONB so a session can be read back in a single
row fetch and the answer payload keeps whatever shape the client sent.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Index,
    SmallInteger,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column

from devprofile_db.models.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QuestionnaireSession(Base):
    """One row per questionnaire attempt, keyed by the client's session_id."""

    __tablename__ = "questionnaire_sessions"

    # --- Primary key ---
    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # --- Identity ---
    # Client-generated identifier; the upsert key
    session_id: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    # Set when the user is signed in
    user_id: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)
    questionnaire_id: Mapped[str] = mapped_column(Text, nullable=False)

    # --- Answers ---
    # Dict keyed by question id; values keep the client's answer shape
    responses: Mapped[dict] = mapped_column(
        JSONB,
        nullable=False,
        server_default=text("'{}'::jsonb"),
    )
    # {"currentStep": int, "totalSteps": int}
    progress: Mapped[dict] = mapped_column(
        JSONB,
        nullable=False,
        server_default=text("'{}'::jsonb"),
    )

    # --- Result ---
    total_score: Mapped[int] = mapped_column(SmallInteger, nullable=False, default=0)
    is_completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    # --- Timestamps ---
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=_utcnow,
    )
    started_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=_utcnow,
    )
    # Written once, the first time the final step is saved
    completed_at: Mapped[datetime | None] = mapped_column(
        TIMESTAMP(timezone=True), nullable=True
    )

    __table_args__ = (
        CheckConstraint(
            "total_score BETWEEN 0 AND 100",
            name="ck_total_score_range",
        ),
        CheckConstraint(
            "NOT is_completed OR completed_at IS NOT NULL",
            name="ck_completed_has_timestamp",
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<QuestionnaireSession(session={self.session_id!r}, "
            f"score={self.total_score}, completed={self.is_completed})>"
        )


# History listing: completed sessions, newest first
Index(
    "ix_completed_at_desc",
    QuestionnaireSession.completed_at.desc(),
    postgresql_where=QuestionnaireSession.is_completed,
)
