"""Create the questionnaire_sessions table.

One row per client session.  ``session_id`` is unique (the upsert key);
``completed_at`` gets a descending partial index for the history listing
and ``user_id`` a plain index for per-user filtering.

Revision ID: 20241015_sessions
Revises:
Create Date: 2024-10-15
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# revision identifiers, used by Alembic.
revision = "20241015_sessions"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "questionnaire_sessions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("session_id", sa.Text(), nullable=False),
        sa.Column("user_id", sa.Text(), nullable=True),
        sa.Column("questionnaire_id", sa.Text(), nullable=False),
        sa.Column(
            "responses", JSONB(), nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column(
            "progress", JSONB(), nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("total_score", sa.SmallInteger(), nullable=False),
        sa.Column(
            "is_completed", sa.Boolean(), nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column("created_at", TIMESTAMP(timezone=True), nullable=False),
        sa.Column("started_at", TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", TIMESTAMP(timezone=True), nullable=False),
        sa.Column("completed_at", TIMESTAMP(timezone=True), nullable=True),
        sa.UniqueConstraint("session_id", name="questionnaire_sessions_session_id_key"),
        sa.CheckConstraint(
            "total_score BETWEEN 0 AND 100", name="ck_total_score_range",
        ),
        sa.CheckConstraint(
            "NOT is_completed OR completed_at IS NOT NULL",
            name="ck_completed_has_timestamp",
        ),
    )

    op.create_index(
        "ix_questionnaire_sessions_user_id",
        "questionnaire_sessions",
        ["user_id"],
    )
    op.create_index(
        "ix_completed_at_desc",
        "questionnaire_sessions",
        [sa.text("completed_at DESC")],
        postgresql_where=sa.text("is_completed"),
    )


def downgrade() -> None:
    op.drop_index("ix_completed_at_desc", table_name="questionnaire_sessions")
    op.drop_index("ix_questionnaire_sessions_user_id", table_name="questionnaire_sessions")
    op.drop_table("questionnaire_sessions")
