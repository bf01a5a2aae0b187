"""Alembic entry point for the questionnaire_sessions schema.

Migrations always run over a synchronous psycopg2 connection; the URL in
``alembic.ini`` is only a placeholder and is replaced by
``devprofile_db.config.get_sync_url()`` before anything connects.

    alembic upgrade head           # apply against the configured database
    alembic upgrade head --sql     # print the DDL instead
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from devprofile_db.config import get_sync_url
from devprofile_db.models import Base

alembic_cfg = context.config
alembic_cfg.set_main_option("sqlalchemy.url", get_sync_url())

if alembic_cfg.config_file_name is not None:
    fileConfig(alembic_cfg.config_file_name)

# devprofile_db.models registers QuestionnaireSession on this metadata
target_metadata = Base.metadata


def emit_sql() -> None:
    """Write the migration DDL to stdout without a database connection."""
    context.configure(
        url=alembic_cfg.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def apply_to_database() -> None:
    """Open one unpooled connection and apply pending revisions on it."""
    engine = engine_from_config(
        alembic_cfg.get_section(alembic_cfg.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    emit_sql()
else:
    apply_to_database()
