"""devprofile_db — PostgreSQL persistence layer for questionnaire sessions.

This package provides the ORM model, the lazily-initialised database handle,
and ``SqlSessionStore``, the ``SessionStore`` implementation used by the
API server.
"""

from devprofile_db.engine import Database
from devprofile_db.models.session import QuestionnaireSession
from devprofile_db.repository import SqlSessionStore

__all__ = [
    "Database",
    "QuestionnaireSession",
    "SqlSessionStore",
]
