"""ORM models for devprofile_db."""

from devprofile_db.models.base import Base
from devprofile_db.models.session import QuestionnaireSession

__all__ = ["Base", "QuestionnaireSession"]
