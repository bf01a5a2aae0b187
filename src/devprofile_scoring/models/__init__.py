"""Pydantic models shared by the SDK and the API server."""

from devprofile_scoring.models.questionnaire import (
    Question,
    QuestionOption,
    Questionnaire,
    Step,
    TextValidation,
)
from devprofile_scoring.models.score import ScoreBreakdown
from devprofile_scoring.models.session import (
    Progress,
    SaveSessionRequest,
    SaveSessionResult,
    ScoreUpdateResult,
    SessionDocument,
    SessionPage,
)

__all__ = [
    "Progress",
    "Question",
    "QuestionOption",
    "Questionnaire",
    "SaveSessionRequest",
    "SaveSessionResult",
    "ScoreBreakdown",
    "ScoreUpdateResult",
    "SessionDocument",
    "SessionPage",
    "Step",
    "TextValidation",
]
