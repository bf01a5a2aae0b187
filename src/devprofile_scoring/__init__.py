"""devprofile_scoring — scoring and session SDK for the developer-profile questionnaire.

Public API:
    SessionService     — idempotent save / read / list of questionnaire sessions
    ScoreCalculator    — maps a response set to a bounded 0-100 score
    QuestionnaireStore — loads the questionnaire definition from YAML
    SessionStore       — ABC for the persistence backend
    UpsertOutcome      — result of ``SessionStore.upsert_by_key``

Functions:
    calculate_total_score      — score with a shared calculator
    calculate_tech_stack_score — score one multi-select tech question
    extract / classify         — answer-shape normalisation
"""

from devprofile_scoring.answers import (
    Absent,
    Answer,
    Listing,
    Scalar,
    Wrapped,
    classify,
    extract,
)
from devprofile_scoring.interfaces import SessionStore, UpsertOutcome
from devprofile_scoring.models import (
    Progress,
    Questionnaire,
    SaveSessionRequest,
    SaveSessionResult,
    ScoreBreakdown,
    ScoreUpdateResult,
    SessionDocument,
    SessionPage,
)
from devprofile_scoring.questionnaire import QuestionnaireStore
from devprofile_scoring.scoring import (
    ScoreCalculator,
    calculate_tech_stack_score,
    calculate_total_score,
)
from devprofile_scoring.service import SessionService

__all__ = [
    # Services
    "QuestionnaireStore",
    "ScoreCalculator",
    "SessionService",
    "SessionStore",
    "UpsertOutcome",
    # Functions
    "calculate_tech_stack_score",
    "calculate_total_score",
    "classify",
    "extract",
    # Answer variants
    "Absent",
    "Answer",
    "Listing",
    "Scalar",
    "Wrapped",
    # Models
    "Progress",
    "Questionnaire",
    "SaveSessionRequest",
    "SaveSessionResult",
    "ScoreBreakdown",
    "ScoreUpdateResult",
    "SessionDocument",
    "SessionPage",
]
