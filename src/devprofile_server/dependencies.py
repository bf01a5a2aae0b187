"""FastAPI dependency injection — hands routes the objects built at startup.

The lifespan handler stashes the session service, score calculator and
questionnaire store on ``app.state``; these helpers read them back per
request.
"""

from fastapi import Request

from devprofile_scoring.questionnaire import QuestionnaireStore
from devprofile_scoring.scoring import ScoreCalculator
from devprofile_scoring.service import SessionService


def get_service(request: Request) -> SessionService:
    """Return the session service singleton from ``app.state``."""
    return request.app.state.service


def get_calculator(request: Request) -> ScoreCalculator:
    """Return the shared score calculator from ``app.state``."""
    return request.app.state.calculator


def get_questionnaire_store(request: Request) -> QuestionnaireStore:
    """Return the loaded questionnaire store from ``app.state``."""
    return request.app.state.questionnaire
