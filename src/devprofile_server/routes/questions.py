"""Questionnaire endpoints — the form definition and stateless scoring."""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from devprofile_scoring.models.questionnaire import Questionnaire
from devprofile_scoring.models.score import ScoreBreakdown
from devprofile_scoring.questionnaire import QuestionnaireStore
from devprofile_scoring.scoring import ScoreCalculator

from devprofile_server.dependencies import get_calculator, get_questionnaire_store

router = APIRouter(tags=["questionnaire"])


class ScoreRequest(BaseModel):
    """Body for POST /score."""
    responses: dict[str, Any]


@router.get("/questions")
async def get_questionnaire(
    store: QuestionnaireStore = Depends(get_questionnaire_store),
) -> Questionnaire:
    """Return the active questionnaire definition."""
    return store.questionnaire


@router.post("/score")
async def score_responses(
    body: ScoreRequest,
    calculator: ScoreCalculator = Depends(get_calculator),
) -> ScoreBreakdown:
    """Score a response set without saving anything."""
    return calculator.score_breakdown(body.responses)
