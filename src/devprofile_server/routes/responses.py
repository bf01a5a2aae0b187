"""Session endpoints — save progress, read back, correct or delete a session.

The client generates ``sessionId`` and posts the whole answer set on every
step; the server upserts it, computes the score unless one is supplied, and
marks the session completed once the final step is saved.
"""

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from devprofile_scoring.models.score import ScoreBreakdown
from devprofile_scoring.models.session import (
    SaveSessionRequest,
    SaveSessionResult,
    ScoreUpdateResult,
    SessionDocument,
)
from devprofile_scoring.scoring import ScoreCalculator
from devprofile_scoring.service import SessionService

from devprofile_server.dependencies import get_calculator, get_service

router = APIRouter(tags=["responses"])


# ------------------------------------------------------------------
# Request / response models
# ------------------------------------------------------------------

class SaveSessionResponse(SaveSessionResult):
    """Body returned by POST /responses."""
    message: str


class ScoreUpdateRequest(BaseModel):
    """Body for PUT /responses/{session_id}/score."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    new_score: int = Field(ge=0, le=100)


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.post("/responses")
async def save_responses(
    body: SaveSessionRequest,
    response: Response,
    service: SessionService = Depends(get_service),
) -> SaveSessionResponse:
    """Save the current answers of a session.

    Returns 201 when the session was created by this call, 200 otherwise.
    """
    result = await service.save_session(body)
    response.status_code = 201 if result.created else 200
    message = (
        "Session created and score calculated"
        if result.created
        else "Progress saved and score updated"
    )
    return SaveSessionResponse(**result.model_dump(), message=message)


@router.get("/responses/{session_id}")
async def get_session(
    session_id: str,
    service: SessionService = Depends(get_service),
) -> SessionDocument:
    """Return one session.  Raises 404 if it does not exist."""
    session = await service.get_session_by_id(session_id)
    if session is None:
        raise ValueError(f"Session not found: session_id={session_id}")
    return session


@router.get("/responses/{session_id}/score")
async def get_score_breakdown(
    session_id: str,
    service: SessionService = Depends(get_service),
    calculator: ScoreCalculator = Depends(get_calculator),
) -> ScoreBreakdown:
    """Recompute the score of a stored session and return every step of it."""
    session = await service.get_session_by_id(session_id)
    if session is None:
        raise ValueError(f"Session not found: session_id={session_id}")
    return calculator.score_breakdown(session.responses)


@router.put("/responses/{session_id}/score")
async def update_score(
    session_id: str,
    body: ScoreUpdateRequest,
    service: SessionService = Depends(get_service),
) -> ScoreUpdateResult:
    """Manually correct the stored score of a session."""
    result = await service.update_session_score(session_id, body.new_score)
    if not result.modified:
        raise ValueError(f"Session not found: session_id={session_id}")
    return result


@router.delete("/responses/{session_id}", status_code=204)
async def delete_session(
    session_id: str,
    service: SessionService = Depends(get_service),
) -> None:
    """Permanently delete a session.  Returns 204, or 404 if it does not exist."""
    if not await service.delete_session(session_id):
        raise ValueError(f"Session not found: session_id={session_id}")
