"""History endpoint — completed sessions, most recently completed first."""

from fastapi import APIRouter, Depends, Query

from devprofile_scoring.models.session import SessionPage
from devprofile_scoring.service import SessionService

from devprofile_server.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from devprofile_server.dependencies import get_service

router = APIRouter(tags=["history"])


@router.get("/history")
async def list_history(
    service: SessionService = Depends(get_service),
    user_id: str | None = Query(None, alias="userId"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> SessionPage:
    """Return one page of completed sessions, optionally for one user."""
    return await service.list_completed_sessions(
        user_id=user_id, page=page, limit=limit,
    )
