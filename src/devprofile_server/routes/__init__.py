"""Route registration — mounts all routers under ``/api``."""

from fastapi import FastAPI

from devprofile_server.routes.history import router as history_router
from devprofile_server.routes.questions import router as questions_router
from devprofile_server.routes.responses import router as responses_router

API_PREFIX = "/api"


def register_routes(app: FastAPI) -> None:
    """Include all sub-routers under the API prefix."""
    app.include_router(responses_router, prefix=API_PREFIX)
    app.include_router(history_router, prefix=API_PREFIX)
    app.include_router(questions_router, prefix=API_PREFIX)
