"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that loads the questionnaire and wires the session
    service to its store once
  - CORS middleware
  - Global exception handlers (validation → 400, ValueError → 404/400,
    storage → 503, anything else → 500)
  - All API routes mounted under ``/api``
  - A ``/health`` endpoint for readiness probes

The ``cli()`` function is the ``devprofile-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from devprofile_db.engine import Database
from devprofile_db.repository import SqlSessionStore
from devprofile_scoring.interfaces import SessionStore
from devprofile_scoring.questionnaire import QuestionnaireStore
from devprofile_scoring.scoring import ScoreCalculator
from devprofile_scoring.service import SessionService

from devprofile_server.config import ServerSettings, load_settings
from devprofile_server.errors import (
    generic_error_handler,
    request_validation_handler,
    store_error_handler,
    value_error_handler,
)
from devprofile_server.routes import register_routes

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan, runs once at startup/shutdown
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialise shared resources at startup, tear down on shutdown.

    Startup:
      1. Load the questionnaire definition
      2. Use the injected session store, or build a ``Database`` handle
         and ``SqlSessionStore`` (the engine itself connects lazily on
         first use)
      3. Stash the service, calculator and questionnaire on ``app.state``

    Shutdown:
      1. Dispose the database connection pool, if one was built
    """
    settings: ServerSettings = app.state.settings

    questionnaire = QuestionnaireStore(settings.questionnaire_file)
    questionnaire.load()

    database: Database | None = None
    store: SessionStore | None = app.state.session_store
    if store is None:
        database = Database()
        store = SqlSessionStore(database)

    calculator = ScoreCalculator()
    app.state.database = database
    app.state.questionnaire = questionnaire
    app.state.calculator = calculator
    app.state.service = SessionService(
        store,
        calculator=calculator,
        questionnaire_id=questionnaire.questionnaire.id,
    )

    yield

    if database is not None:
        await database.dispose()


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def create_app(
    settings: ServerSettings | None = None,
    *,
    session_store: SessionStore | None = None,
) -> FastAPI:
    """Build and return the configured FastAPI application.

    *session_store* replaces the PostgreSQL store (used by tests).
    """
    if settings is None:
        settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Developer Profile API",
        description="REST API for the developer-profile questionnaire",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.session_store = session_store
    app.state.database = None

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Exception handlers ---
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # --- Health check (outside /api prefix) ---
    @app.get("/health")
    async def health() -> dict:
        """Readiness probe — verifies DB connectivity when a database is in use."""
        database: Database | None = app.state.database
        if database is None:
            return {"status": "ok"}
        try:
            await database.ping()
            return {"status": "ok"}
        except Exception as exc:
            logger.error("Health check failed: %s", exc)
            return {"status": "error", "detail": "database unreachable"}

    register_routes(app)

    return app


# ------------------------------------------------------------------
# CLI entry point
# ------------------------------------------------------------------

def cli() -> None:
    """Console-script entry point: ``devprofile-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "devprofile_server.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
