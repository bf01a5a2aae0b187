"""Server configuration — reads settings from environment variables.

All settings have sensible defaults for local development.  In production
the values are typically overridden via env vars or a ``.env`` file.
"""

import os
from dataclasses import dataclass, field

# --- Pagination defaults ---
# Module-level constants read at import time so FastAPI Query() defaults
# can reference them (Query defaults must be static at decoration time).
DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", "20"))
MAX_PAGE_LIMIT = int(os.getenv("MAX_PAGE_LIMIT", "100"))


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ServerSettings:
    """Immutable server configuration read from environment at startup."""

    # Network
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS: comma-separated origins, or "*" for wide-open dev mode
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    # Development mode: include exception text in 5xx bodies
    expose_errors: bool = False

    # Questionnaire YAML (None → the definition packaged with the SDK)
    questionnaire_file: str | None = None


def load_settings() -> ServerSettings:
    """Build settings from ``SERVER_*`` environment variables."""
    raw_origins = os.getenv("SERVER_CORS_ORIGINS", "*")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]

    return ServerSettings(
        host=os.getenv("SERVER_HOST", "0.0.0.0"),
        port=int(os.getenv("SERVER_PORT", "8080")),
        cors_origins=origins,
        log_level=os.getenv("SERVER_LOG_LEVEL", "INFO").upper(),
        expose_errors=_env_flag("SERVER_EXPOSE_ERRORS"),
        questionnaire_file=os.getenv("QUESTIONNAIRE_FILE") or None,
    )
