"""Connection settings for the questionnaire_sessions database.

``DATABASE_URL`` wins when set.  Otherwise the URL is assembled from
``PG_HOST`` / ``PG_PORT`` / ``PG_USER`` / ``PG_PASSWORD`` / ``PG_DATABASE``,
defaulting to a local ``questionnaire_db`` owned by ``devprofile``.

The same location is handed out with two drivers: plain ``postgresql://``
(psycopg2) for Alembic, ``postgresql+asyncpg://`` for the server.
"""

import os

_SYNC_SCHEME = "postgresql://"
_ASYNC_SCHEME = "postgresql+asyncpg://"


def _configured_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    return "{scheme}{user}:{password}@{host}:{port}/{db}".format(
        scheme=_SYNC_SCHEME,
        user=os.getenv("PG_USER", "devprofile"),
        password=os.getenv("PG_PASSWORD", "devprofile"),
        host=os.getenv("PG_HOST", "localhost"),
        port=os.getenv("PG_PORT", "5432"),
        db=os.getenv("PG_DATABASE", "questionnaire_db"),
    )


def get_sync_url() -> str:
    """URL for Alembic migrations (psycopg2)."""
    url = _configured_url()
    if url.startswith(_ASYNC_SCHEME):
        return _SYNC_SCHEME + url[len(_ASYNC_SCHEME):]
    return url


def get_async_url() -> str:
    """URL for the runtime engine (asyncpg)."""
    url = _configured_url()
    if url.startswith(_SYNC_SCHEME):
        return _ASYNC_SCHEME + url[len(_SYNC_SCHEME):]
    return url


def get_pool_size() -> int:
    """Persistent connections kept by the runtime pool."""
    return int(os.getenv("PG_POOL_SIZE", "5"))


def get_max_overflow() -> int:
    """Extra connections allowed above ``get_pool_size()`` under load."""
    return int(os.getenv("PG_MAX_OVERFLOW", "10"))
