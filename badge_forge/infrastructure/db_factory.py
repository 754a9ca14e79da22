"""
Database connection factory utilities for Badge Forge.

Provides centralized construction of the sync connection used by scripts and
the async connection pool backing the Postgres record store. Opening is
wrapped with retry logic for transient connection failures using tenacity;
queries issued afterwards are never retried.
"""

from __future__ import annotations

from typing import Optional

import psycopg
from psycopg import Connection
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from badge_forge.config import Settings, get_settings
from badge_forge.utils.logging import get_logger

log = get_logger(__name__)


def build_dsn(settings: Optional[Settings] = None) -> str:
    """Compose a DSN string from settings."""
    return (settings or get_settings()).dsn


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_sync_connection(dsn: Optional[str] = None) -> Connection:
    """
    Acquire a dedicated synchronous connection with automatic retry.

    Retries up to 3 times with exponential backoff for transient connection errors.
    Use this for one-off operations such as seeding.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    return psycopg.connect(dsn or build_dsn())


def create_async_pool(
    dsn: Optional[str] = None,
    min_size: Optional[int] = None,
    max_size: Optional[int] = None,
) -> AsyncConnectionPool:
    """
    Build (but do not open) the async pool used by the Postgres record store.

    Rows come back as dicts so they map straight onto the domain models.
    """
    settings = get_settings()
    return AsyncConnectionPool(
        conninfo=dsn or settings.dsn,
        min_size=min_size or settings.db_pool_min_size,
        max_size=max_size or settings.db_pool_max_size,
        kwargs={"row_factory": dict_row},
        open=False,
    )


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, OSError)),
    reraise=True,
)
async def open_async_pool(
    dsn: Optional[str] = None,
    min_size: Optional[int] = None,
    max_size: Optional[int] = None,
    timeout: float = 10.0,
) -> AsyncConnectionPool:
    """
    Create and open the async pool, waiting until ``min_size`` connections exist.

    Retries up to 3 times with exponential backoff before giving up.
    """
    pool = create_async_pool(dsn=dsn, min_size=min_size, max_size=max_size)
    try:
        await pool.open(wait=True, timeout=timeout)
    except Exception:
        await pool.close()
        raise
    log.info("Connected to Postgres", extra={"min_size": pool.min_size, "max_size": pool.max_size})
    return pool


__all__ = [
    "build_dsn",
    "create_async_pool",
    "get_sync_connection",
    "open_async_pool",
]
