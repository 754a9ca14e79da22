"""
Infrastructure package for Badge Forge.

Centralizes database connectivity concerns (sync connections, async pools).
Keep this layer focused on I/O and resource management, decoupled from the
queue, engine and processor.
"""

from badge_forge.infrastructure.db_factory import (
    build_dsn,
    create_async_pool,
    get_sync_connection,
    open_async_pool,
)

__all__ = [
    "build_dsn",
    "create_async_pool",
    "get_sync_connection",
    "open_async_pool",
]
