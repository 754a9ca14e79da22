"""
Record store package for Badge Forge.

Exports the store protocols plus the in-memory and Postgres implementations.
"""

from badge_forge.store.abstract import ActivityStore, RecordStore, UserStore, parse_bigint_id
from badge_forge.store.memory import InMemoryRecordStore
from badge_forge.store.postgres import PostgresRecordStore

__all__ = [
    "ActivityStore",
    "InMemoryRecordStore",
    "PostgresRecordStore",
    "RecordStore",
    "UserStore",
    "parse_bigint_id",
]
