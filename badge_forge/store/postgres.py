"""
Postgres-backed record store.

Reads users and recipes through a psycopg AsyncConnectionPool and writes the
recomputed level, badges and verified flag back as a single UPDATE. Driver
and row-mapping errors are wrapped in StoreError; nothing is retried here.
"""

from __future__ import annotations

from typing import List, Optional

import psycopg
from psycopg_pool import AsyncConnectionPool
from pydantic import ValidationError

from badge_forge.domain.models import ActivityRecord, UserRecord, UserUpdate
from badge_forge.errors import StoreError
from badge_forge.store.abstract import parse_bigint_id

_SELECT_USER = """
    SELECT id, name, email, level, badges, verified
    FROM public.users
    WHERE id = %s;
"""

_SELECT_RECIPES = """
    SELECT id, user_id, like_count, created_at
    FROM public.recipes
    WHERE user_id = %s
    ORDER BY created_at;
"""

_UPDATE_USER = """
    UPDATE public.users
    SET level = %s, badges = %s, verified = %s
    WHERE id = %s;
"""


class PostgresRecordStore:
    """
    Record store over the `users` and `recipes` tables (see `db/init.sql`).

    The pool is injected and owned by the caller.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    def parse_user_id(self, raw: str) -> int:
        return parse_bigint_id(raw)

    async def fetch_user(self, user_id: int) -> Optional[UserRecord]:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(_SELECT_USER, (user_id,))
                row = await cur.fetchone()
        except psycopg.Error as exc:
            raise StoreError(f"Failed to fetch user: {exc}") from exc
        if row is None:
            return None
        try:
            return UserRecord.model_validate(row)
        except ValidationError as exc:
            raise StoreError(f"Failed to map user row: {exc}") from exc

    async def fetch_activities_by_owner(self, user_id: int) -> List[ActivityRecord]:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(_SELECT_RECIPES, (user_id,))
                rows = await cur.fetchall()
        except psycopg.Error as exc:
            raise StoreError(f"Failed to fetch recipes: {exc}") from exc
        try:
            return [ActivityRecord.model_validate(row) for row in rows]
        except ValidationError as exc:
            raise StoreError(f"Failed to map recipe rows: {exc}") from exc

    async def update_user(self, user_id: int, update: UserUpdate) -> None:
        try:
            async with self._pool.connection() as conn:
                cur = await conn.execute(
                    _UPDATE_USER,
                    (update.level, list(update.badges), update.verified, user_id),
                )
                rowcount = cur.rowcount
        except psycopg.Error as exc:
            raise StoreError(f"Failed to update user badges: {exc}") from exc
        if rowcount == 0:
            raise StoreError(f"Failed to update user badges: no user {user_id}")


__all__ = ["PostgresRecordStore"]
