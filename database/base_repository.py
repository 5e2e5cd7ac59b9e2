"""Base repository pattern for database operations."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

import aiosqlite

from core.exceptions import RepositoryError
from database.connection import get_db_pool


class BaseRepository:
    """Base repository with common database operations."""

    @staticmethod
    async def insert(query: str, params: Sequence[Any] = ()) -> int:
        """Execute an INSERT and return the new row id."""
        pool = get_db_pool()
        async with pool.connection() as conn:
            try:
                cursor = await conn.execute(query, params)
                await conn.commit()
            except aiosqlite.Error as e:
                await conn.rollback()
                raise RepositoryError(f"Insert failed: {e}") from e
            return cursor.lastrowid

    @staticmethod
    async def fetch_all(query: str, params: Sequence[Any] = ()) -> List[Tuple]:
        """Fetch all rows."""
        pool = get_db_pool()
        async with pool.connection() as conn:
            try:
                cursor = await conn.execute(query, params)
                return [tuple(row) async for row in cursor]
            except aiosqlite.Error as e:
                raise RepositoryError(f"Query failed: {e}") from e

    @staticmethod
    async def fetch_value(query: str, params: Sequence[Any] = ()) -> Optional[Any]:
        """Fetch a single value from a single row."""
        rows = await BaseRepository.fetch_all(query, params)
        return rows[0][0] if rows else None
