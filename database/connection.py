"""SQLite connection pool backing the campaign audit journal."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, List, Optional

import aiosqlite

from core import get_logger

logger = get_logger(__name__)


class SQLitePool:
    """Fixed-size pool of aiosqlite connections handed out one at a time."""

    def __init__(self, database_path: str, pool_size: int = 4, busy_timeout_ms: int = 5000) -> None:
        self.database_path = Path(database_path)
        self.pool_size = pool_size
        self.busy_timeout_ms = busy_timeout_ms
        self._connections: List[aiosqlite.Connection] = []
        self._idle: Optional[asyncio.Queue[aiosqlite.Connection]] = None
        self._init_lock = asyncio.Lock()
        self._initialized = False

    async def init_pool(self) -> None:
        async with self._init_lock:
            if self._initialized:
                return

            if not self.database_path.parent.exists():
                self.database_path.parent.mkdir(parents=True, exist_ok=True)

            self._idle = asyncio.Queue()
            for _ in range(self.pool_size):
                conn = await aiosqlite.connect(self.database_path.as_posix())
                await self._apply_pragma(conn)
                self._connections.append(conn)
                self._idle.put_nowait(conn)

            self._initialized = True
            logger.info(f"Opened {self.pool_size} connections to {self.database_path}")

    async def close(self) -> None:
        while self._connections:
            conn = self._connections.pop()
            await conn.close()
        self._idle = None
        self._initialized = False

    async def _apply_pragma(self, conn: aiosqlite.Connection) -> None:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=NORMAL")
        await conn.execute(f"PRAGMA busy_timeout={self.busy_timeout_ms}")

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        if not self._initialized:
            await self.init_pool()
        conn = await self._idle.get()
        try:
            yield conn
        finally:
            self._idle.put_nowait(conn)


_db_pool: Optional[SQLitePool] = None


def get_db_pool() -> SQLitePool:
    if _db_pool is None:
        raise RuntimeError("Database pool not initialized")
    return _db_pool


async def init_db_pool(database_path: str, pool_size: int, busy_timeout_ms: int) -> SQLitePool:
    global _db_pool
    pool = SQLitePool(database_path=database_path, pool_size=pool_size, busy_timeout_ms=busy_timeout_ms)
    await pool.init_pool()
    _db_pool = pool
    return pool


async def close_db_pool() -> None:
    global _db_pool
    if _db_pool is not None:
        await _db_pool.close()
        _db_pool = None
