"""Database schema migrations."""

from __future__ import annotations

from .connection import SQLitePool


SCHEMA_SQL: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS campaign_events (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        campaign TEXT NOT NULL,
        event_type TEXT NOT NULL,
        payload TEXT NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );
    """,
    "CREATE INDEX IF NOT EXISTS idx_campaign_events_campaign ON campaign_events(campaign, id);",
    "CREATE INDEX IF NOT EXISTS idx_campaign_events_type ON campaign_events(event_type, id);",
)


async def run_migrations(pool: SQLitePool) -> None:
    async with pool.connection() as conn:
        await conn.execute("BEGIN")
        try:
            for statement in SCHEMA_SQL:
                await conn.execute(statement)
        except Exception:
            await conn.rollback()
            raise
        else:
            await conn.commit()
