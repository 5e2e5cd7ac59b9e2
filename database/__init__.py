"""Database package public API."""

from .connection import SQLitePool, get_db_pool, init_db_pool, close_db_pool
from .migrations import run_migrations
from .repositories import CampaignEventRepository

__all__ = [
    "SQLitePool",
    "get_db_pool",
    "init_db_pool",
    "close_db_pool",
    "run_migrations",
    "CampaignEventRepository",
]
