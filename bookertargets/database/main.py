"""
Database - Single source of truth for all database operations.

Usage:
    db = Database()
    await db.connect()
    rows = await db.get_targets(year=2024, month=6)
    await db.set_setting('currency', 'PKR')
"""

import json
import logging
from contextlib import asynccontextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any, AsyncIterator

import aiosqlite

from bookertargets.database.base import BaseDatabase

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS monthly_targets (
    id TEXT PRIMARY KEY,
    order_booker_id TEXT NOT NULL,
    year INTEGER NOT NULL,
    month INTEGER NOT NULL CHECK (month BETWEEN 1 AND 12),
    target_amount TEXT NOT NULL DEFAULT '0',  -- decimal string
    achieved_amount TEXT NOT NULL DEFAULT '0',
    remaining_amount TEXT NOT NULL DEFAULT '0',
    achievement_percentage REAL NOT NULL DEFAULT 0,
    days_in_month INTEGER NOT NULL,
    working_days_in_month INTEGER NOT NULL,
    daily_target_amount REAL NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    UNIQUE (order_booker_id, year, month)
);

CREATE INDEX IF NOT EXISTS idx_monthly_targets_period ON monthly_targets(year, month);
CREATE INDEX IF NOT EXISTS idx_monthly_targets_owner ON monthly_targets(order_booker_id);

CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value TEXT
);
"""


class Database(BaseDatabase):
    """Single source of truth for all database operations."""

    _instances: dict[str, "Database"] = {}  # path -> instance
    _default_path: str = None

    def __new__(cls, path: str = None):
        """
        Singleton pattern per path - one database instance per unique path.

        Args:
            path: Database file path. If None, uses the configured path.
        """
        if path is None:
            if cls._default_path is None:
                from bookertargets.config import config

                cls._default_path = str(config.resolved_database_path)
            path = cls._default_path

        path = str(path)
        if path not in cls._instances:
            instance = super().__new__(cls)
            instance._path = Path(path)
            instance._connection = None
            instance._transaction_conn = ContextVar(f"transaction_conn:{path}", default=None)
            cls._instances[path] = instance

        return cls._instances[path]

    def __init__(self, path: str = None):
        # Path is already set in __new__, nothing to do here
        pass

    async def connect(self) -> "Database":
        """Connect to database and initialize schema."""
        if self._connection is None:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = await aiosqlite.connect(self._path)
            self._connection.row_factory = aiosqlite.Row
            await self._connection.execute("PRAGMA journal_mode=WAL")
            await self._connection.execute("PRAGMA busy_timeout=30000")
            await self._init_schema()
            logger.info(f"Connected to database at {self._path}")
        return self

    async def close(self):
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    def remove_from_cache(self):
        """Remove this instance from the singleton cache. Use for temporary databases."""
        path_str = str(self._path)
        if path_str in self._instances:
            del self._instances[path_str]

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["Database"]:
        """
        Group writes into a single transaction.

        The block runs on its own connection, opened with BEGIN IMMEDIATE and
        bound to the current task only. Writes from other tasks keep using the
        shared connection: they wait for the block to finish and are never
        part of its commit or rollback. Nesting joins the outer transaction.
        """
        if self.in_transaction:
            yield self
            return
        if self._connection is None:
            raise RuntimeError("Database not connected. Call connect() first.")

        txn = await aiosqlite.connect(self._path)
        try:
            txn.row_factory = aiosqlite.Row
            await txn.execute("PRAGMA busy_timeout=30000")
            await txn.execute("BEGIN IMMEDIATE")
            token = self._transaction_conn.set(txn)
            try:
                yield self
            except BaseException:
                await txn.rollback()
                raise
            else:
                await txn.commit()
            finally:
                self._transaction_conn.reset(token)
        finally:
            await txn.close()

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    async def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a setting value by key."""
        cursor = await self.conn.execute("SELECT value FROM settings WHERE key = ?", (key,))
        row = await cursor.fetchone()
        if row is None:
            return default
        try:
            return json.loads(row["value"])
        except (json.JSONDecodeError, TypeError):
            return row["value"]

    async def set_setting(self, key: str, value: Any) -> None:
        """Set a setting value."""
        json_value = json.dumps(value) if not isinstance(value, str) else value
        await self.conn.execute("INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)", (key, json_value))
        await self._commit()

    async def get_all_settings(self) -> dict:
        """Get all settings as a dictionary."""
        cursor = await self.conn.execute("SELECT key, value FROM settings")
        rows = await cursor.fetchall()
        result = {}
        for row in rows:
            try:
                result[row["key"]] = json.loads(row["value"])
            except (json.JSONDecodeError, TypeError):
                result[row["key"]] = row["value"]
        return result

    # -------------------------------------------------------------------------
    # Schema
    # -------------------------------------------------------------------------

    async def _init_schema(self) -> None:
        """Initialize database schema."""
        await self.conn.executescript(SCHEMA)
        await self.conn.commit()
