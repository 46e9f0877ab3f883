"""
Base Database - Monthly target queries and writes.

Writes return affected row counts so callers can detect missing records.
Money columns hold decimal strings; ordering casts them to REAL.
"""

from contextvars import ContextVar
from typing import Optional

import aiosqlite

TARGET_COLUMNS = (
    "id",
    "order_booker_id",
    "year",
    "month",
    "target_amount",
    "achieved_amount",
    "remaining_amount",
    "achievement_percentage",
    "days_in_month",
    "working_days_in_month",
    "daily_target_amount",
    "created_at",
    "updated_at",
)

SELECT_TARGETS = f"SELECT {', '.join(TARGET_COLUMNS)} FROM monthly_targets"  # noqa: S608


class BaseDatabase:
    """Base class with monthly target operations."""

    _connection: Optional[aiosqlite.Connection] = None
    # Connection of the transaction() block the current task is inside, if any
    _transaction_conn: ContextVar[Optional[aiosqlite.Connection]]

    @property
    def conn(self) -> aiosqlite.Connection:
        """Get database connection, the transaction's own one inside transaction()."""
        txn = self._transaction_conn.get()
        if txn is not None:
            return txn
        if not self._connection:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._connection

    @property
    def in_transaction(self) -> bool:
        """Whether the current task is inside a transaction() block."""
        return self._transaction_conn.get() is not None

    async def _commit(self) -> None:
        """Commit unless an enclosing transaction owns the commit."""
        if not self.in_transaction:
            await self.conn.commit()

    # -------------------------------------------------------------------------
    # Monthly Targets - reads
    # -------------------------------------------------------------------------

    async def get_target(self, target_id: str) -> Optional[dict]:
        """Get a monthly target by id."""
        cursor = await self.conn.execute(f"{SELECT_TARGETS} WHERE id = ?", (target_id,))
        row = await cursor.fetchone()
        return dict(row) if row else None

    async def get_targets(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        owner_ids: Optional[list[str]] = None,
    ) -> list[dict]:
        """
        Get monthly targets with optional filters.

        Args:
            year: Filter by period year
            month: Filter by period month
            owner_ids: Filter by order booker ids (empty list means no filter)

        Returns:
            Target rows, newest period first, largest target first within a period
        """
        query = f"{SELECT_TARGETS} WHERE 1=1"
        params: list = []

        if year is not None:
            query += " AND year = ?"
            params.append(year)

        if month is not None:
            query += " AND month = ?"
            params.append(month)

        if owner_ids:
            placeholders = ", ".join("?" * len(owner_ids))
            query += f" AND order_booker_id IN ({placeholders})"
            params.extend(owner_ids)

        query += " ORDER BY year DESC, month DESC, CAST(target_amount AS REAL) DESC"

        cursor = await self.conn.execute(query, params)
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    async def get_targets_by_period(self, year: int, month: int) -> list[dict]:
        """Get all targets for a period, largest target first."""
        cursor = await self.conn.execute(
            f"{SELECT_TARGETS} WHERE year = ? AND month = ? ORDER BY CAST(target_amount AS REAL) DESC",
            (year, month),
        )
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    async def get_targets_by_owner(self, owner_id: str) -> list[dict]:
        """Get all targets for an order booker, newest period first."""
        cursor = await self.conn.execute(
            f"{SELECT_TARGETS} WHERE order_booker_id = ? ORDER BY year DESC, month DESC",
            (owner_id,),
        )
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]

    async def find_target(self, owner_id: str, year: int, month: int) -> Optional[dict]:
        """Get the target for a natural key (owner, year, month)."""
        cursor = await self.conn.execute(
            f"{SELECT_TARGETS} WHERE order_booker_id = ? AND year = ? AND month = ?",
            (owner_id, year, month),
        )
        row = await cursor.fetchone()
        return dict(row) if row else None

    # -------------------------------------------------------------------------
    # Monthly Targets - writes
    # -------------------------------------------------------------------------

    async def insert_target(self, **data) -> int:
        """Insert a monthly target row. Raises sqlite3.IntegrityError on a duplicate key."""
        cols = ", ".join(data.keys())
        placeholders = ", ".join("?" * len(data))
        cursor = await self.conn.execute(
            f"INSERT INTO monthly_targets ({cols}) VALUES ({placeholders})",  # noqa: S608
            tuple(data.values()),
        )
        await self._commit()
        return cursor.rowcount

    async def update_target(self, target_id: str, **data) -> int:
        """Update columns of a monthly target. Returns affected row count."""
        sets = ", ".join(f"{k} = ?" for k in data.keys())
        cursor = await self.conn.execute(
            f"UPDATE monthly_targets SET {sets} WHERE id = ?",  # noqa: S608
            (*data.values(), target_id),
        )
        await self._commit()
        return cursor.rowcount

    async def delete_target(self, target_id: str) -> int:
        """Delete a monthly target. Returns affected row count."""
        cursor = await self.conn.execute("DELETE FROM monthly_targets WHERE id = ?", (target_id,))
        await self._commit()
        return cursor.rowcount
