"""
Targets - Lifecycle of monthly target records.

Usage:
    manager = TargetManager()
    target = await manager.create(CreateTargetRequest('ob-1', 2024, 6, 700000))
    target = await manager.update(target.id, UpdateTargetRequest(target_amount=750000))
    target = await manager.reconcile_achieved(target.id, 120000)
    await manager.delete(target.id)

Derived fields (remaining amount, achievement percentage, calendar days and
daily target) are recomputed here on every write that touches an amount.
"""

from __future__ import annotations

import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from bookertargets.database import Database
from bookertargets.exceptions import (
    DuplicatePeriodError,
    EmptyUpdateError,
    InvalidAmountError,
    TargetNotFoundError,
)
from bookertargets.models import (
    Amount,
    CreateTargetRequest,
    MonthlyTarget,
    TargetFilters,
    UpdateTargetRequest,
    achievement_percentage,
    to_amount,
)
from bookertargets.period import daily_target, days_in_month, validate_period, working_days

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _parse_amount(amount: Amount) -> Decimal:
    if isinstance(amount, bool) or not isinstance(amount, int | float | Decimal):
        raise InvalidAmountError(amount, "Amount must be a number")
    value = to_amount(amount)
    if not value.is_finite():
        raise InvalidAmountError(amount, "Amount must be a finite number")
    return value


def _parse_target_amount(amount: Amount) -> Decimal:
    value = _parse_amount(amount)
    if not value > 0:
        raise InvalidAmountError(amount)
    return value


class TargetManager:
    """Create, read, update and delete monthly targets."""

    def __init__(self, db: Database | None = None):
        self._db = db or Database()

    @property
    def db(self) -> Database:
        return self._db

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def get_all(self, filters: Optional[TargetFilters] = None) -> list[MonthlyTarget]:
        """Get all targets matching the filters."""
        filters = filters or TargetFilters()
        rows = await self._db.get_targets(year=filters.year, month=filters.month, owner_ids=filters.owner_ids)
        return [MonthlyTarget.from_row(row) for row in rows]

    async def get_by_id(self, target_id: str) -> Optional[MonthlyTarget]:
        """Get a target by id, or None if it doesn't exist."""
        row = await self._db.get_target(target_id)
        return MonthlyTarget.from_row(row) if row else None

    async def get_by_period(self, year: int, month: int) -> list[MonthlyTarget]:
        """Get all targets for a period."""
        rows = await self._db.get_targets_by_period(year, month)
        return [MonthlyTarget.from_row(row) for row in rows]

    async def get_by_owner(self, owner_id: str) -> list[MonthlyTarget]:
        """Get all targets for an order booker."""
        rows = await self._db.get_targets_by_owner(owner_id)
        return [MonthlyTarget.from_row(row) for row in rows]

    async def find_by_key(self, owner_id: str, year: int, month: int) -> Optional[MonthlyTarget]:
        """Get the target for an owner and period, or None."""
        row = await self._db.find_target(owner_id, year, month)
        return MonthlyTarget.from_row(row) if row else None

    async def _require(self, target_id: str) -> MonthlyTarget:
        target = await self.get_by_id(target_id)
        if target is None:
            raise TargetNotFoundError(target_id)
        return target

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def create(self, request: CreateTargetRequest) -> MonthlyTarget:
        """
        Create a target for an owner and period.

        Achieved amount starts at 0, so the remaining amount equals the
        target and the achievement percentage is 0.

        Raises:
            InvalidAmountError: target amount is not a positive finite number
            InvalidPeriodError: month is outside 1-12
            DuplicatePeriodError: the owner already has a target for the period
        """
        amount = _parse_target_amount(request.target_amount)
        validate_period(request.year, request.month)

        if await self._db.find_target(request.owner_id, request.year, request.month):
            raise DuplicatePeriodError(request.owner_id, request.year, request.month)

        days = days_in_month(request.year, request.month)
        working = working_days(days)
        target_id = str(uuid.uuid4())
        now = _now()

        try:
            await self._db.insert_target(
                id=target_id,
                order_booker_id=request.owner_id,
                year=request.year,
                month=request.month,
                target_amount=str(amount),
                achieved_amount="0",
                remaining_amount=str(amount),
                achievement_percentage=0.0,
                days_in_month=days,
                working_days_in_month=working,
                daily_target_amount=daily_target(float(amount), working),
                created_at=now,
                updated_at=now,
            )
        except sqlite3.IntegrityError as e:
            # Lost a race with a concurrent create for the same key
            raise DuplicatePeriodError(request.owner_id, request.year, request.month) from e

        logger.info(
            f"Created target {target_id} for {request.owner_id} "
            f"{request.year}-{request.month:02d}: {request.target_amount}"
        )
        return await self._require(target_id)

    async def update(self, target_id: str, request: UpdateTargetRequest) -> MonthlyTarget:
        """
        Revise a target amount.

        Remaining amount, achievement percentage and daily target are
        recomputed from the stored achieved amount and working days. Owner
        and period can't change; copy into a new period instead.

        Raises:
            EmptyUpdateError: the request carries no fields
            InvalidAmountError: target amount is not a positive finite number
            TargetNotFoundError: no target with this id
        """
        if request.target_amount is None:
            raise EmptyUpdateError()
        amount = _parse_target_amount(request.target_amount)

        current = await self._require(target_id)
        affected = await self._db.update_target(
            target_id,
            target_amount=str(amount),
            remaining_amount=str(amount - current.achieved_amount),
            achievement_percentage=achievement_percentage(current.achieved_amount, amount),
            daily_target_amount=daily_target(float(amount), current.working_days_in_month),
            updated_at=_now(),
        )
        if affected == 0:
            raise TargetNotFoundError(target_id)

        logger.info(f"Updated target {target_id}: {current.target_amount} -> {amount}")
        return await self._require(target_id)

    async def reconcile_achieved(self, target_id: str, achieved_amount: Amount) -> MonthlyTarget:
        """
        Record the achieved amount computed from the sales ledger.

        Remaining amount and achievement percentage are recomputed against
        the stored target amount. Zero and negative amounts (net returns)
        are accepted.

        Raises:
            InvalidAmountError: achieved amount is not a finite number
            TargetNotFoundError: no target with this id
        """
        achieved = _parse_amount(achieved_amount)
        current = await self._require(target_id)
        affected = await self._db.update_target(
            target_id,
            achieved_amount=str(achieved),
            remaining_amount=str(current.target_amount - achieved),
            achievement_percentage=achievement_percentage(achieved, current.target_amount),
            updated_at=_now(),
        )
        if affected == 0:
            raise TargetNotFoundError(target_id)

        logger.debug(f"Reconciled target {target_id}: achieved {current.achieved_amount} -> {achieved}")
        return await self._require(target_id)

    async def delete(self, target_id: str) -> None:
        """
        Permanently delete a target.

        Raises:
            TargetNotFoundError: no target with this id
        """
        affected = await self._db.delete_target(target_id)
        if affected == 0:
            raise TargetNotFoundError(target_id)
        logger.info(f"Deleted target {target_id}")
