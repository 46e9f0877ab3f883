"""
Batch Operations - Multi-record target writes built on TargetManager.

Batches run their items one at a time. By default there is no surrounding
transaction: when item k fails its error propagates unchanged and items
1..k-1 stay committed. Pass atomic=True to run the whole batch in a single
database transaction that rolls back on failure.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from contextlib import asynccontextmanager
from typing import AsyncIterator, TypeVar

from bookertargets.models import CopyTargetsRequest, CreateTargetRequest, MonthlyTarget, UpdateTargetRequest
from bookertargets.targets import TargetManager

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BatchOperations:
    """Sequential create, upsert and period-copy of monthly targets."""

    def __init__(self, manager: TargetManager | None = None):
        self._manager = manager or TargetManager()

    @asynccontextmanager
    async def _scope(self, atomic: bool) -> AsyncIterator[None]:
        if atomic:
            async with self._manager.db.transaction():
                yield
        else:
            yield

    async def _run(
        self,
        name: str,
        items: Sequence[T],
        step: Callable[[T], Awaitable[MonthlyTarget]],
        atomic: bool,
    ) -> list[MonthlyTarget]:
        results: list[MonthlyTarget] = []
        async with self._scope(atomic):
            for index, item in enumerate(items):
                try:
                    results.append(await step(item))
                except Exception:
                    if atomic:
                        logger.warning(f"{name} failed at item {index + 1}/{len(items)}; rolled back")
                    else:
                        logger.warning(
                            f"{name} failed at item {index + 1}/{len(items)}; "
                            f"{len(results)} earlier items remain committed"
                        )
                    raise
        return results

    async def batch_create(
        self, requests: Sequence[CreateTargetRequest], atomic: bool = False
    ) -> list[MonthlyTarget]:
        """Create one target per request, in order."""
        return await self._run("batch_create", requests, self._manager.create, atomic)

    async def batch_upsert(
        self, requests: Sequence[CreateTargetRequest], atomic: bool = False
    ) -> list[MonthlyTarget]:
        """
        Create or revise one target per request, keyed by (owner, year, month).

        Existing targets get their amount updated; achieved amounts are kept.
        Running the same batch twice leaves one record per key.
        """
        return await self._run("batch_upsert", requests, self._upsert_one, atomic)

    async def _upsert_one(self, request: CreateTargetRequest) -> MonthlyTarget:
        existing = await self._manager.find_by_key(request.owner_id, request.year, request.month)
        if existing:
            return await self._manager.update(existing.id, UpdateTargetRequest(target_amount=request.target_amount))
        return await self._manager.create(request)

    async def copy_from_previous_period(
        self, request: CopyTargetsRequest, atomic: bool = False
    ) -> list[MonthlyTarget]:
        """
        Copy target amounts from one period into another.

        Only the goal is copied: new targets start with nothing achieved.
        Fails like batch_create when a destination target already exists.
        """
        previous = await self._manager.get_by_period(request.from_year, request.from_month)
        if request.owner_ids:
            wanted = set(request.owner_ids)
            previous = [t for t in previous if t.owner_id in wanted]

        new_targets = [
            CreateTargetRequest(
                owner_id=t.owner_id,
                year=request.to_year,
                month=request.to_month,
                target_amount=t.target_amount,
            )
            for t in previous
        ]
        logger.info(
            f"Copying {len(new_targets)} targets from {request.from_year}-{request.from_month:02d} "
            f"to {request.to_year}-{request.to_month:02d}"
        )
        return await self.batch_create(new_targets, atomic=atomic)
