"""
Reconciliation - Refresh achieved amounts from the sales ledger.

The ledger is an external collaborator; anything implementing LedgerSource
can be plugged in. This module only pushes its figures through
TargetManager.reconcile_achieved so derived fields stay consistent.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, runtime_checkable

from bookertargets.models import MonthlyTarget, to_amount
from bookertargets.targets import TargetManager

logger = logging.getLogger(__name__)


@runtime_checkable
class LedgerSource(Protocol):
    """Source of true achieved amounts per owner and period."""

    async def achieved_amount(self, owner_id: str, year: int, month: int) -> float:
        """Net sales attributed to the owner in the period."""
        ...


class Reconciler:
    """Apply ledger figures to every target of a period."""

    def __init__(self, ledger: LedgerSource, manager: TargetManager | None = None):
        self._ledger = ledger
        self._manager = manager or TargetManager()

    async def reconcile_target(self, target: MonthlyTarget) -> MonthlyTarget:
        """Refresh a single target's achieved amount."""
        achieved = await self._ledger.achieved_amount(target.owner_id, target.year, target.month)
        if to_amount(achieved) == target.achieved_amount:
            return target
        return await self._manager.reconcile_achieved(target.id, achieved)

    async def reconcile_period(
        self, year: int, month: int, owner_ids: Optional[list[str]] = None
    ) -> list[MonthlyTarget]:
        """
        Refresh achieved amounts for a period.

        Targets are reconciled one by one; a ledger error stops the run and
        propagates, leaving earlier targets updated.
        """
        targets = await self._manager.get_by_period(year, month)
        if owner_ids:
            wanted = set(owner_ids)
            targets = [t for t in targets if t.owner_id in wanted]

        results = []
        for target in targets:
            results.append(await self.reconcile_target(target))

        logger.info(f"Reconciled {len(results)} targets for {year}-{month:02d}")
        return results
