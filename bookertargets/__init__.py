"""
Booker Targets - Monthly sales targets and pacing for order bookers.

Usage:
    from bookertargets import Database, TargetManager, BatchOperations

    db = Database()
    await db.connect()

    manager = TargetManager(db)
    target = await manager.create(CreateTargetRequest('ob-1', 2024, 6, 700000))
    classify_band(target.achievement_percentage)  # AchievementBand.NOT_STARTED

    batch = BatchOperations(manager)
    await batch.copy_from_previous_period(CopyTargetsRequest(2024, 6, 2024, 7))
"""

from bookertargets.batch import BatchOperations
from bookertargets.classifiers import AchievementBand, classify_band
from bookertargets.database import Database
from bookertargets.exceptions import (
    DivisionByZeroError,
    DuplicatePeriodError,
    EmptyUpdateError,
    InvalidAmountError,
    InvalidPeriodError,
    TargetError,
    TargetNotFoundError,
)
from bookertargets.models import (
    CopyTargetsRequest,
    CreateTargetRequest,
    MonthlyTarget,
    TargetFilters,
    UpdateTargetRequest,
)
from bookertargets.pacing import PaceProjection, PaceStatus, project_pace, project_target
from bookertargets.reconcile import LedgerSource, Reconciler
from bookertargets.rollup import TargetRollup, summarize
from bookertargets.settings import Settings
from bookertargets.targets import TargetManager

__all__ = [
    "Database",
    "Settings",
    "TargetManager",
    "BatchOperations",
    "Reconciler",
    "LedgerSource",
    # Models
    "MonthlyTarget",
    "CreateTargetRequest",
    "UpdateTargetRequest",
    "CopyTargetsRequest",
    "TargetFilters",
    # Classification
    "AchievementBand",
    "classify_band",
    "PaceStatus",
    "PaceProjection",
    "project_pace",
    "project_target",
    "TargetRollup",
    "summarize",
    # Errors
    "TargetError",
    "TargetNotFoundError",
    "DuplicatePeriodError",
    "InvalidAmountError",
    "InvalidPeriodError",
    "EmptyUpdateError",
    "DivisionByZeroError",
]
