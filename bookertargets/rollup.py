"""
Rollup - Summary figures over a set of monthly targets.

The on-track/exceeded/behind groups use their own 80/100 thresholds and are
coarser than the achievement bands in bookertargets.classifiers.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Optional

from bookertargets.models import MonthlyTarget, achievement_percentage

ON_TRACK_THRESHOLD = 80.0
EXCEEDED_THRESHOLD = 100.0


@dataclass
class TargetRollup:
    """Totals and status counts for summary cards."""

    total_targets: int
    total_target_amount: Decimal
    total_achieved_amount: Decimal
    total_remaining_amount: Decimal
    achievement_percentage: float  # sum(achieved) / sum(target)
    average_achievement: float  # mean of per-target percentages
    on_track_count: int  # >= 80%
    exceeded_count: int  # >= 100%
    behind_count: int  # < 80%

    def to_dict(self) -> dict:
        data = asdict(self)
        for key in ("total_target_amount", "total_achieved_amount", "total_remaining_amount"):
            data[key] = float(data[key])
        return data


def summarize(targets: Iterable[MonthlyTarget], owner_ids: Optional[list[str]] = None) -> TargetRollup:
    """Summarize targets, optionally only those of the given owners."""
    if owner_ids:
        wanted = set(owner_ids)
        targets = [t for t in targets if t.owner_id in wanted]
    else:
        targets = list(targets)

    total_target = sum((t.target_amount for t in targets), Decimal(0))
    total_achieved = sum((t.achieved_amount for t in targets), Decimal(0))
    count = len(targets)

    return TargetRollup(
        total_targets=count,
        total_target_amount=total_target,
        total_achieved_amount=total_achieved,
        total_remaining_amount=total_target - total_achieved,
        achievement_percentage=achievement_percentage(total_achieved, total_target),
        average_achievement=sum(t.achievement_percentage for t in targets) / count if count else 0.0,
        on_track_count=sum(1 for t in targets if t.achievement_percentage >= ON_TRACK_THRESHOLD),
        exceeded_count=sum(1 for t in targets if t.achievement_percentage >= EXCEEDED_THRESHOLD),
        behind_count=sum(1 for t in targets if t.achievement_percentage < ON_TRACK_THRESHOLD),
    )
