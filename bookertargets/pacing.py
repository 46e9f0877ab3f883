"""
Pace Projector - Is an order booker's daily pace enough to reach the target?

Compares the average achieved per elapsed day with the average still needed
per remaining day, and projects the month-end achievement at the current pace.

Usage:
    projection = project_pace(
        target_amount=50000,
        achieved_amount=30000,
        days_elapsed=20,
        days_remaining=10,
        days_in_month=30,
    )
    projection.status  # PaceStatus.AT_RISK
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from bookertargets.models import MonthlyTarget, achievement_percentage
from bookertargets.period import period_progress

# Pace ratios (current daily average / required daily average)
AHEAD_RATIO = 1.1
ON_TRACK_RATIO = 0.9
AT_RISK_RATIO = 0.7


class PaceStatus(str, Enum):
    """Pace toward the target."""

    AHEAD = "ahead"
    ON_TRACK = "on-track"
    AT_RISK = "at-risk"
    BEHIND = "behind"


class TrendDirection(str, Enum):
    """Direction indicator for the current pace."""

    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


@dataclass
class PaceProjection:
    """Pace of a target at a point in its period."""

    target_amount: float
    achieved_amount: float
    achievement_percentage: float
    days_elapsed: int
    days_remaining: int
    current_daily_average: float
    required_daily_average: float
    projected_achievement: float  # month-end achievement % at current pace
    status: PaceStatus


def classify_pace(
    achievement_pct: float,
    current_daily_average: float,
    required_daily_average: float,
) -> PaceStatus:
    """Pick the pace status, first matching rule wins."""
    if achievement_pct >= 100:
        return PaceStatus.AHEAD
    if current_daily_average >= required_daily_average * AHEAD_RATIO:
        return PaceStatus.AHEAD
    if current_daily_average >= required_daily_average * ON_TRACK_RATIO:
        return PaceStatus.ON_TRACK
    if current_daily_average >= required_daily_average * AT_RISK_RATIO:
        return PaceStatus.AT_RISK
    return PaceStatus.BEHIND


def project_pace(
    target_amount: float,
    achieved_amount: float,
    days_elapsed: int,
    days_remaining: int,
    days_in_month: int,
) -> PaceProjection:
    """Project a target's month-end achievement from its pace so far."""
    pct = achievement_percentage(achieved_amount, target_amount)
    remaining_amount = target_amount - achieved_amount

    current_daily_average = achieved_amount / days_elapsed if days_elapsed > 0 else 0.0
    required_daily_average = remaining_amount / days_remaining if days_remaining > 0 else 0.0

    if current_daily_average > 0 and target_amount != 0:
        projected = current_daily_average * days_in_month / target_amount * 100
    else:
        projected = pct

    return PaceProjection(
        target_amount=target_amount,
        achieved_amount=achieved_amount,
        achievement_percentage=pct,
        days_elapsed=days_elapsed,
        days_remaining=days_remaining,
        current_daily_average=current_daily_average,
        required_daily_average=required_daily_average,
        projected_achievement=projected,
        status=classify_pace(pct, current_daily_average, required_daily_average),
    )


def project_target(target: MonthlyTarget, as_of: date) -> PaceProjection:
    """Project a stored target's pace as of a calendar date."""
    elapsed, remaining = period_progress(target.year, target.month, as_of)
    return project_pace(
        target_amount=float(target.target_amount),
        achieved_amount=float(target.achieved_amount),
        days_elapsed=elapsed,
        days_remaining=remaining,
        days_in_month=target.days_in_month,
    )


def trend_direction(current_daily_average: float, required_daily_average: float) -> TrendDirection:
    """Arrow shown beside the current pace."""
    if current_daily_average > required_daily_average * AHEAD_RATIO:
        return TrendDirection.POSITIVE
    if current_daily_average < required_daily_average * ON_TRACK_RATIO:
        return TrendDirection.NEGATIVE
    return TrendDirection.NEUTRAL
