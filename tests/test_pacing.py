"""Tests for the pace projector.

The pace status compares the average achieved per elapsed day with the
average still needed per remaining day.
"""

from datetime import date, datetime, timezone

import pytest

from bookertargets.models import MonthlyTarget
from bookertargets.pacing import (
    PaceStatus,
    TrendDirection,
    classify_pace,
    project_pace,
    project_target,
    trend_direction,
)


def _target(target_amount: float, achieved_amount: float, year: int = 2024, month: int = 6) -> MonthlyTarget:
    now = datetime(2024, 6, 1, tzinfo=timezone.utc)
    return MonthlyTarget(
        id="t-1",
        owner_id="ob-1",
        year=year,
        month=month,
        target_amount=target_amount,
        achieved_amount=achieved_amount,
        remaining_amount=target_amount - achieved_amount,
        achievement_percentage=achieved_amount / target_amount * 100,
        days_in_month=30,
        working_days_in_month=21,
        daily_target_amount=target_amount / 21,
        created_at=now,
        updated_at=now,
    )


class TestProjectPace:
    """Tests for pace averages, projection and status."""

    def test_day_twenty_example_is_at_risk(self):
        """1500/day against 2000/day needed: >= 0.7x but < 0.9x."""
        projection = project_pace(
            target_amount=50000,
            achieved_amount=30000,
            days_elapsed=20,
            days_remaining=10,
            days_in_month=30,
        )

        assert projection.required_daily_average == 2000
        assert projection.current_daily_average == 1500
        assert projection.achievement_percentage == pytest.approx(60.0)
        assert projection.projected_achievement == pytest.approx(90.0)
        assert projection.status == PaceStatus.AT_RISK

    def test_target_met_is_ahead_regardless_of_pace(self):
        projection = project_pace(50000, 50000, 30, 0, 30)
        assert projection.status == PaceStatus.AHEAD

    def test_fast_pace_is_ahead(self):
        # 2500/day vs 1250/day needed
        projection = project_pace(50000, 25000, 10, 20, 30)
        assert projection.status == PaceStatus.AHEAD

    def test_matching_pace_is_on_track(self):
        # 2000/day vs 2000/day needed
        projection = project_pace(60000, 30000, 15, 15, 30)
        assert projection.status == PaceStatus.ON_TRACK

    def test_slow_pace_is_behind(self):
        # 1000/day vs 3000/day needed
        projection = project_pace(50000, 20000, 20, 10, 30)
        assert projection.status == PaceStatus.BEHIND

    def test_no_elapsed_days(self):
        """Before the period starts there is no pace; projection falls back to achievement."""
        projection = project_pace(30000, 0, 0, 30, 30)

        assert projection.current_daily_average == 0
        assert projection.required_daily_average == 1000
        assert projection.projected_achievement == 0
        assert projection.status == PaceStatus.BEHIND

    def test_no_remaining_days_requires_nothing(self):
        projection = project_pace(30000, 15000, 30, 0, 30)
        assert projection.required_daily_average == 0
        assert projection.status == PaceStatus.AHEAD

    def test_zero_target_does_not_raise(self):
        projection = project_pace(0, 500, 10, 20, 30)
        assert projection.achievement_percentage == 0
        assert projection.projected_achievement == 0


class TestClassifyPace:
    """Ratios are evaluated top-down, inclusive of their lower bound."""

    @pytest.mark.parametrize(
        "current,expected",
        [
            (1101, PaceStatus.AHEAD),
            (900, PaceStatus.ON_TRACK),
            (700, PaceStatus.AT_RISK),
            (699, PaceStatus.BEHIND),
        ],
    )
    def test_ratio_bounds(self, current, expected):
        assert classify_pace(50, current, 1000) == expected

    def test_achievement_overrides_pace(self):
        assert classify_pace(100, 0, 1000) == PaceStatus.AHEAD


class TestProjectTarget:
    """Tests for projecting a stored target as of a date."""

    def test_uses_calendar_progress(self):
        projection = project_target(_target(50000, 30000), date(2024, 6, 20))

        assert projection.days_elapsed == 20
        assert projection.days_remaining == 10
        assert projection.status == PaceStatus.AT_RISK

    def test_after_period_end(self):
        projection = project_target(_target(50000, 30000), date(2024, 8, 1))

        assert projection.days_elapsed == 30
        assert projection.days_remaining == 0
        assert projection.required_daily_average == 0


class TestTrendDirection:
    """Tests for the pace arrow."""

    def test_positive_above_ahead_ratio(self):
        assert trend_direction(1200, 1000) == TrendDirection.POSITIVE

    def test_negative_below_on_track_ratio(self):
        assert trend_direction(800, 1000) == TrendDirection.NEGATIVE

    @pytest.mark.parametrize("current", [900, 1000, 1100])
    def test_neutral_between(self, current):
        assert trend_direction(current, 1000) == TrendDirection.NEUTRAL
