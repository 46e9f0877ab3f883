"""Tests for the rollup aggregator used by summary cards."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from bookertargets.models import MonthlyTarget
from bookertargets.rollup import summarize


def _target(owner_id: str, target_amount, achieved_amount) -> MonthlyTarget:
    now = datetime(2024, 6, 1, tzinfo=timezone.utc)
    target_amount = Decimal(str(target_amount))
    achieved_amount = Decimal(str(achieved_amount))
    return MonthlyTarget(
        id=f"t-{owner_id}",
        owner_id=owner_id,
        year=2024,
        month=6,
        target_amount=target_amount,
        achieved_amount=achieved_amount,
        remaining_amount=target_amount - achieved_amount,
        achievement_percentage=float(achieved_amount / target_amount * 100) if target_amount else 0.0,
        days_in_month=30,
        working_days_in_month=21,
        daily_target_amount=float(target_amount) / 21,
        created_at=now,
        updated_at=now,
    )


class TestSummarize:
    """Tests for totals and threshold counts."""

    def test_empty_collection(self):
        rollup = summarize([])

        assert rollup.total_targets == 0
        assert rollup.total_target_amount == 0
        assert rollup.achievement_percentage == 0
        assert rollup.average_achievement == 0
        assert rollup.on_track_count == 0
        assert rollup.behind_count == 0

    def test_totals_and_aggregate_percentage(self):
        targets = [
            _target("a", 100000, 50000),
            _target("b", 300000, 150000),
        ]

        rollup = summarize(targets)

        assert rollup.total_targets == 2
        assert rollup.total_target_amount == 400000
        assert rollup.total_achieved_amount == 200000
        assert rollup.total_remaining_amount == 200000
        assert rollup.achievement_percentage == pytest.approx(50.0)

    def test_aggregate_is_weighted_but_average_is_not(self):
        """Aggregate weighs by target size; the average treats each target equally."""
        targets = [
            _target("small", 10000, 10000),  # 100%
            _target("large", 90000, 0),  # 0%
        ]

        rollup = summarize(targets)

        assert rollup.achievement_percentage == pytest.approx(10.0)
        assert rollup.average_achievement == pytest.approx(50.0)

    def test_threshold_counts(self):
        targets = [
            _target("a", 1000, 0),  # 0%
            _target("b", 1000, 790),  # 79%
            _target("c", 1000, 800),  # 80%
            _target("d", 1000, 1000),  # 100%
            _target("e", 1000, 1500),  # 150%
        ]

        rollup = summarize(targets)

        assert rollup.on_track_count == 3
        assert rollup.exceeded_count == 2
        assert rollup.behind_count == 2
        assert rollup.on_track_count + rollup.behind_count == rollup.total_targets

    def test_owner_filter(self):
        targets = [_target("a", 1000, 500), _target("b", 2000, 2000), _target("c", 4000, 0)]

        rollup = summarize(targets, owner_ids=["a", "b"])

        assert rollup.total_targets == 2
        assert rollup.total_target_amount == 3000
        assert rollup.exceeded_count == 1

    def test_zero_total_target(self):
        rollup = summarize([_target("a", 0, 0)])
        assert rollup.achievement_percentage == 0

    def test_to_dict(self):
        data = summarize([_target("a", 1000, 500)]).to_dict()
        assert data["total_targets"] == 1
        assert set(data) >= {"on_track_count", "exceeded_count", "behind_count", "average_achievement"}

    def test_totals_are_exact_for_cent_amounts(self):
        targets = [_target("a", 221811.79, 72015.02), _target("b", 0.1, 0.2)]

        rollup = summarize(targets)

        assert rollup.total_target_amount == Decimal("221811.89")
        assert rollup.total_remaining_amount + rollup.total_achieved_amount == rollup.total_target_amount
        assert rollup.to_dict()["total_achieved_amount"] == 72015.22
