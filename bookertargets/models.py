"""Data models for monthly targets."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

Amount = Union[int, float, Decimal]


def to_amount(value: Optional[Amount]) -> Decimal:
    """
    Exact decimal for a money amount.

    Floats go through their shortest repr, so 0.1 becomes Decimal("0.1")
    rather than its binary expansion. None is treated as 0.
    """
    if value is None:
        return Decimal(0)
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def achievement_percentage(achieved_amount: Amount, target_amount: Amount) -> float:
    """Achieved as a percentage of target, 0 when there is no target."""
    if target_amount == 0:
        return 0.0
    return float(to_amount(achieved_amount) / to_amount(target_amount) * 100)


@dataclass
class MonthlyTarget:
    """An order booker's sales target for one calendar month."""

    id: str
    owner_id: str
    year: int
    month: int
    target_amount: Decimal
    achieved_amount: Decimal
    remaining_amount: Decimal  # target - achieved, negative when exceeded
    achievement_percentage: float
    days_in_month: int
    working_days_in_month: int
    daily_target_amount: float
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row) -> MonthlyTarget:
        """Build a target from a monthly_targets row."""
        return cls(
            id=row["id"],
            owner_id=row["order_booker_id"],
            year=row["year"],
            month=row["month"],
            target_amount=to_amount(row["target_amount"]),
            achieved_amount=to_amount(row["achieved_amount"]),
            remaining_amount=to_amount(row["remaining_amount"]),
            achievement_percentage=row["achievement_percentage"] or 0.0,
            days_in_month=row["days_in_month"] or 0,
            working_days_in_month=row["working_days_in_month"] or 0,
            daily_target_amount=row["daily_target_amount"] or 0.0,
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    @property
    def natural_key(self) -> tuple[str, int, int]:
        return (self.owner_id, self.year, self.month)

    def to_dict(self) -> dict:
        """JSON-ready dict; amounts are sent as numbers."""
        data = asdict(self)
        for key in ("target_amount", "achieved_amount", "remaining_amount"):
            data[key] = float(data[key])
        data["created_at"] = self.created_at.isoformat()
        data["updated_at"] = self.updated_at.isoformat()
        return data


@dataclass
class CreateTargetRequest:
    """Request to create a target for one owner and period."""

    owner_id: str
    year: int
    month: int
    target_amount: Amount


@dataclass
class UpdateTargetRequest:
    """Request to revise a target. Only the amount is mutable."""

    target_amount: Optional[Amount] = None


@dataclass
class CopyTargetsRequest:
    """Request to copy target amounts from one period into another."""

    from_year: int
    from_month: int
    to_year: int
    to_month: int
    owner_ids: Optional[list[str]] = None


@dataclass
class TargetFilters:
    """Optional filters for listing targets."""

    year: Optional[int] = None
    month: Optional[int] = None
    owner_ids: Optional[list[str]] = None
