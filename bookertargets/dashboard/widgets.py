"""
Widget data renderers, dispatched by widget kind.

Every WidgetKind must have a renderer in RENDERERS; the module refuses to
import otherwise, so adding a kind means adding its renderer here.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from bookertargets.classifiers import classify_band
from bookertargets.dashboard.types import WidgetKind
from bookertargets.models import TargetFilters
from bookertargets.pacing import PaceStatus, project_target, trend_direction
from bookertargets.rollup import summarize
from bookertargets.targets import TargetManager


@dataclass
class WidgetContext:
    """Inputs shared by all widget renderers."""

    manager: TargetManager
    year: int
    month: int
    as_of: date
    owner_ids: Optional[list[str]] = None
    max_entries: int = 10


WidgetRenderer = Callable[[WidgetContext], Awaitable[dict[str, Any]]]


async def _period_targets(ctx: WidgetContext):
    return await ctx.manager.get_all(TargetFilters(year=ctx.year, month=ctx.month, owner_ids=ctx.owner_ids))


async def render_target_progress(ctx: WidgetContext) -> dict[str, Any]:
    """Pace of each order booker toward this period's target, best first."""
    targets = await _period_targets(ctx)
    targets.sort(key=lambda t: t.achievement_percentage, reverse=True)

    items = []
    for target in targets:
        projection = project_target(target, ctx.as_of)
        items.append(
            {
                "target_id": target.id,
                "owner_id": target.owner_id,
                "target_amount": projection.target_amount,
                "achieved_amount": projection.achieved_amount,
                "achievement_percentage": projection.achievement_percentage,
                "days_remaining": projection.days_remaining,
                "current_daily_average": projection.current_daily_average,
                "required_daily_average": projection.required_daily_average,
                "projected_achievement": projection.projected_achievement,
                "status": projection.status.value,
                "trend": trend_direction(
                    projection.current_daily_average, projection.required_daily_average
                ).value,
            }
        )

    statuses = [item["status"] for item in items]
    return {
        "items": items[: ctx.max_entries],
        "total": len(items),
        "summary": {
            "on_track_or_ahead": sum(
                1 for s in statuses if s in (PaceStatus.AHEAD.value, PaceStatus.ON_TRACK.value)
            ),
            "at_risk": statuses.count(PaceStatus.AT_RISK.value),
            "behind": statuses.count(PaceStatus.BEHIND.value),
        },
    }


async def render_target_summary(ctx: WidgetContext) -> dict[str, Any]:
    """Totals and status counts for the period."""
    targets = await _period_targets(ctx)
    return summarize(targets).to_dict()


async def render_top_performers(ctx: WidgetContext) -> dict[str, Any]:
    """Order bookers ranked by achievement percentage."""
    targets = await _period_targets(ctx)
    targets.sort(key=lambda t: t.achievement_percentage, reverse=True)
    return {
        "items": [
            {
                "rank": rank,
                "owner_id": t.owner_id,
                "target_amount": float(t.target_amount),
                "achieved_amount": float(t.achieved_amount),
                "achievement_percentage": t.achievement_percentage,
                "band": classify_band(t.achievement_percentage).value,
            }
            for rank, t in enumerate(targets[: ctx.max_entries], start=1)
        ],
        "total": len(targets),
    }


RENDERERS: dict[WidgetKind, WidgetRenderer] = {
    WidgetKind.TARGET_PROGRESS: render_target_progress,
    WidgetKind.TARGET_SUMMARY: render_target_summary,
    WidgetKind.TOP_PERFORMERS: render_top_performers,
}

_missing = set(WidgetKind) - RENDERERS.keys()
if _missing:
    raise RuntimeError(f"No renderer for widget kinds: {sorted(k.value for k in _missing)}")


async def render_widget(kind: WidgetKind | str, ctx: WidgetContext) -> dict[str, Any]:
    """
    Render a widget's data.

    Raises:
        ValueError: kind is not a WidgetKind
    """
    return await RENDERERS[WidgetKind(kind)](ctx)
