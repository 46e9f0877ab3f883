"""Monthly target API routes."""

import logging
from datetime import date
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from typing_extensions import Annotated

from bookertargets.api.dependencies import CommonDependencies, get_common_deps
from bookertargets.classifiers import classify_band
from bookertargets.dashboard import WidgetContext, WidgetKind, render_widget
from bookertargets.models import (
    CopyTargetsRequest,
    CreateTargetRequest,
    MonthlyTarget,
    TargetFilters,
    UpdateTargetRequest,
)
from bookertargets.rollup import summarize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/targets", tags=["targets"])

Deps = Annotated[CommonDependencies, Depends(get_common_deps)]
OwnerIds = Annotated[Optional[list[str]], Query()]


class TargetBody(BaseModel):
    owner_id: str = Field(..., min_length=1, description="Order booker id")
    year: int = Field(..., ge=1, le=9999)
    month: int = Field(..., ge=1, le=12)
    target_amount: float

    def to_request(self) -> CreateTargetRequest:
        return CreateTargetRequest(
            owner_id=self.owner_id,
            year=self.year,
            month=self.month,
            target_amount=self.target_amount,
        )


class UpdateBody(BaseModel):
    target_amount: Optional[float] = None


class AchievedBody(BaseModel):
    achieved_amount: float


class BatchBody(BaseModel):
    targets: list[TargetBody]
    atomic: bool = False


class CopyBody(BaseModel):
    from_year: int = Field(..., ge=1, le=9999)
    from_month: int = Field(..., ge=1, le=12)
    to_year: int = Field(..., ge=1, le=9999)
    to_month: int = Field(..., ge=1, le=12)
    owner_ids: Optional[list[str]] = None
    atomic: bool = False


def _serialize(target: MonthlyTarget) -> dict[str, Any]:
    data = target.to_dict()
    data["band"] = classify_band(target.achievement_percentage).value
    return data


@router.get("")
async def list_targets(
    deps: Deps,
    year: Optional[int] = None,
    month: Optional[int] = None,
    owner_ids: OwnerIds = None,
) -> list[dict[str, Any]]:
    """List targets, optionally filtered by period and order bookers."""
    targets = await deps.manager.get_all(TargetFilters(year=year, month=month, owner_ids=owner_ids))
    return [_serialize(t) for t in targets]


@router.get("/summary")
async def get_summary(
    deps: Deps,
    year: int,
    month: int,
    owner_ids: OwnerIds = None,
) -> dict[str, Any]:
    """Totals and on-track/exceeded/behind counts for a period."""
    targets = await deps.manager.get_by_period(year, month)
    return summarize(targets, owner_ids=owner_ids).to_dict()


@router.get("/progress")
async def get_progress(
    deps: Deps,
    year: int,
    month: int,
    as_of: Optional[date] = None,
    owner_ids: OwnerIds = None,
    max_entries: Optional[int] = None,
) -> dict[str, Any]:
    """Pace of each order booker toward the period target."""
    if max_entries is None:
        max_entries = await deps.settings.get("target_progress_max_entries")
    ctx = WidgetContext(
        manager=deps.manager,
        year=year,
        month=month,
        as_of=as_of or date.today(),
        owner_ids=owner_ids,
        max_entries=int(max_entries),
    )
    return await render_widget(WidgetKind.TARGET_PROGRESS, ctx)


@router.get("/period/{year}/{month}")
async def get_targets_by_period(year: int, month: int, deps: Deps) -> list[dict[str, Any]]:
    """All targets for a period."""
    return [_serialize(t) for t in await deps.manager.get_by_period(year, month)]


@router.get("/owner/{owner_id}")
async def get_targets_by_owner(owner_id: str, deps: Deps) -> list[dict[str, Any]]:
    """All targets of an order booker."""
    return [_serialize(t) for t in await deps.manager.get_by_owner(owner_id)]


@router.post("/batch", status_code=201)
async def batch_create(body: BatchBody, deps: Deps) -> list[dict[str, Any]]:
    """Create several targets in order. Without atomic, earlier items stay on failure."""
    targets = await deps.batch.batch_create([t.to_request() for t in body.targets], atomic=body.atomic)
    return [_serialize(t) for t in targets]


@router.put("/batch")
async def batch_upsert(body: BatchBody, deps: Deps) -> list[dict[str, Any]]:
    """Create or revise several targets, keyed by order booker and period."""
    targets = await deps.batch.batch_upsert([t.to_request() for t in body.targets], atomic=body.atomic)
    return [_serialize(t) for t in targets]


@router.post("/copy", status_code=201)
async def copy_targets(body: CopyBody, deps: Deps) -> list[dict[str, Any]]:
    """Copy target amounts from one period into another."""
    request = CopyTargetsRequest(
        from_year=body.from_year,
        from_month=body.from_month,
        to_year=body.to_year,
        to_month=body.to_month,
        owner_ids=body.owner_ids,
    )
    targets = await deps.batch.copy_from_previous_period(request, atomic=body.atomic)
    return [_serialize(t) for t in targets]


@router.get("/{target_id}")
async def get_target(target_id: str, deps: Deps) -> dict[str, Any]:
    """Get a single target."""
    target = await deps.manager.get_by_id(target_id)
    if target is None:
        raise HTTPException(status_code=404, detail=f"Monthly target not found: {target_id}")
    return _serialize(target)


@router.post("", status_code=201)
async def create_target(body: TargetBody, deps: Deps) -> dict[str, Any]:
    """Create a target for an order booker and period."""
    return _serialize(await deps.manager.create(body.to_request()))


@router.put("/{target_id}")
async def update_target(target_id: str, body: UpdateBody, deps: Deps) -> dict[str, Any]:
    """Revise a target amount."""
    target = await deps.manager.update(target_id, UpdateTargetRequest(target_amount=body.target_amount))
    return _serialize(target)


@router.put("/{target_id}/achieved")
async def reconcile_achieved(target_id: str, body: AchievedBody, deps: Deps) -> dict[str, Any]:
    """Record the achieved amount computed from the sales ledger."""
    return _serialize(await deps.manager.reconcile_achieved(target_id, body.achieved_amount))


@router.delete("/{target_id}")
async def delete_target(target_id: str, deps: Deps) -> dict[str, str]:
    """Delete a target."""
    await deps.manager.delete(target_id)
    return {"status": "ok"}
