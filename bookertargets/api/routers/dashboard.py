"""Dashboard layout and widget data API routes."""

from datetime import date
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from typing_extensions import Annotated

from bookertargets.api.dependencies import CommonDependencies, get_common_deps
from bookertargets.dashboard import (
    WidgetContext,
    WidgetKind,
    WidgetPosition,
    render_widget,
    reset_to_default,
    set_widget_visibility,
    update_widget_config,
    update_widget_position,
)
from bookertargets.dashboard.store import to_dict

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

Deps = Annotated[CommonDependencies, Depends(get_common_deps)]

# Setting holding the default entry limit for each widget kind
MAX_ENTRIES_SETTINGS = {
    WidgetKind.TARGET_PROGRESS: "target_progress_max_entries",
    WidgetKind.TOP_PERFORMERS: "top_performers_max_entries",
}


class VisibilityBody(BaseModel):
    is_visible: bool


class PositionBody(BaseModel):
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    w: int = Field(..., ge=1)
    h: int = Field(..., ge=1)


@router.get("/config")
async def get_config(deps: Deps) -> dict[str, Any]:
    """Current dashboard layout."""
    return to_dict(deps.dashboard.config)


@router.put("/widgets/{widget_id}/visibility")
async def put_visibility(widget_id: str, body: VisibilityBody, deps: Deps) -> dict[str, Any]:
    """Show or hide a widget."""
    return to_dict(await deps.dashboard.dispatch(set_widget_visibility, widget_id, body.is_visible))


@router.put("/widgets/{widget_id}/position")
async def put_position(widget_id: str, body: PositionBody, deps: Deps) -> dict[str, Any]:
    """Move or resize a widget."""
    position = WidgetPosition(x=body.x, y=body.y, w=body.w, h=body.h)
    return to_dict(await deps.dashboard.dispatch(update_widget_position, widget_id, position))


@router.put("/widgets/{widget_id}/config")
async def put_widget_config(widget_id: str, values: dict[str, Any], deps: Deps) -> dict[str, Any]:
    """Merge values into a widget's config."""
    return to_dict(await deps.dashboard.dispatch(update_widget_config, widget_id, values))


@router.post("/reset")
async def post_reset(deps: Deps) -> dict[str, Any]:
    """Restore the default layout."""
    return to_dict(await deps.dashboard.dispatch(reset_to_default))


@router.get("/widgets/{kind}/data")
async def get_widget_data(
    kind: str,
    deps: Deps,
    year: int,
    month: int,
    as_of: Optional[date] = None,
    owner_ids: Annotated[Optional[list[str]], Query()] = None,
    max_entries: Optional[int] = None,
) -> dict[str, Any]:
    """Data for one widget kind over a period."""
    try:
        widget_kind = WidgetKind(kind)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown widget kind: {kind}")

    if max_entries is None:
        setting = MAX_ENTRIES_SETTINGS.get(widget_kind)
        max_entries = await deps.settings.get(setting) if setting else 10

    ctx = WidgetContext(
        manager=deps.manager,
        year=year,
        month=month,
        as_of=as_of or date.today(),
        owner_ids=owner_ids,
        max_entries=int(max_entries),
    )
    return await render_widget(widget_kind, ctx)
