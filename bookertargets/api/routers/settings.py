"""Settings API routes."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from typing_extensions import Annotated

from bookertargets.api.dependencies import CommonDependencies, get_common_deps
from bookertargets.settings import DEFAULTS

router = APIRouter(prefix="/settings", tags=["settings"])

# Settings that must be positive integers
INT_KEYS = {"target_progress_max_entries", "top_performers_max_entries"}


@router.get("")
async def get_settings(
    deps: Annotated[CommonDependencies, Depends(get_common_deps)],
) -> dict[str, Any]:
    """Get all settings."""
    return await deps.settings.all()


@router.put("/{key}")
async def set_setting(
    key: str,
    value: dict,
    deps: Annotated[CommonDependencies, Depends(get_common_deps)],
) -> dict[str, str]:
    """Set a setting value. Body: {"value": ...}."""
    if key not in DEFAULTS:
        raise HTTPException(status_code=404, detail=f"Unknown setting: {key}")
    if "value" not in value:
        raise HTTPException(status_code=400, detail="Body must contain 'value'")

    new_value = value["value"]
    if key in INT_KEYS:
        if isinstance(new_value, bool) or not isinstance(new_value, int) or new_value < 1:
            raise HTTPException(status_code=400, detail=f"{key} must be a positive integer")

    await deps.settings.set(key, new_value)
    return {"status": "ok"}
