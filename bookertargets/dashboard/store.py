"""
Dashboard Store - Persisted widget layout and visibility.

Lifecycle:
    store = DashboardStore(db)
    await store.load()                       # once at startup
    await store.dispatch(set_widget_visibility, 'top-performers', False)

Reducers are pure functions (config, *args) -> config. dispatch() applies
one and persists the result when it differs from the current config. The
store is passed to its consumers; there is no module-level instance.

Stored layouts carry a schema version. Older versions are migrated on load;
version 0 (unversioned) layouts are replaced with the defaults.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import asdict, replace
from datetime import datetime, timezone
from typing import Any, Optional

from bookertargets.dashboard.types import DashboardConfig, WidgetKind, WidgetPosition, WidgetSettings
from bookertargets.database import Database

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1
STORAGE_KEY = "dashboard_config"

DEFAULT_WIDGETS: tuple[WidgetSettings, ...] = (
    WidgetSettings(
        id="target-progress",
        kind=WidgetKind.TARGET_PROGRESS,
        title="Target Achievement Progress",
        size="large",
        position=WidgetPosition(x=0, y=0, w=6, h=3),
        refresh_interval_ms=900_000,  # 15 minutes
        priority="high",
    ),
    WidgetSettings(
        id="target-summary",
        kind=WidgetKind.TARGET_SUMMARY,
        title="Monthly Target Summary",
        size="medium",
        position=WidgetPosition(x=6, y=0, w=3, h=2),
        refresh_interval_ms=1_800_000,  # 30 minutes
        priority="critical",
    ),
    WidgetSettings(
        id="top-performers",
        kind=WidgetKind.TOP_PERFORMERS,
        title="Top Performers",
        size="medium",
        position=WidgetPosition(x=9, y=0, w=3, h=3),
        refresh_interval_ms=900_000,
        priority="high",
    ),
)


class UnknownWidgetError(LookupError):
    """Raised when a reducer targets a widget id that isn't configured."""

    def __init__(self, widget_id: str):
        self.widget_id = widget_id
        super().__init__(f"Unknown widget: {widget_id}")


def default_config() -> DashboardConfig:
    return DashboardConfig(widgets=DEFAULT_WIDGETS, version=SCHEMA_VERSION)


# -----------------------------------------------------------------------------
# Reducers
# -----------------------------------------------------------------------------


def _replace_widget(config: DashboardConfig, widget_id: str, /, **changes) -> DashboardConfig:
    if config.widget(widget_id) is None:
        raise UnknownWidgetError(widget_id)
    widgets = tuple(replace(w, **changes) if w.id == widget_id else w for w in config.widgets)
    return replace(config, widgets=widgets, last_modified=datetime.now(timezone.utc))


def set_widget_visibility(config: DashboardConfig, widget_id: str, is_visible: bool) -> DashboardConfig:
    widget = config.widget(widget_id)
    if widget is not None and widget.is_visible == is_visible:
        return config
    return _replace_widget(config, widget_id, is_visible=is_visible)


def update_widget_position(config: DashboardConfig, widget_id: str, position: WidgetPosition) -> DashboardConfig:
    widget = config.widget(widget_id)
    if widget is not None and widget.position == position:
        return config
    return _replace_widget(config, widget_id, position=position)


def update_widget_config(config: DashboardConfig, widget_id: str, values: dict[str, Any]) -> DashboardConfig:
    """Merge values into a widget's free-form config."""
    widget = config.widget(widget_id)
    if widget is None:
        raise UnknownWidgetError(widget_id)
    return _replace_widget(config, widget_id, config={**widget.config, **values})


def reset_to_default(config: DashboardConfig) -> DashboardConfig:
    return replace(default_config(), last_modified=datetime.now(timezone.utc))


# -----------------------------------------------------------------------------
# Serialization and migration
# -----------------------------------------------------------------------------


def to_dict(config: DashboardConfig) -> dict:
    return {
        "version": config.version,
        "last_modified": config.last_modified.isoformat() if config.last_modified else None,
        "widgets": [{**asdict(w), "kind": w.kind.value} for w in config.widgets],
    }


def from_dict(data: dict) -> DashboardConfig:
    widgets = tuple(
        WidgetSettings(
            id=w["id"],
            kind=WidgetKind(w["kind"]),
            title=w["title"],
            size=w["size"],
            position=WidgetPosition(**w["position"]),
            is_visible=w.get("is_visible", True),
            refresh_interval_ms=w.get("refresh_interval_ms"),
            priority=w.get("priority", "medium"),
            config=w.get("config") or {},
        )
        for w in data["widgets"]
    )
    last_modified = data.get("last_modified")
    return DashboardConfig(
        widgets=widgets,
        version=data["version"],
        last_modified=datetime.fromisoformat(last_modified) if last_modified else None,
    )


def migrate(stored: dict) -> DashboardConfig:
    """Bring a stored layout up to SCHEMA_VERSION."""
    version = stored.get("version", 0) if isinstance(stored, dict) else 0
    if version == 0:
        logger.info("Replacing unversioned dashboard layout with defaults")
        return default_config()
    if version > SCHEMA_VERSION:
        logger.warning(f"Dashboard layout version {version} is newer than {SCHEMA_VERSION}; using defaults")
        return default_config()
    return from_dict(stored)


# -----------------------------------------------------------------------------
# Store
# -----------------------------------------------------------------------------

Reducer = Callable[..., DashboardConfig]


class DashboardStore:
    """Holds the current dashboard config and persists it on change."""

    def __init__(self, db: Optional[Database] = None):
        self._db = db or Database()
        self._config = default_config()
        self._loaded = False

    @property
    def config(self) -> DashboardConfig:
        return self._config

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def load(self) -> DashboardConfig:
        """Read the stored layout, migrating and re-saving older versions."""
        stored = await self._db.get_setting(STORAGE_KEY)
        if stored is None:
            self._config = default_config()
        else:
            self._config = migrate(stored)
            if not isinstance(stored, dict) or stored.get("version") != self._config.version:
                await self.persist()
        self._loaded = True
        return self._config

    async def persist(self) -> None:
        await self._db.set_setting(STORAGE_KEY, to_dict(self._config))

    async def dispatch(self, reducer: Reducer, *args, **kwargs) -> DashboardConfig:
        """Apply a reducer to the current config and persist the result if it changed."""
        new_config = reducer(self._config, *args, **kwargs)
        if new_config is not self._config:
            self._config = new_config
            await self.persist()
        return self._config
