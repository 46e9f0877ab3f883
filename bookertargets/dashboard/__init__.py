"""
Dashboard Package

Persisted widget layout (store) and widget data rendering by kind (widgets).
"""

from bookertargets.dashboard.store import (
    DashboardStore,
    UnknownWidgetError,
    reset_to_default,
    set_widget_visibility,
    update_widget_config,
    update_widget_position,
)
from bookertargets.dashboard.types import DashboardConfig, WidgetKind, WidgetPosition, WidgetSettings
from bookertargets.dashboard.widgets import WidgetContext, render_widget

__all__ = [
    "DashboardConfig",
    "DashboardStore",
    "UnknownWidgetError",
    "WidgetContext",
    "WidgetKind",
    "WidgetPosition",
    "WidgetSettings",
    "render_widget",
    "reset_to_default",
    "set_widget_visibility",
    "update_widget_config",
    "update_widget_position",
]
