"""Dashboard configuration types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class WidgetKind(str, Enum):
    """Kinds of dashboard widget that have a data renderer."""

    TARGET_PROGRESS = "target-progress"
    TARGET_SUMMARY = "target-summary"
    TOP_PERFORMERS = "top-performers"


@dataclass(frozen=True)
class WidgetPosition:
    """Grid placement of a widget."""

    x: int
    y: int
    w: int
    h: int


@dataclass(frozen=True)
class WidgetSettings:
    """Layout and visibility of one widget."""

    id: str
    kind: WidgetKind
    title: str
    size: str  # 'small', 'medium', 'large' or 'xlarge'
    position: WidgetPosition
    is_visible: bool = True
    refresh_interval_ms: Optional[int] = None
    priority: str = "medium"  # 'critical', 'high', 'medium' or 'low'
    config: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DashboardConfig:
    """Persisted dashboard layout."""

    widgets: tuple[WidgetSettings, ...]
    version: int
    last_modified: Optional[datetime] = None

    def widget(self, widget_id: str) -> Optional[WidgetSettings]:
        for widget in self.widgets:
            if widget.id == widget_id:
                return widget
        return None

    def visible_widgets(self) -> list[WidgetSettings]:
        return [w for w in self.widgets if w.is_visible]
