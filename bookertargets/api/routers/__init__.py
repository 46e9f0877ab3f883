"""API routers.

Each router handles a specific area of the API.
"""

from bookertargets.api.routers.dashboard import router as dashboard_router
from bookertargets.api.routers.settings import router as settings_router
from bookertargets.api.routers.targets import router as targets_router

__all__ = [
    "dashboard_router",
    "settings_router",
    "targets_router",
]
