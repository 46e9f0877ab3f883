"""FastAPI dependencies for API routers.

Provides common dependencies that can be injected into route handlers.
"""

from dataclasses import dataclass

from bookertargets.batch import BatchOperations
from bookertargets.dashboard import DashboardStore
from bookertargets.database import Database
from bookertargets.settings import Settings
from bookertargets.targets import TargetManager

# Set by the app lifespan once the stored layout is loaded
_dashboard_store: DashboardStore | None = None


def set_dashboard_store(store: DashboardStore | None) -> None:
    """Set the dashboard store shared by request handlers."""
    global _dashboard_store
    _dashboard_store = store


@dataclass
class CommonDependencies:
    """Common dependencies used across API routes.

    Usage:
        @router.get("/endpoint")
        async def my_endpoint(deps: Annotated[CommonDependencies, Depends(get_common_deps)]):
            targets = await deps.manager.get_by_period(2024, 6)
    """

    db: Database
    settings: Settings
    manager: TargetManager
    batch: BatchOperations
    dashboard: DashboardStore


async def get_common_deps() -> CommonDependencies:
    """Factory for common dependencies.

    Returns the singleton Database and Settings, with a TargetManager and
    BatchOperations bound to that database.
    """
    db = Database()
    manager = TargetManager(db)
    dashboard = _dashboard_store
    if dashboard is None:
        dashboard = DashboardStore(db)
        await dashboard.load()
        set_dashboard_store(dashboard)
    return CommonDependencies(
        db=db,
        settings=Settings(),
        manager=manager,
        batch=BatchOperations(manager),
        dashboard=dashboard,
    )
