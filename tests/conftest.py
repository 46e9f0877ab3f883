"""Pytest configuration and fixtures."""

import os
import tempfile

import pytest
import pytest_asyncio

from bookertargets.api.dependencies import CommonDependencies
from bookertargets.batch import BatchOperations
from bookertargets.dashboard import DashboardStore
from bookertargets.database import Database
from bookertargets.settings import Settings
from bookertargets.targets import TargetManager


def _cleanup(db_path: str) -> None:
    for ext in ["", "-wal", "-shm"]:
        path = db_path + ext
        if os.path.exists(path):
            os.unlink(path)


@pytest_asyncio.fixture
async def temp_db():
    """Create a connected database in a temporary file."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = Database(db_path)
    await db.connect()

    yield db

    await db.close()
    db.remove_from_cache()
    _cleanup(db_path)


@pytest_asyncio.fixture
async def manager(temp_db):
    """Target manager backed by the temporary database."""
    return TargetManager(temp_db)


@pytest_asyncio.fixture
async def batch(manager):
    """Batch operations backed by the temporary database."""
    return BatchOperations(manager)


@pytest.fixture(autouse=True)
def reset_settings_singleton():
    """Give every test a fresh Settings instance."""
    Settings._clear()
    yield
    Settings._clear()


@pytest_asyncio.fixture
async def settings(temp_db):
    """Settings backed by the temporary database, defaults seeded."""
    settings = Settings()
    settings._db = temp_db
    await settings.init_defaults()
    return settings


@pytest_asyncio.fixture
async def deps(temp_db, manager, batch, settings):
    """Route dependencies bound to the temporary database."""
    dashboard = DashboardStore(temp_db)
    await dashboard.load()
    return CommonDependencies(
        db=temp_db,
        settings=settings,
        manager=manager,
        batch=batch,
        dashboard=dashboard,
    )
