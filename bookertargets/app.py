"""
Web API - FastAPI entry point.

Usage:
    uvicorn bookertargets.app:app --host 0.0.0.0 --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookertargets.api.dependencies import set_dashboard_store
from bookertargets.api.errors import register_exception_handlers
from bookertargets.api.routers import dashboard_router, settings_router, targets_router
from bookertargets.config import config
from bookertargets.dashboard import DashboardStore
from bookertargets.database import Database
from bookertargets.settings import Settings
from bookertargets.version import VERSION

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize services on startup, cleanup on shutdown."""
    # Startup
    db = Database()
    await db.connect()

    settings = Settings()
    await settings.init_defaults()
    logger.info("Settings initialized")

    store = DashboardStore(db)
    await store.load()
    set_dashboard_store(store)
    logger.info(f"Dashboard layout loaded ({len(store.config.visible_widgets())} visible widgets)")

    yield

    # Shutdown
    set_dashboard_store(None)
    await db.close()


app = FastAPI(
    title=config.app_name,
    description="Order booker monthly targets and pacing",
    version=VERSION,
    lifespan=lifespan,
)

# CORS for development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(targets_router, prefix="/api")
app.include_router(dashboard_router, prefix="/api")
app.include_router(settings_router, prefix="/api")
