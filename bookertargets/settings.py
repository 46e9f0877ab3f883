"""
Settings - Runtime configuration stored in the database.

Usage:
    settings = Settings()
    limit = await settings.get('target_progress_max_entries')
    await settings.set('currency', 'PKR')
    all_settings = await settings.all()
"""

from typing import Any

from bookertargets.database import Database
from bookertargets.utils.decorators import singleton

# Default settings - applied on first run, then editable via the API
DEFAULTS = {
    # Display currency for amounts
    "currency": "PKR",
    # Dashboard widgets
    "target_progress_max_entries": 10,  # Order bookers listed in the progress widget
    "top_performers_max_entries": 5,
}


@singleton
class Settings:
    """Single source of truth for runtime settings."""

    _db: "Database"

    def __init__(self):
        self._db = Database()

    async def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value."""
        value = await self._db.get_setting(key)
        if value is None:
            return default if default is not None else DEFAULTS.get(key)
        return value

    async def set(self, key: str, value: Any) -> None:
        """Set a setting value."""
        await self._db.set_setting(key, value)

    async def all(self) -> dict:
        """Get all settings with defaults applied."""
        stored = await self._db.get_all_settings()
        result = DEFAULTS.copy()
        result.update(stored)
        return result

    async def init_defaults(self) -> None:
        """Initialize default settings if not already set."""
        for key, value in DEFAULTS.items():
            existing = await self._db.get_setting(key)
            if existing is None:
                await self._db.set_setting(key, value)
