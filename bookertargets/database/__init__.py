"""
Database Package

Provides database access for monthly targets and settings.
"""

from bookertargets.database.base import BaseDatabase
from bookertargets.database.main import Database

__all__ = ["Database", "BaseDatabase"]
