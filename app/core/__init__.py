"""Core app configuration, database handle and errors."""

from app.core.config import Settings, get_settings
from app.core.database import Database, get_db

__all__ = ["Database", "Settings", "get_db", "get_settings"]
