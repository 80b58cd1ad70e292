"""Security core: configuration, database, hashing, tokens, permissions, errors."""

from appsimple.core.config import get_settings
from appsimple.core.database import get_db

__all__ = ["get_settings", "get_db"]
