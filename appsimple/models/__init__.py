"""SQLAlchemy ORM models."""

from appsimple.models.base import Base
from appsimple.models.user import User, normalize_identity

__all__ = ["Base", "User", "normalize_identity"]
