"""Persistence layer."""

from appsimple.repositories.user_repo import UserRepository

__all__ = ["UserRepository"]
