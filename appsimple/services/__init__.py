"""Application services."""

from appsimple.services.auth_service import AuthService
from appsimple.services.bootstrap import DatabaseBootstrap
from appsimple.services.user_service import UserService

__all__ = ["AuthService", "DatabaseBootstrap", "UserService"]
