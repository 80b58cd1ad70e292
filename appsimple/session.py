"""Per-process holder of the authenticated principal and its bearer token."""

from typing import Any

from appsimple.core.permissions import Permission, UserRole, grants


class UserSession:
    """
    Client-side login state for one running front-end.

    Created explicitly by the client that owns it and never persisted.
    Single-writer: only login() and logout() mutate it. Permission checks go
    through the shared role table, same as the server.
    """

    def __init__(self) -> None:
        self._current_user: Any | None = None
        self._token: str | None = None

    @property
    def current_user(self) -> Any | None:
        return self._current_user

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def is_logged_in(self) -> bool:
        return self._current_user is not None and self._token is not None

    @property
    def role(self) -> UserRole | None:
        if self._current_user is None:
            return None
        try:
            return UserRole(self._current_user.role)
        except ValueError:
            return None

    def login(self, user: Any, token: str) -> None:
        """Store the authenticated user (anything with a `role`) and the token issued at login."""
        if user is None or not token:
            raise ValueError("login requires both a user and a token")
        self._current_user = user
        self._token = token

    def logout(self) -> None:
        self._current_user = None
        self._token = None

    def has_permission(self, permission: Permission | int) -> bool:
        """False when logged out; otherwise whatever the role table says."""
        if not self.is_logged_in:
            return False
        role = self.role
        if role is None:
            return False
        return grants(role, permission)

    def auth_header(self) -> dict[str, str]:
        """Authorization header for API calls; empty when logged out."""
        if self._token is None:
            return {}
        return {"Authorization": f"Bearer {self._token}"}
