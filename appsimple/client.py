"""HTTP client used by console front-ends. Owns the front-end's UserSession."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from appsimple.core.errors import PermissionDeniedError
from appsimple.core.permissions import Permission, UserRole
from appsimple.schemas.auth import LoginResponse
from appsimple.schemas.health import HealthResponse
from appsimple.schemas.users import UserOut
from appsimple.session import UserSession

if TYPE_CHECKING:
    from appsimple.core.config import ClientSettings

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """Raised when the API answers with an unexpected status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ApiClient:
    """
    Typed client for the AppSimple API.

    Reads (health, profile, user list) and login return None / empty / False
    instead of raising when the API is unreachable or says no; mutations
    raise httpx.HTTPError on transport failures. Privileged calls are gated
    locally by the session's permission check before any request is sent;
    the server enforces the same table again.
    """

    def __init__(
        self,
        base_url: str,
        api_prefix: str = "/api/v1",
        timeout: float = 10.0,
        session: UserSession | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.session = session if session is not None else UserSession()
        self._http = httpx.Client(
            base_url=base_url.rstrip("/") + api_prefix,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: ClientSettings, **kwargs: Any) -> ApiClient:
        return cls(
            settings.API_BASE_URL,
            api_prefix=settings.API_V1_PREFIX,
            timeout=settings.API_REQUEST_TIMEOUT_SEC,
            **kwargs,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ── Authentication ─────────────────────────────────────────────────────

    def login(self, username: str, password: str) -> bool:
        """Log in and populate the session with the caller's profile. False on bad credentials."""
        try:
            resp = self._http.post("/auth/login", json={"username": username, "password": password})
        except httpx.HTTPError as e:
            logger.error("Login request failed for '%s': %s", username, e)
            return False
        if resp.status_code != httpx.codes.OK:
            logger.warning("Login rejected for '%s' (status %s)", username, resp.status_code)
            return False
        try:
            login = LoginResponse.model_validate(resp.json())
            me = self._get_profile(login.token)
        except ValueError as e:
            logger.error("Login for '%s' could not be completed: %s", username, e)
            return False
        if me is None:
            logger.warning("Login succeeded but profile for '%s' could not be loaded", username)
            return False
        self.session.login(me, login.token)
        logger.info("Logged in as '%s' (role %s)", me.username, login.role.value)
        return True

    def logout(self) -> None:
        self.session.logout()

    def _get_profile(self, token: str) -> UserOut | None:
        try:
            resp = self._http.get("/protected/me", headers={"Authorization": f"Bearer {token}"})
        except httpx.HTTPError as e:
            logger.error("Profile request failed: %s", e)
            return None
        if resp.status_code != httpx.codes.OK:
            return None
        try:
            return UserOut.model_validate(resp.json())
        except ValueError:
            logger.error("Unexpected profile payload from API")
            return None

    def _require(self, permission: Permission) -> dict[str, str]:
        if not self.session.has_permission(permission):
            raise PermissionDeniedError(permission)
        return self.session.auth_header()

    # ── Public ─────────────────────────────────────────────────────────────

    def get_health(self) -> HealthResponse | None:
        try:
            resp = self._http.get("/health")
        except httpx.HTTPError as e:
            logger.error("Health check failed: %s", e)
            return None
        if resp.status_code != httpx.codes.OK:
            return None
        return HealthResponse.model_validate(resp.json())

    # ── Own profile ────────────────────────────────────────────────────────

    def get_me(self) -> UserOut | None:
        self._require(Permission.VIEW_PROFILE)
        return self._get_profile(self.session.token or "")

    def change_password(self, current_password: str, new_password: str) -> bool:
        headers = self._require(Permission.EDIT_PROFILE)
        resp = self._http.post(
            "/protected/me/change-password",
            json={"current_password": current_password, "new_password": new_password},
            headers=headers,
        )
        return resp.status_code == httpx.codes.NO_CONTENT

    # ── Admin ──────────────────────────────────────────────────────────────

    def list_users(self) -> list[UserOut]:
        headers = self._require(Permission.VIEW_USERS)
        try:
            resp = self._http.get("/admin/users", headers=headers)
        except httpx.HTTPError as e:
            logger.error("Listing users failed: %s", e)
            return []
        if resp.status_code != httpx.codes.OK:
            logger.warning("Listing users failed (status %s)", resp.status_code)
            return []
        return [UserOut.model_validate(u) for u in resp.json().get("users", [])]

    def create_user(self, username: str, email: str, password: str) -> UserOut | None:
        headers = self._require(Permission.CREATE_USER)
        resp = self._http.post(
            "/admin/users",
            json={"username": username, "email": email, "password": password},
            headers=headers,
        )
        if resp.status_code != httpx.codes.CREATED:
            logger.warning(
                "Creating user '%s' failed (status %s): %s",
                username,
                resp.status_code,
                _error_message(resp),
            )
            return None
        return UserOut.model_validate(resp.json())

    def set_role(self, uid: str, role: UserRole) -> bool:
        headers = self._require(Permission.EDIT_USER)
        resp = self._http.patch(f"/admin/users/{uid}/role", json={"role": role.value}, headers=headers)
        return resp.status_code == httpx.codes.NO_CONTENT

    def delete_user(self, uid: str) -> bool:
        headers = self._require(Permission.DELETE_USER)
        resp = self._http.delete(f"/admin/users/{uid}", headers=headers)
        if resp.status_code == httpx.codes.NO_CONTENT:
            return True
        if resp.status_code >= 500:
            raise ApiClientError(_error_message(resp), resp.status_code)
        logger.warning("Deleting user %s failed: %s", uid, _error_message(resp))
        return False


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(body, dict):
        return str(body.get("error") or body.get("detail") or body)[:200]
    return str(body)[:200]
