"""Pydantic request/response schemas."""

from appsimple.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    TokenValidationResponse,
)
from appsimple.schemas.health import HealthResponse
from appsimple.schemas.users import (
    AdminUpdateUserRequest,
    ChangePasswordRequest,
    CreateUserRequest,
    SetRoleRequest,
    UpdateProfileRequest,
    UserOut,
    UsersListResponse,
)

__all__ = [
    "AdminUpdateUserRequest",
    "ChangePasswordRequest",
    "CreateUserRequest",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "SetRoleRequest",
    "TokenValidationResponse",
    "UpdateProfileRequest",
    "UserOut",
    "UsersListResponse",
]
