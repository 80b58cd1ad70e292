"""Request/response schemas for user management endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from appsimple.core.permissions import UserRole


class UserOut(BaseModel):
    """Safe user representation (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    uid: str
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    bio: str | None = None
    role: UserRole
    is_active: bool
    is_system: bool
    created_at: datetime
    updated_at: datetime


class UsersListResponse(BaseModel):
    """Response for GET /admin/users."""

    users: list[UserOut]


class CreateUserRequest(BaseModel):
    """Body for POST /admin/users."""

    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)


class UpdateProfileRequest(BaseModel):
    """Fields a user may change on their own profile."""

    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    phone_number: str | None = Field(default=None, max_length=30)
    bio: str | None = Field(default=None, max_length=500)


class AdminUpdateUserRequest(UpdateProfileRequest):
    """Admin-side update: profile fields plus role and active flag."""

    role: UserRole | None = None
    is_active: bool | None = None


class SetRoleRequest(BaseModel):
    """Body for PATCH /admin/users/{uid}/role."""

    role: UserRole


class ChangePasswordRequest(BaseModel):
    """Body for POST /protected/me/change-password."""

    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=8, max_length=128)
