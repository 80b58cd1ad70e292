"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from appsimple.core.permissions import UserRole


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=50, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class LoginResponse(BaseModel):
    """Returned after a successful login. Send `token` as: Authorization: Bearer <token>"""

    token: str = Field(..., description="JWT bearer token")
    username: str
    role: UserRole


class TokenValidationResponse(BaseModel):
    """Result of GET /auth/validate for a valid token."""

    username: str
    valid: bool = True


class CurrentUser(BaseModel):
    """Authenticated principal (from validated token claims) for dependency injection and sessions."""

    model_config = ConfigDict(from_attributes=True)

    uid: str
    username: str
    email: str = ""
    role: UserRole


class MessageResponse(BaseModel):
    """Plain message payload."""

    message: str
