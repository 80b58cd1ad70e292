"""JWT login and auth dependencies (get_current_user, require_permission)."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from appsimple.api.deps import get_auth_service, get_token_service
from appsimple.core.database import get_db
from appsimple.core.errors import InvalidCredentialsError, PermissionDeniedError, TokenInvalidError
from appsimple.core.permissions import Permission, grants
from appsimple.core.tokens import TokenService
from appsimple.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    TokenValidationResponse,
)
from appsimple.services.auth_service import AuthService

router = APIRouter()
security = HTTPBearer(auto_error=False)


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    """
    Authenticate with username and password; returns a JWT bearer token.
    Include the token in the Authorization header as: Bearer <token>
    """
    result = auth.login(db, body.username, body.password)
    if result is None:
        raise InvalidCredentialsError()
    return result


@router.get(
    "/validate",
    response_model=TokenValidationResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"description": "Token is invalid or expired"}},
)
def validate(
    token: Annotated[str, Query(min_length=1)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenValidationResponse | JSONResponse:
    """Validate a token and return the embedded username."""
    username = auth.validate_token(token)
    if username is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Token is invalid or expired."},
        )
    return TokenValidationResponse(username=username)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """Dependency: require a valid Bearer JWT and return the principal it asserts."""
    if credentials is None:
        raise TokenInvalidError("Not authenticated")
    current_user = tokens.get_claims(credentials.credentials)
    if current_user is None:
        raise TokenInvalidError()
    return current_user


def require_permission(permission: Permission) -> Callable[..., CurrentUser]:
    """Dependency factory: authenticated principal whose role grants `permission`."""

    def dependency(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if not grants(current_user.role, permission):
            raise PermissionDeniedError(permission)
        return current_user

    dependency.__name__ = f"require_{permission.name.lower()}"
    return dependency
