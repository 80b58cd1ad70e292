"""Endpoints for any authenticated user: greeting, own profile, own password."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from appsimple.api.deps import get_password_hasher
from appsimple.api.v1.auth import require_permission
from appsimple.core.database import get_db
from appsimple.core.permissions import Permission
from appsimple.core.security import PasswordHasher
from appsimple.schemas.auth import CurrentUser, MessageResponse
from appsimple.schemas.users import ChangePasswordRequest, UpdateProfileRequest, UserOut
from appsimple.services.user_service import UserService

router = APIRouter()


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> UserService:
    return UserService(db, hasher)


@router.get("", response_model=MessageResponse)
def hello(
    current_user: Annotated[CurrentUser, Depends(require_permission(Permission.VIEW_PROFILE))],
) -> MessageResponse:
    """Confirm the caller is authenticated."""
    return MessageResponse(message=f"Hello, {current_user.username}! You are authenticated.")


@router.get("/me", response_model=UserOut)
def get_me(
    current_user: Annotated[CurrentUser, Depends(require_permission(Permission.VIEW_PROFILE))],
    users: Annotated[UserService, Depends(get_user_service)],
) -> UserOut:
    """Return the caller's own profile."""
    return UserOut.model_validate(users.get(current_user.uid))


@router.put("/me", response_model=UserOut)
def update_me(
    body: UpdateProfileRequest,
    current_user: Annotated[CurrentUser, Depends(require_permission(Permission.EDIT_PROFILE))],
    users: Annotated[UserService, Depends(get_user_service)],
) -> UserOut:
    """Update the caller's own non-privileged profile fields."""
    return UserOut.model_validate(users.update_profile(current_user.uid, body))


@router.post("/me/change-password", status_code=status.HTTP_204_NO_CONTENT)
def change_password(
    body: ChangePasswordRequest,
    current_user: Annotated[CurrentUser, Depends(require_permission(Permission.EDIT_PROFILE))],
    users: Annotated[UserService, Depends(get_user_service)],
) -> Response:
    """Change the caller's password. Existing tokens stay valid until they expire."""
    users.change_password(current_user.uid, body.current_password, body.new_password)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
