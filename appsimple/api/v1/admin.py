"""Admin-only user management endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from appsimple.api.v1.auth import require_permission
from appsimple.api.v1.protected import get_user_service
from appsimple.core.permissions import Permission
from appsimple.schemas.auth import CurrentUser
from appsimple.schemas.users import (
    AdminUpdateUserRequest,
    CreateUserRequest,
    SetRoleRequest,
    UserOut,
    UsersListResponse,
)
from appsimple.services.user_service import UserService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/users", response_model=UsersListResponse)
def list_users(
    admin: Annotated[CurrentUser, Depends(require_permission(Permission.VIEW_USERS))],
    users: Annotated[UserService, Depends(get_user_service)],
) -> UsersListResponse:
    """List all users."""
    items = [UserOut.model_validate(u) for u in users.list_all()]
    logger.debug("Admin '%s' retrieved all users (%s records)", admin.username, len(items))
    return UsersListResponse(users=items)


@router.get("/users/{uid}", response_model=UserOut)
def get_user(
    uid: str,
    _admin: Annotated[CurrentUser, Depends(require_permission(Permission.VIEW_USERS))],
    users: Annotated[UserService, Depends(get_user_service)],
) -> UserOut:
    return UserOut.model_validate(users.get(uid))


@router.post("/users", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    body: CreateUserRequest,
    admin: Annotated[CurrentUser, Depends(require_permission(Permission.CREATE_USER))],
    users: Annotated[UserService, Depends(get_user_service)],
) -> UserOut:
    """Create a regular user. 409 if the username or email is taken."""
    user = users.create(body.username, str(body.email), body.password)
    logger.info("Admin '%s' created user '%s' (%s)", admin.username, user.username, user.uid)
    return UserOut.model_validate(user)


@router.put("/users/{uid}", response_model=UserOut)
def update_user(
    uid: str,
    body: AdminUpdateUserRequest,
    admin: Annotated[CurrentUser, Depends(require_permission(Permission.EDIT_USER))],
    users: Annotated[UserService, Depends(get_user_service)],
) -> UserOut:
    """Update profile fields, role and/or active flag. 403 for the system admin."""
    user = users.admin_update(uid, body)
    logger.info("Admin '%s' updated user '%s' (%s)", admin.username, user.username, uid)
    return UserOut.model_validate(user)


@router.patch("/users/{uid}/role", status_code=status.HTTP_204_NO_CONTENT)
def set_role(
    uid: str,
    body: SetRoleRequest,
    admin: Annotated[CurrentUser, Depends(require_permission(Permission.EDIT_USER))],
    users: Annotated[UserService, Depends(get_user_service)],
) -> Response:
    users.set_role(uid, body.role)
    logger.info("Admin '%s' set role of user (%s) to %s", admin.username, uid, body.role.value)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/users/{uid}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    uid: str,
    admin: Annotated[CurrentUser, Depends(require_permission(Permission.DELETE_USER))],
    users: Annotated[UserService, Depends(get_user_service)],
) -> Response:
    """Delete a user. 404 if absent, 403 for the system admin."""
    users.delete(uid)
    logger.info("Admin '%s' deleted user (%s)", admin.username, uid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
