"""User management: create, update, delete, change password, set role."""

import logging

from sqlalchemy.orm import Session

from appsimple.core.errors import (
    DuplicateEntityError,
    EntityNotFoundError,
    SystemEntityProtectedError,
    UnauthorizedError,
)
from appsimple.core.permissions import UserRole
from appsimple.core.security import PasswordHasher
from appsimple.models import User
from appsimple.repositories import UserRepository
from appsimple.schemas.users import AdminUpdateUserRequest, UpdateProfileRequest

logger = logging.getLogger(__name__)

_PROFILE_FIELDS = ("first_name", "last_name", "phone_number", "bio")


class UserService:
    """
    Business rules on top of UserRepository.

    Raises domain errors (EntityNotFoundError, DuplicateEntityError,
    SystemEntityProtectedError, UnauthorizedError); the HTTP layer maps them
    to status codes. Every mutating method commits its own transaction.
    """

    def __init__(self, db: Session, hasher: PasswordHasher) -> None:
        self.db = db
        self.repo = UserRepository(db)
        self._hasher = hasher

    def get(self, uid: str) -> User:
        user = self.repo.get_by_uid(uid)
        if user is None:
            raise EntityNotFoundError("User", uid)
        return user

    def get_by_username(self, username: str) -> User | None:
        return self.repo.get_by_username(username)

    def list_all(self) -> list[User]:
        return self.repo.list_all()

    def create(
        self,
        username: str,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        username = username.strip()
        email = email.strip()
        if self.repo.username_exists(username):
            raise DuplicateEntityError("Username", username)
        if self.repo.email_exists(email):
            raise DuplicateEntityError("Email", email)
        user = User(
            username=username,
            email=email,
            password_hash=self._hasher.hash(password),
            role=role,
            is_active=True,
            is_system=False,
        )
        self.repo.add(user)
        self.db.commit()
        logger.info("User %s created with uid %s.", username, user.uid)
        return user

    def update_profile(self, uid: str, changes: UpdateProfileRequest) -> User:
        """Apply the non-privileged profile fields that were sent."""
        user = self._get_mutable(uid)
        self._apply(user, changes, _PROFILE_FIELDS)
        return self._save(user)

    def admin_update(self, uid: str, changes: AdminUpdateUserRequest) -> User:
        """Apply profile fields plus role / active flag."""
        user = self._get_mutable(uid)
        self._apply(user, changes, _PROFILE_FIELDS + ("role", "is_active"))
        return self._save(user)

    def set_role(self, uid: str, role: UserRole) -> User:
        user = self._get_mutable(uid)
        user.role = role
        saved = self._save(user)
        logger.info("Role of user %s set to %s.", uid, role.value)
        return saved

    def delete(self, uid: str) -> None:
        self._get_mutable(uid)
        self.repo.delete(uid)
        self.db.commit()

    def change_password(self, uid: str, current_password: str, new_password: str) -> None:
        """
        Rotate a user's password after checking the current one.

        Allowed for the system admin too. Tokens issued before the change stay
        valid until they expire.
        """
        user = self.get(uid)
        if not self._hasher.verify(current_password, user.password_hash):
            raise UnauthorizedError("Current password is incorrect.")
        user.password_hash = self._hasher.hash(new_password)
        self.repo.update(user, allow_system=True)
        self.db.commit()
        logger.info("Password changed for user %s.", uid)

    def _get_mutable(self, uid: str) -> User:
        user = self.get(uid)
        if user.is_system:
            raise SystemEntityProtectedError("User")
        return user

    @staticmethod
    def _apply(user: User, changes: UpdateProfileRequest, fields: tuple[str, ...]) -> None:
        sent = changes.model_dump(exclude_unset=True, exclude_none=True)
        for field in fields:
            if field in sent:
                setattr(user, field, sent[field])

    def _save(self, user: User) -> User:
        self.repo.update(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info("User %s updated.", user.uid)
        return user
