"""Credential check and token issuance."""

import logging

from sqlalchemy.orm import Session

from appsimple.core.security import PasswordHasher
from appsimple.core.tokens import TokenService
from appsimple.models import User
from appsimple.repositories import UserRepository
from appsimple.schemas.auth import LoginResponse

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authenticates users and issues bearer tokens.

    Unknown user, inactive account and wrong password are reported the same
    way (None) so callers cannot be used to enumerate usernames. A dummy
    verification runs for unknown users so response time does not tell
    them apart either.
    """

    def __init__(self, hasher: PasswordHasher, tokens: TokenService) -> None:
        self._hasher = hasher
        self._tokens = tokens
        self._dummy_hash = hasher.hash("appsimple-timing-equalizer")

    def authenticate(self, db: Session, username: str, password: str) -> User | None:
        """Return the user if the credentials are valid and the account is active."""
        user = UserRepository(db).get_by_username(username)
        if user is None:
            self._hasher.verify(password, self._dummy_hash)
            logger.warning("Login failed: user '%s' not found.", username)
            return None
        if not self._hasher.verify(password, user.password_hash):
            logger.warning("Login failed: invalid password for '%s'.", username)
            return None
        if not user.is_active:
            logger.warning("Login rejected: user '%s' is inactive.", username)
            return None
        return user

    def login(self, db: Session, username: str, password: str) -> LoginResponse | None:
        """Authenticate and issue a token. None means InvalidCredentials."""
        user = self.authenticate(db, username, password)
        if user is None:
            return None
        token = self._tokens.generate_token(user)
        logger.info("User '%s' authenticated successfully.", user.username)
        return LoginResponse(token=token, username=user.username, role=user.role)

    def validate_token(self, token: str) -> str | None:
        """Return the username embedded in a valid token, otherwise None."""
        return self._tokens.get_username_from_token(token)
