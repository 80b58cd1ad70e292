"""Process-wide service instances shared by the API routes (override in tests)."""

from functools import lru_cache

from appsimple.core.config import get_settings
from appsimple.core.database import get_engine, get_session_factory
from appsimple.core.security import PasswordHasher
from appsimple.core.tokens import JwtOptions, TokenService
from appsimple.services.auth_service import AuthService
from appsimple.services.bootstrap import DatabaseBootstrap


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=get_settings().BCRYPT_ROUNDS)


@lru_cache
def get_token_service() -> TokenService:
    return TokenService(JwtOptions.from_settings(get_settings()))


@lru_cache
def get_auth_service() -> AuthService:
    return AuthService(get_password_hasher(), get_token_service())


def get_bootstrap() -> DatabaseBootstrap:
    return DatabaseBootstrap(
        engine=get_engine(),
        session_factory=get_session_factory(),
        hasher=get_password_hasher(),
        settings=get_settings(),
    )
