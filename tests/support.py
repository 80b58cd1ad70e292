"""Builders shared by the database and API tests."""

from unittest.mock import MagicMock

from pydantic import SecretStr
from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from appsimple.core.database import create_db_engine
from appsimple.core.security import PasswordHasher
from appsimple.core.tokens import JwtOptions, TokenService
from appsimple.services.bootstrap import DatabaseBootstrap

SECRET = "test-secret-key-that-is-long-enough-0123456789"
ADMIN_PASSWORD = "Admin123!"
SAMPLE_PASSWORD = "Sample123!"


def fast_hasher() -> PasswordHasher:
    """Minimum bcrypt cost; hashing at the default cost makes the suite crawl."""
    return PasswordHasher(rounds=4)


def token_service(**overrides: object) -> TokenService:
    return TokenService(JwtOptions(secret=overrides.pop("secret", SECRET), **overrides))


def seed_settings() -> MagicMock:
    settings = MagicMock()
    settings.DEFAULT_ADMIN_PASSWORD = SecretStr(ADMIN_PASSWORD)
    settings.DEFAULT_SAMPLE_PASSWORD = SecretStr(SAMPLE_PASSWORD)
    return settings


def memory_database() -> tuple[Engine, sessionmaker[Session]]:
    """Fresh private in-memory database (no tables yet)."""
    engine = create_db_engine("sqlite://")
    return engine, sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_bootstrap(
    engine: Engine,
    factory: sessionmaker[Session],
    hasher: PasswordHasher | None = None,
) -> DatabaseBootstrap:
    return DatabaseBootstrap(
        engine=engine,
        session_factory=factory,
        hasher=hasher or fast_hasher(),
        settings=seed_settings(),
    )
