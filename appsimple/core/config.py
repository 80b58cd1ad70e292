"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "sqlite://",
    "sqlite+pysqlite://",
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
)

# HMAC-SHA256 signing secrets shorter than this are refused at start-up.
JWT_SECRET_MIN_LEN = 32

APP_NAME = "AppSimple"


class ClientSettings(BaseSettings):
    """Settings a console client needs; no secrets."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    API_V1_PREFIX: str = "/api/v1"

    # Console clients talk to the API here
    API_BASE_URL: str = "http://localhost:8000"
    API_REQUEST_TIMEOUT_SEC: float = 10.0

    @field_validator("API_BASE_URL")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        s = v.strip().lower()
        if not (s.startswith("http://") or s.startswith("https://")):
            raise ValueError("API_BASE_URL must use http or https (e.g. http://localhost:8000)")
        return v.strip().rstrip("/")

    @field_validator("API_REQUEST_TIMEOUT_SEC")
    @classmethod
    def validate_api_timeout(cls, v: float) -> float:
        if v <= 0 or v > 120:
            raise ValueError("API_REQUEST_TIMEOUT_SEC must be greater than 0 and at most 120")
        return v


class Settings(ClientSettings):
    """Validated server settings from env and optional .env file."""

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # SQLite file in the working directory by default; PostgreSQL in production
    DATABASE_URL: str = "sqlite:///./appsimple.db"

    # JWT authentication. No default secret: the process refuses to start without one.
    JWT_SECRET: SecretStr
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = APP_NAME
    JWT_AUDIENCE: str = APP_NAME
    # Zero or negative produces already-expired tokens (useful in tests).
    JWT_EXPIRE_MINUTES: int = 60

    # Password hashing cost (bcrypt log2 rounds)
    BCRYPT_ROUNDS: int = 12

    # Seed credentials used by bootstrap and reset
    DEFAULT_ADMIN_PASSWORD: SecretStr = SecretStr("Admin123!")
    DEFAULT_SAMPLE_PASSWORD: SecretStr = SecretStr("Sample123!")

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        if not any(v.startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a SQLite or PostgreSQL URL "
                "(e.g. sqlite:///./appsimple.db or postgresql+psycopg2://...)"
            )
        return v.strip()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return level

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        value = v.get_secret_value()
        if not value or not value.strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        if len(value) < JWT_SECRET_MIN_LEN:
            raise ValueError(
                f"JWT_SECRET must be at least {JWT_SECRET_MIN_LEN} characters"
            )
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if v.strip() != "HS256":
            raise ValueError("JWT_ALGORITHM must be HS256")
        return v.strip()

    @field_validator("JWT_ISSUER", "JWT_AUDIENCE")
    @classmethod
    def validate_jwt_identity(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ISSUER and JWT_AUDIENCE must be non-empty")
        return v.strip()

    @field_validator("JWT_EXPIRE_MINUTES")
    @classmethod
    def validate_jwt_expire_minutes(cls, v: int) -> int:
        if v > 10080:
            raise ValueError("JWT_EXPIRE_MINUTES must be at most 10080 (7 days)")
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


@lru_cache
def get_client_settings() -> ClientSettings:
    """Return cached client settings; usable without server secrets."""
    return ClientSettings()
