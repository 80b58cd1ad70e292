"""ORM model for application users (auth and RBAC)."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Boolean, Column, DateTime, Enum, Index, String, Text
from sqlalchemy.orm import validates

from appsimple.core.permissions import UserRole
from appsimple.models.base import Base


def _new_uid() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(UTC)


def normalize_identity(value: str) -> str:
    """Case-folded key used for uniqueness and lookups of usernames and emails."""
    return value.strip().casefold()


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    is_system marks the seeded administrator: it can be neither deleted nor
    modified through the user service.
    """

    __tablename__ = "users"
    __table_args__ = (
        Index("ux_users_username_normalized", "username_normalized", unique=True),
        Index("ux_users_email_normalized", "email_normalized", unique=True),
    )

    uid = Column(String(36), primary_key=True, default=_new_uid)
    username = Column(String(50), nullable=False)
    email = Column(String(256), nullable=False)
    # Case-folded copies kept in step by _sync_normalized; carry the unique indexes.
    # Wider than the source columns: case folding can expand a string ("ß" -> "ss").
    username_normalized = Column(String(200), nullable=False)
    email_normalized = Column(String(1024), nullable=False)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    phone_number = Column(String(30), nullable=True)
    bio = Column(Text, nullable=True)
    role = Column(
        Enum(
            UserRole,
            name="user_role",
            native_enum=False,
            values_callable=lambda roles: [r.value for r in roles],
        ),
        nullable=False,
        default=UserRole.USER,
    )
    is_active = Column(Boolean, nullable=False, default=True)
    is_system = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    @validates("username", "email")
    def _sync_normalized(self, key: str, value: str) -> str:
        setattr(self, f"{key}_normalized", normalize_identity(value))
        return value

    @property
    def full_name(self) -> str | None:
        parts = [p for p in (self.first_name, self.last_name) if p and p.strip()]
        return " ".join(parts) if parts else None

    def __repr__(self) -> str:
        return f"<User {self.username!r} role={self.role} system={self.is_system}>"
