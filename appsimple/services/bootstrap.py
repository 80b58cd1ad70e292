"""Schema creation, protected-admin seeding and destructive reset of the users table."""

import logging
import threading
from typing import TYPE_CHECKING

from sqlalchemy import Engine, delete, text
from sqlalchemy.orm import Session, sessionmaker

from appsimple.core.permissions import UserRole
from appsimple.core.security import PasswordHasher
from appsimple.models import Base, User

if TYPE_CHECKING:
    from appsimple.core.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_EMAIL = "admin@appsimple.local"

# (username, email, first name, last name) of the accounts reset seeds besides the admin.
SAMPLE_USERS = (
    ("alice", "alice@appsimple.dev", "Alice", "Johnson"),
    ("bob", "bob@appsimple.dev", "Bob", "Smith"),
    ("carol", "carol@appsimple.dev", "Carol", "Williams"),
)

# Resets are exclusive within the process; the database lock covers other processes.
_RESET_LOCK = threading.Lock()


def _add_admin_if_missing(db: Session, password_hash: str) -> bool:
    exists = db.query(User.uid).filter(User.role == UserRole.ADMIN).first() is not None
    if exists:
        logger.debug("Admin user already exists. Skipping seed.")
        return False
    db.add(
        User(
            username=DEFAULT_ADMIN_USERNAME,
            email=DEFAULT_ADMIN_EMAIL,
            password_hash=password_hash,
            role=UserRole.ADMIN,
            is_active=True,
            is_system=True,
        )
    )
    db.flush()
    return True


def _add_sample_users(db: Session, password_hash: str) -> None:
    for username, email, first_name, last_name in SAMPLE_USERS:
        db.add(
            User(
                username=username,
                email=email,
                first_name=first_name,
                last_name=last_name,
                password_hash=password_hash,
                role=UserRole.USER,
                is_active=True,
                is_system=False,
            )
        )
        logger.info("Seeded sample user '%s'.", username)
    db.flush()


def _lock_users_table(db: Session) -> None:
    """Take a whole-table write lock where the backend supports it."""
    if db.get_bind().dialect.name == "postgresql":
        db.execute(text("LOCK TABLE users IN ACCESS EXCLUSIVE MODE"))
    # SQLite: the DELETE that follows takes the database write lock until commit.


class DatabaseBootstrap:
    """
    Establishes and repairs the invariant "exactly one protected admin exists".

    initialize() and seed_admin_user() are idempotent and run on every start;
    reset_and_reseed() is destructive and meant for rare, operator-driven use.
    """

    def __init__(
        self,
        engine: Engine,
        session_factory: sessionmaker[Session],
        hasher: PasswordHasher,
        settings: "Settings",
    ) -> None:
        self.engine = engine
        self.session_factory = session_factory
        self.hasher = hasher
        self.settings = settings

    def initialize(self) -> None:
        """Create the schema if absent. Safe to call repeatedly."""
        logger.info("Initializing database schema...")
        Base.metadata.create_all(bind=self.engine, checkfirst=True)
        logger.info("Database schema initialized.")

    def seed_admin_user(self, password_hash: str) -> bool:
        """Insert the protected admin unless an Admin row exists. Returns True if inserted."""
        with self.session_factory() as db:
            inserted = _add_admin_if_missing(db, password_hash)
            db.commit()
        if inserted:
            logger.info("Default admin user seeded (username: '%s').", DEFAULT_ADMIN_USERNAME)
        return inserted

    def bootstrap(self) -> bool:
        """Start-up routine: ensure the schema, then the protected admin."""
        self.initialize()
        with self.session_factory() as db:
            has_admin = db.query(User.uid).filter(User.role == UserRole.ADMIN).first()
        if has_admin is not None:
            logger.debug("Admin user already exists. Skipping seed.")
            return False
        admin_hash = self.hasher.hash(self.settings.DEFAULT_ADMIN_PASSWORD.get_secret_value())
        return self.seed_admin_user(admin_hash)

    def reset_and_reseed(self) -> int:
        """
        Erase every user row and reseed the admin plus the sample accounts.

        Runs as one exclusive transaction; concurrent writers wait or fail.
        Tokens issued before the reset remain valid until they expire.
        Returns the number of user rows afterwards.
        """
        logger.warning("Database reset initiated: all user data will be erased.")
        # Hash before taking locks; bcrypt is slow on purpose.
        admin_hash = self.hasher.hash(self.settings.DEFAULT_ADMIN_PASSWORD.get_secret_value())
        sample_hash = self.hasher.hash(self.settings.DEFAULT_SAMPLE_PASSWORD.get_secret_value())

        with _RESET_LOCK:
            self.initialize()
            with self.session_factory() as db:
                try:
                    _lock_users_table(db)
                    deleted = db.execute(delete(User)).rowcount
                    logger.info("All rows deleted from users table (%s).", deleted)
                    _add_admin_if_missing(db, admin_hash)
                    logger.info(
                        "Default admin user seeded (username: '%s').", DEFAULT_ADMIN_USERNAME
                    )
                    _add_sample_users(db, sample_hash)
                    db.commit()
                except Exception:
                    db.rollback()
                    logger.exception("Database reset failed; rolled back.")
                    raise
                total = db.query(User).count()

        logger.info(
            "Database reset and reseed complete",
            extra={"reset_status": "success", "user_count": total, "sample_count": len(SAMPLE_USERS)},
        )
        return total
