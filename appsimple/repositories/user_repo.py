"""User persistence. Absent rows come back as None/False; nothing here raises for "not found"."""

import logging

from sqlalchemy.orm import Session

from appsimple.models import User, normalize_identity

logger = logging.getLogger(__name__)


class UserRepository:
    """Thin query layer over the users table. Callers own the transaction."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_uid(self, uid: str) -> User | None:
        if not uid:
            return None
        return self.session.query(User).filter(User.uid == str(uid)).first()

    def get_by_username(self, username: str) -> User | None:
        """Case-insensitive lookup."""
        if not username:
            return None
        return (
            self.session.query(User)
            .filter(User.username_normalized == normalize_identity(username))
            .first()
        )

    def get_by_email(self, email: str) -> User | None:
        """Case-insensitive lookup."""
        if not email:
            return None
        return (
            self.session.query(User)
            .filter(User.email_normalized == normalize_identity(email))
            .first()
        )

    def list_all(self) -> list[User]:
        return self.session.query(User).order_by(User.username).all()

    def username_exists(self, username: str) -> bool:
        return self.get_by_username(username) is not None

    def email_exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def add(self, user: User) -> User:
        self.session.add(user)
        self.session.flush()
        logger.info("User %s created.", user.username)
        return user

    def update(self, user: User, allow_system: bool = False) -> bool:
        """
        Flush pending changes to `user`.

        System rows are left untouched (pending changes discarded, returns
        False) unless `allow_system` is set, which only credential rotation uses.
        """
        if user.is_system and not allow_system:
            self.session.expire(user)
            logger.warning("Update skipped for uid %s (system entity).", user.uid)
            return False
        self.session.flush()
        logger.info("User %s updated.", user.uid)
        return True

    def delete(self, uid: str) -> bool:
        """Delete a non-system user. Returns False when nothing was deleted."""
        deleted = (
            self.session.query(User)
            .filter(User.uid == str(uid), User.is_system.is_(False))
            .delete(synchronize_session=False)
        )
        if deleted == 0:
            logger.warning("Delete skipped for uid %s (not found or system entity).", uid)
            return False
        logger.info("User %s deleted.", uid)
        return True

    def count(self) -> int:
        return self.session.query(User).count()
