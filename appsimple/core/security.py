"""Password hashing and verification (bcrypt)."""

import logging

import bcrypt

logger = logging.getLogger(__name__)

# Bcrypt cost (rounds); 12 keeps a single hash in the tens-to-hundreds of ms.
DEFAULT_BCRYPT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes; newer releases raise instead of truncating.
BCRYPT_MAX_BYTES = 72


def _encode(plain_password: str) -> bytes:
    return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """One-way salted hashing of credentials. Slow on purpose; never call from a UI thread."""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        if rounds < 4 or rounds > 31:
            raise ValueError("bcrypt rounds must be between 4 and 31")
        self.rounds = rounds

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. A fresh salt is drawn on every call."""
        return bcrypt.hashpw(
            _encode(plain_password), bcrypt.gensalt(rounds=self.rounds)
        ).decode("utf-8")

    def verify(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash. Never raises."""
        if not plain_password or not hashed:
            return False
        try:
            return bcrypt.checkpw(_encode(plain_password), hashed.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            logger.debug("Password verification against a malformed hash")
            return False
