"""Issue and validate HMAC-SHA256 signed JWT bearer tokens.

Tokens are stateless: once issued they stay valid until `exp`. There is no
revocation list; rotating JWT_SECRET is the only way to invalidate every
outstanding token at once.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any, Protocol

import jwt
from pydantic import ValidationError

from appsimple.core.config import APP_NAME, JWT_SECRET_MIN_LEN
from appsimple.schemas.auth import CurrentUser

if TYPE_CHECKING:
    from appsimple.core.config import Settings

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"

# Claim names carried in the payload besides the registered ones.
CLAIM_USERNAME = "unique_name"
CLAIM_EMAIL = "email"
CLAIM_ROLE = "role"

_REQUIRED_CLAIMS = ["exp", "iss", "aud", "sub", "jti", CLAIM_USERNAME, CLAIM_ROLE]


class TokenSubject(Protocol):
    """Anything a token can be issued for (ORM user, CurrentUser, test double)."""

    uid: Any
    username: str
    email: str
    role: Any


@dataclass(frozen=True)
class JwtOptions:
    """Signing and validation parameters for TokenService."""

    secret: str
    issuer: str = APP_NAME
    audience: str = APP_NAME
    expiration_minutes: int = 60

    def __post_init__(self) -> None:
        if not self.secret or len(self.secret) < JWT_SECRET_MIN_LEN:
            raise ValueError(
                f"JWT signing secret must be at least {JWT_SECRET_MIN_LEN} characters"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtOptions:
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
            expiration_minutes=settings.JWT_EXPIRE_MINUTES,
        )


class TokenService:
    """Generates and validates signed bearer tokens. Thread-safe; holds no mutable state."""

    def __init__(self, options: JwtOptions) -> None:
        self._options = options
        logger.debug(
            "TokenService configured: issuer=%s audience=%s expiration_minutes=%s",
            options.issuer,
            options.audience,
            options.expiration_minutes,
        )

    @property
    def options(self) -> JwtOptions:
        return self._options

    def generate_token(self, user: TokenSubject) -> str:
        """Return a compact JWT (header.payload.signature) for `user` with a fresh jti."""
        now = datetime.now(UTC)
        role = getattr(user.role, "value", user.role)
        payload: dict[str, Any] = {
            "sub": str(user.uid),
            CLAIM_USERNAME: user.username,
            CLAIM_EMAIL: user.email,
            CLAIM_ROLE: str(role),
            "jti": uuid.uuid4().hex,
            "iss": self._options.issuer,
            "aud": self._options.audience,
            "iat": now,
            "exp": now + timedelta(minutes=self._options.expiration_minutes),
        }
        token = jwt.encode(payload, self._options.secret, algorithm=JWT_ALGORITHM)
        logger.debug("Generated token for user '%s' (uid %s)", user.username, user.uid)
        return token

    def is_token_valid(self, token: str) -> bool:
        """True only if signature, issuer, audience and expiry all check out."""
        return self._decode(token) is not None

    def get_username_from_token(self, token: str) -> str | None:
        """Return the username claim of a valid token, otherwise None."""
        payload = self._decode(token)
        if payload is None:
            return None
        username = payload.get(CLAIM_USERNAME)
        return username if isinstance(username, str) else None

    def get_claims(self, token: str) -> CurrentUser | None:
        """Return the principal asserted by a valid token, otherwise None."""
        payload = self._decode(token)
        if payload is None:
            return None
        try:
            return CurrentUser(
                uid=payload["sub"],
                username=payload[CLAIM_USERNAME],
                email=payload.get(CLAIM_EMAIL) or "",
                role=payload[CLAIM_ROLE],
            )
        except (KeyError, ValidationError):
            logger.warning("Token carried an unusable claim set")
            return None

    def _decode(self, token: str) -> dict[str, Any] | None:
        if not isinstance(token, str) or not token:
            return None
        try:
            return jwt.decode(
                token,
                self._options.secret,
                algorithms=[JWT_ALGORITHM],
                audience=self._options.audience,
                issuer=self._options.issuer,
                leeway=0,
                options={"require": _REQUIRED_CLAIMS},
            )
        except (jwt.PyJWTError, ValueError, TypeError) as e:
            logger.info("Token validation failed: %s", type(e).__name__)
            return None
