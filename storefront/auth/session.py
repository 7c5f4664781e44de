"""
Demo authentication and the in-memory user session.

Credentials are the fixed demo table; a successful login creates an
opaque session token that expires after SESSION_TTL_HOURS.
"""
import hmac
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from storefront.errors import (
    ERROR_INVALID_CREDENTIALS,
    ERROR_NOT_AUTHENTICATED,
    ERROR_SESSION_EXPIRED,
    ERROR_SESSION_INVALID,
)
from storefront.exceptions import (
    InvalidCredentialsException,
    SessionInvalidException,
    TokenExpiredException,
    ValidationException,
)
from storefront.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging
from storefront.models import User

logger = get_logger(__name__)

DEMO_CREDENTIALS: dict[str, str] = {
    "demo": "demo123",
    "user": "password",
    "admin": "admin123",
    "test": "test123",
}

DEFAULT_SESSION_TTL = timedelta(hours=24)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _same_secret(a: str, b: str) -> bool:
    # compare_digest only accepts ASCII str, so compare UTF-8 bytes
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


@dataclass(frozen=True)
class UserSession:
    token: str
    user: User
    created_at: datetime
    expires_at: datetime

    @property
    def user_id(self) -> int:
        return self.user.id

    @property
    def username(self) -> str:
        return self.user.username

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or _utcnow()) >= self.expires_at

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        return bool(self.token) and not self.is_expired(now)

    def to_dict(self) -> dict:
        return {
            "user": self.user.model_dump(),
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
        }


def _demo_user(username: str) -> User:
    return User(
        id=list(DEMO_CREDENTIALS).index(username) + 1,
        username=username,
        email=f"{username}@example.com",
        full_name=f"{username.upper()} User",
    )


class AuthSession:
    """Holds at most one signed-in user for the shop session."""

    def __init__(
        self,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._session: Optional[UserSession] = None

    def login(self, username: str, password: str) -> UserSession:
        username = (username or "").strip()
        if not username or not password:
            raise ValidationException(
                "Username and password are required",
                field_errors={
                    name: ["This field is required"]
                    for name, value in (("username", username), ("password", password))
                    if not value
                },
            )

        expected = DEMO_CREDENTIALS.get(username)
        if expected is None or not _same_secret(expected, password):
            logger.info("Failed login for %s", sanitize_string_for_logging(username))
            raise InvalidCredentialsException(ERROR_INVALID_CREDENTIALS)

        now = self._clock()
        self._session = UserSession(
            token=secrets.token_urlsafe(32),
            user=_demo_user(username),
            created_at=now,
            expires_at=now + self.ttl,
        )
        logger.info(
            "User %s logged in (session %s)",
            sanitize_string_for_logging(username),
            sanitize_id_for_logging(self._session.token),
        )
        return self._session

    def logout(self) -> None:
        if self._session is not None:
            logger.info("User %s logged out", sanitize_string_for_logging(self._session.username))
        self._session = None

    def current_session(self) -> Optional[UserSession]:
        """The active session, or None. Expired sessions are dropped."""
        if self._session is None:
            return None
        if self._session.is_expired(self._clock()):
            logger.info("Session for %s expired", sanitize_string_for_logging(self._session.username))
            self._session = None
            return None
        return self._session

    def require_session(self, token: Optional[str] = None) -> UserSession:
        """
        Return the active session or raise.

        When a token is given it must match the active session's token.
        """
        if self._session is None:
            raise SessionInvalidException(ERROR_NOT_AUTHENTICATED)
        if self._session.is_expired(self._clock()):
            self._session = None
            raise TokenExpiredException(ERROR_SESSION_EXPIRED)
        if token is not None and not _same_secret(token, self._session.token):
            raise SessionInvalidException(ERROR_SESSION_INVALID)
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self.current_session() is not None

    @property
    def current_user(self) -> Optional[User]:
        session = self.current_session()
        return session.user if session else None
