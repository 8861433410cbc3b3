"""Shared-password gate for the admin surface.

There are no user accounts. Anyone who knows ``ADMIN_PASSWORD`` gets an
admin session, carried as a signed JWT (cookie for the HTTP API, session
state for the Streamlit UI).
"""

import hmac
from datetime import UTC, datetime, timedelta

import jwt

from ..config import get_admin_password, get_session_secret, get_session_ttl_hours
from ..errors import AuthenticationError
from ..logging_config import get_logger, log_security_event, log_user_action

logger = get_logger(__name__)

SESSION_SUBJECT = "admin"
SESSION_ALGORITHM = "HS256"


class PasswordAuthService:
    """Checks the shared admin password and issues/verifies session tokens."""

    def __init__(self, password: str | None, secret: str, ttl_hours: int = 24) -> None:
        """
        Initialize the password gate.

        Args:
            password: Shared admin password; None disables every login
            secret: Key used to sign session tokens
            ttl_hours: Session lifetime
        """
        self._password = password
        self._secret = secret
        self.ttl = timedelta(hours=ttl_hours)

        if not password:
            logger.warning("admin_password_not_configured", message="Admin login is disabled")

    @property
    def enabled(self) -> bool:
        return bool(self._password and self._secret)

    def check_password(self, candidate: str | None) -> bool:
        """Compare a candidate password with the configured one in constant time."""
        if not self.enabled or not candidate:
            return False
        return hmac.compare_digest(candidate.encode("utf-8"), self._password.encode("utf-8"))  # type: ignore[union-attr]

    def issue_session_token(self, now: datetime | None = None) -> str:
        """Create a signed admin session token."""
        issued_at = now or datetime.now(UTC)
        payload = {
            "sub": SESSION_SUBJECT,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=SESSION_ALGORITHM)

    def login(self, password: str | None) -> str:
        """
        Exchange the shared password for a session token.

        Raises:
            AuthenticationError: If the password is wrong or login is disabled
        """
        if not self.check_password(password):
            raise AuthenticationError(
                "Invalid admin password",
                code="invalid_password",
                user_message="Invalid password",
                details={"login_enabled": self.enabled},
            )

        log_user_action("admin_login")
        return self.issue_session_token()

    def verify_session(self, token: str | None) -> bool:
        """Check that a session token is signed by us, unexpired and for the admin."""
        if not token or not self.enabled:
            return False

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[SESSION_ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            log_security_event("session_expired")
            return False
        except jwt.PyJWTError as e:
            log_security_event("session_invalid", error=str(e))
            return False

        return payload.get("sub") == SESSION_SUBJECT


_auth_service: PasswordAuthService | None = None


def get_auth_service() -> PasswordAuthService:
    """Get the global password gate, built from configuration on first use."""
    global _auth_service
    if _auth_service is None:
        _auth_service = PasswordAuthService(
            password=get_admin_password(),
            secret=get_session_secret(),
            ttl_hours=get_session_ttl_hours(),
        )
    return _auth_service


def reset_auth_service() -> None:
    """Forget the global password gate (used by tests)."""
    global _auth_service
    _auth_service = None
