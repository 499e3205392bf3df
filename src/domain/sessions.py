"""
Session tokens - signed, self-contained JWTs issued on login.

Tokens are HMAC-signed (HS256 by default) with a process-wide secret and
carry the account email and id plus issued-at and expiration times.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from jose.exceptions import JOSEError

from .exceptions import InvalidSessionToken, SigningError

logger = logging.getLogger(__name__)

DEFAULT_EXPIRATION_MINUTES = 4320


@dataclass(frozen=True)
class SessionClaims:
    """Decoded session token claims."""

    email: str
    user_id: int
    issued_at: datetime
    expires_at: datetime


class SessionTokenIssuer:
    """Issues and decodes session tokens."""

    def __init__(
        self,
        secret: str | None,
        expiration_minutes: int = DEFAULT_EXPIRATION_MINUTES,
        algorithm: str = "HS256",
    ) -> None:
        self._secret = secret
        self.expiration = timedelta(minutes=expiration_minutes)
        self.algorithm = algorithm

    def issue(self, email: str, user_id: int) -> str:
        """
        Create a signed session token for an authenticated account.

        Raises:
            SigningError: If no signing secret is configured or signing fails
        """
        if not self._secret:
            raise SigningError("signing secret is not configured")

        now = datetime.now(timezone.utc)
        claims = {
            "sub": email,
            "email": email,
            "user_id": user_id,
            "iat": now,
            "exp": now + self.expiration,
        }
        try:
            return jwt.encode(claims, self._secret, algorithm=self.algorithm)
        except JOSEError as e:
            raise SigningError("session token signing failed") from e

    def decode(self, token: str) -> SessionClaims:
        """
        Verify a session token's signature and expiry and return its claims.

        Raises:
            InvalidSessionToken: On any signature, format, or expiry failure
        """
        if not self._secret:
            raise InvalidSessionToken("signing secret is not configured")
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidSessionToken(str(e)) from e

        try:
            return SessionClaims(
                email=payload["email"],
                user_id=int(payload["user_id"]),
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Session token missing required claims")
            raise InvalidSessionToken("missing claims") from e
