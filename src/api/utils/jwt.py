from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel

from src.libs.result import Error, Result, Return

JWT_ALGORITHM = "HS256"


class TokenClaims(BaseModel):
    """Verified session token contents"""

    user_id: str
    issued_at: int


class SessionTokenIssuer:
    """
    Mints and validates session tokens (HS256 JWT).

    Claims:
    - id: user id
    - iat: issued-at, epoch seconds
    - exp: iat + configured lifetime

    The secret is process-wide; rotating it invalidates every outstanding token.
    """

    def __init__(self, secret: str, expires_in: timedelta):
        if not secret:
            raise ValueError("JWT secret must not be blank")
        self._secret = secret
        self._expires_in = expires_in

    def issue(self, user_id: UUID, now: Optional[datetime] = None) -> str:
        """
        Generate a session token for a user

        Args:
            user_id: User UUID
            now: Issue time, defaults to the current time

        Returns:
            JWT token string
        """
        now = now or datetime.now(UTC)
        payload = {
            "id": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self._expires_in).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> Result[TokenClaims]:
        """
        Verify and decode a session token

        Returns:
            Result with TokenClaims, or Error(INVALID_TOKEN / TOKEN_EXPIRED)
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[JWT_ALGORITHM])
        except ExpiredSignatureError:
            return Return.err(
                Error("TOKEN_EXPIRED", "Your token has expired! Please log in again.")
            )
        except JWTError:
            return Return.err(
                Error("INVALID_TOKEN", "Invalid token. Please log in again!")
            )

        user_id = payload.get("id")
        issued_at = payload.get("iat")
        if not user_id or not isinstance(issued_at, int):
            return Return.err(
                Error("INVALID_TOKEN", "Invalid token. Please log in again!")
            )

        return Return.ok(TokenClaims(user_id=user_id, issued_at=issued_at))
