"""
Cookie session for the web API.

The cookie *is* the session: it carries the user's id, email and name as a
signed JWT and is trusted on every request without a lookup in the user
store. There is no server-side session table.

Security measures implemented:
- HS256 signing with SESSION_SECRET
- Token expiration (7 days)
- HttpOnly cookie
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import HTTPException, Request, Response

from core.config import get_session_secret, is_production
from core.errors import ConfigError

SESSION_COOKIE = "session"
JWT_ALGORITHM = "HS256"
SESSION_MAX_AGE_SECONDS = 60 * 60 * 24 * 7  # 7 days


def _require_secret() -> str:
    secret = get_session_secret()
    if not secret:
        raise ConfigError("SESSION_SECRET environment variable not set")
    return secret


@dataclass(frozen=True)
class SessionToken:
    """Identity carried by the session cookie."""

    user_id: str
    email: str
    name: str

    def encode(self) -> str:
        """
        Create the signed cookie value.

        Raises:
            ConfigError: If SESSION_SECRET is not set
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": self.user_id,
            "email": self.email,
            "name": self.name,
            "iat": now,
            "exp": now + timedelta(seconds=SESSION_MAX_AGE_SECONDS),
        }
        return jwt.encode(payload, _require_secret(), algorithm=JWT_ALGORITHM)

    @classmethod
    def decode(cls, token: str) -> "SessionToken | None":
        """
        Verify and decode a cookie value.

        Returns:
            The session if valid, None if invalid or expired
        """
        secret = _require_secret()
        try:
            payload = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM])
        except jwt.InvalidTokenError:
            return None
        return cls(
            user_id=str(payload["sub"]),
            email=payload.get("email", ""),
            name=payload.get("name", ""),
        )

    def to_dict(self) -> dict:
        return {"id": self.user_id, "email": self.email, "name": self.name}


def set_session_cookie(response: Response, session: SessionToken) -> None:
    response.set_cookie(
        key=SESSION_COOKIE,
        value=session.encode(),
        httponly=True,
        secure=is_production(),
        samesite="lax",
        path="/",
        max_age=SESSION_MAX_AGE_SECONDS,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=SESSION_COOKIE, path="/")


async def get_current_session(request: Request) -> SessionToken:
    """
    FastAPI dependency to get the current session.

    Raises:
        HTTPException: 401 if the cookie is missing or invalid
    """
    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    session = SessionToken.decode(token)
    if session is None:
        raise HTTPException(status_code=401, detail="Not authenticated")

    return session


async def get_optional_session(request: Request) -> SessionToken | None:
    """
    FastAPI dependency to optionally get the current session.

    Returns None if not authenticated instead of raising an exception.
    """
    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        return None

    return SessionToken.decode(token)
