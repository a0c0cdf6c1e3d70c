"""Session token creation and verification.

A session token is an HS256 JWT whose ``sub`` claim is the user id. One
lifetime (``settings.session_ttl_days``) is used for both the token's
``exp`` and the cookie's ``max_age``, so the browser never holds a cookie
the server would reject or the reverse.

There is no server-side revocation: logout clears the cookie and a leaked
token stays valid until it expires.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from clientdesk.config import settings

TOKEN_TYPE = "session"


class TokenError(Exception):
    """Raised when token verification fails."""


class InvalidToken(TokenError):
    """Bad signature, malformed payload, wrong type or missing subject."""


class TokenExpired(TokenError):
    """Signature is fine but the token is past its expiry."""


def session_ttl() -> timedelta:
    return timedelta(days=settings.session_ttl_days)


def create_session_token(
    user_id: uuid.UUID | str,
    expires_in: Optional[timedelta] = None,
) -> str:
    """Create a signed session token for a user."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "type": TOKEN_TYPE,
        "iat": now,
        "exp": now + (expires_in if expires_in is not None else session_ttl()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_session_token(token: str) -> uuid.UUID:
    """Verify a session token and return the user id it was issued for.

    Raises TokenExpired or InvalidToken.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpired("Token has expired")
    except jwt.InvalidTokenError as e:
        raise InvalidToken(f"Invalid token: {e}")

    if payload.get("type") != TOKEN_TYPE:
        raise InvalidToken("Invalid token: not a session token")
    try:
        return uuid.UUID(payload["sub"])
    except (ValueError, TypeError, AttributeError):
        raise InvalidToken("Invalid token: malformed subject")
