"""FastAPI auth dependencies.

The request gate middleware verifies the session token and leaves the
resolved user id on ``request.state.user_id``. Route handlers depend on
``get_current_user`` to turn that into a ``CurrentIdentity``; they never
read a user id from the request body or query.
"""

import uuid
from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from clientdesk.config import settings
from clientdesk.errors import Unauthorized


@dataclass(frozen=True)
class CurrentIdentity:
    """The authenticated user making the request. Scopes every query."""

    user_id: uuid.UUID


def extract_token(request: Request) -> Optional[str]:
    """Pull the session token from the Authorization header or the cookie.

    The bearer header wins when both are present.
    """
    authorization = request.headers.get("authorization")
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip()
        if token:
            return token
    return request.cookies.get(settings.cookie_name) or None


async def get_current_user(request: Request) -> CurrentIdentity:
    """Required auth — 401 when the gate did not attach a user."""
    user_id = getattr(request.state, "user_id", None)
    if user_id is None:
        raise Unauthorized()
    return CurrentIdentity(user_id=user_id)
