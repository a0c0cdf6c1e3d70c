"""Auth API — signup, login, logout, current user.

Routes:
- GET  /auth         → list of auth endpoints
- POST /auth/signup  → create a user account
- POST /auth/login   → email/password → session token (cookie + body)
- POST /auth/logout  → clear the session cookie
- GET  /auth/me      → the user the session token belongs to
"""

import uuid

import structlog
from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from clientdesk.auth.dependencies import CurrentIdentity, get_current_user
from clientdesk.auth.jwt import create_session_token, session_ttl
from clientdesk.auth.password import hash_password, verify_password
from clientdesk.config import settings
from clientdesk.db.engine import get_db
from clientdesk.db.models import User
from clientdesk.errors import Conflict, NotFound, Unauthorized
from clientdesk.schemas.common import EMAIL_PATTERN, CamelModel, UTCDateTime

logger = structlog.get_logger()

router = APIRouter(prefix="/auth")


# ─── Schemas ─────────────────────────────────────────────


class SignupRequest(BaseModel):
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    name: str = Field(..., min_length=1, max_length=100)
    password: str = Field(min_length=8)


class LoginRequest(BaseModel):
    email: str
    password: str


class UserRead(CamelModel):
    id: uuid.UUID
    email: str
    name: str
    created_at: UTCDateTime


class LoginResponse(CamelModel):
    user: UserRead
    token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=int(session_ttl().total_seconds()),
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        path="/",
    )


# ─── Index ───────────────────────────────────────────────


@router.get("")
async def auth_index():
    """Describe the available auth endpoints."""
    return {
        "message": "Auth API Endpoints",
        "endpoints": [
            {"path": "/api/auth/signup", "method": "POST", "description": "Create a new account"},
            {"path": "/api/auth/login", "method": "POST", "description": "Login with email and password"},
            {"path": "/api/auth/logout", "method": "POST", "description": "Log out the current user"},
            {"path": "/api/auth/me", "method": "GET", "description": "Get the current authenticated user info"},
        ],
    }


# ─── Signup ──────────────────────────────────────────────


@router.post("/signup", response_model=UserRead, status_code=201)
async def signup(body: SignupRequest, db: AsyncSession = Depends(get_db)):
    """Create a new user account."""
    email = body.email.strip().lower()
    result = await db.execute(select(User).where(User.email == email))
    if result.scalars().first():
        raise Conflict("Email already registered")

    user = User(email=email, name=body.name, password_hash=hash_password(body.password))
    db.add(user)
    await db.commit()
    logger.info("user.signed_up", user_id=str(user.id))
    return user


# ─── Login / logout ──────────────────────────────────────


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Verify credentials, set the session cookie and return the token."""
    result = await db.execute(select(User).where(User.email == body.email.strip().lower()))
    user = result.scalars().first()

    if not user or not verify_password(body.password, user.password_hash):
        logger.info("auth.login_failed")
        raise Unauthorized("Invalid credentials")

    token = create_session_token(user.id)
    _set_session_cookie(response, token)
    logger.info("auth.login", user_id=str(user.id))
    return LoginResponse(
        user=UserRead.model_validate(user),
        token=token,
        expires_in=int(session_ttl().total_seconds()),
    )


@router.post("/logout")
async def logout(response: Response):
    """Clear the session cookie. The token itself stays valid until it expires."""
    response.delete_cookie(
        key=settings.cookie_name,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )
    return {"message": "Logged out successfully"}


# ─── Current user ───────────────────────────────────────


@router.get("/me", response_model=UserRead)
async def get_me(
    identity: CurrentIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Get the current authenticated user's info."""
    user = await db.get(User, identity.user_id)
    if not user:
        raise NotFound("User")
    return user
