"""ClientDesk CLI — run the server and administer accounts.

Usage:
    clientdesk serve                                  # Run the API with uvicorn
    clientdesk init-db                                # Create tables (dev/test only)
    clientdesk create-user ada@example.com "Ada L."   # Add an account (prompts for password)
    clientdesk issue-token <user-uuid>                # Mint a session token for scripting
"""

from __future__ import annotations

import asyncio
import sys
import uuid
from typing import Optional

import click
from sqlalchemy import select

from clientdesk import __version__
from clientdesk.config import settings

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from a synchronous Click handler."""
    return asyncio.run(coro)


def _fail(message: str) -> None:
    click.secho(f"Error: {message}", fg="red", err=True)
    sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="clientdesk")
def main():
    """ClientDesk — freelancer CRM backend."""


# ---------------------------------------------------------------------------
# clientdesk serve
# ---------------------------------------------------------------------------


@main.command()
@click.option("--host", default=None, help="Bind address (default: CLIENTDESK_HOST)")
@click.option("--port", type=int, default=None, help="Port (default: CLIENTDESK_PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run(
        "clientdesk.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,
    )


# ---------------------------------------------------------------------------
# clientdesk init-db
# ---------------------------------------------------------------------------


@main.command("init-db")
def init_db():
    """Create all tables directly from the models.

    Production databases are managed with alembic (``alembic upgrade head``).
    """
    if settings.is_production:
        _fail("init-db is disabled in production, run alembic migrations instead")
    _run(_init_db_impl())
    click.secho("Tables created.", fg="green")


async def _init_db_impl():
    from clientdesk.db.engine import engine
    from clientdesk.db.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


# ---------------------------------------------------------------------------
# clientdesk create-user
# ---------------------------------------------------------------------------


@main.command("create-user")
@click.argument("email")
@click.argument("name")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Account password (prompted when omitted)",
)
def create_user(email: str, name: str, password: str):
    """Create a user account."""
    if len(password) < 8:
        _fail("password must be at least 8 characters")
    user_id = _run(_create_user_impl(email.strip().lower(), name, password))
    if user_id is None:
        _fail(f"{email} is already registered")
    click.secho(f"Created user {user_id}", fg="green")


async def _create_user_impl(email: str, name: str, password: str) -> Optional[uuid.UUID]:
    from clientdesk.auth.password import hash_password
    from clientdesk.db.engine import async_session_factory, engine
    from clientdesk.db.models import User

    try:
        async with async_session_factory() as db:
            result = await db.execute(select(User).where(User.email == email))
            if result.scalars().first():
                return None
            user = User(email=email, name=name, password_hash=hash_password(password))
            db.add(user)
            await db.commit()
            return user.id
    finally:
        await engine.dispose()


# ---------------------------------------------------------------------------
# clientdesk issue-token
# ---------------------------------------------------------------------------


@main.command("issue-token")
@click.argument("user_id", type=click.UUID)
@click.option("--days", type=int, default=None, help="Lifetime in days (default: session TTL)")
def issue_token(user_id: uuid.UUID, days: Optional[int]):
    """Print a session token for USER_ID, usable as a Bearer token."""
    from datetime import timedelta

    from clientdesk.auth.jwt import create_session_token

    expires_in = timedelta(days=days) if days else None
    click.echo(create_session_token(user_id, expires_in=expires_in))


if __name__ == "__main__":
    main()
