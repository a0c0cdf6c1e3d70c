"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown (logging, database engine).
Middleware, error handlers, CORS and routers are all registered here;
each concern lives in its own module.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clientdesk import __version__
from clientdesk.api import api_router
from clientdesk.config import settings
from clientdesk.errors import register_error_handlers
from clientdesk.logging import configure_logging
from clientdesk.middleware.auth_gate import AuthGateMiddleware
from clientdesk.middleware.request_context import RequestContextMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: FastAPI lifespan replaces on_event("startup") / on_event("shutdown").
    Anything before `yield` runs at startup, after `yield` runs at shutdown.
    """
    configure_logging()
    logger.info(
        "clientdesk.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    yield

    logger.info("clientdesk.shutdown")

    from clientdesk.db.engine import engine
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="ClientDesk",
        description="Freelancer CRM — clients, projects, interaction logs and reminders",
        version=__version__,
        lifespan=lifespan,
    )

    register_error_handlers(app)

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: CORS → RequestContext → AuthGate → handler

    app.add_middleware(AuthGateMiddleware)
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    @app.get("/", include_in_schema=False)
    async def root():
        return {"name": "clientdesk", "version": __version__, "docs": "/docs"}

    return app


# Default app instance (used by uvicorn: clientdesk.main:app)
app = create_app()
