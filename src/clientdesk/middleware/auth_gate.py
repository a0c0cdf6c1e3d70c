"""Request gate — every request passes here before reaching a route.

Path classes:
- public: always let through
- unauthenticated-only pages (/login, /signup): a signed-in user is
  redirected to the home page
- everything else: needs a valid session token. API paths answer 401,
  page paths redirect to /login?from=<path>

On success the user id is stored on ``request.state.user_id`` and bound
to the structlog context for the rest of the request.
"""

from urllib.parse import urlencode

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, RedirectResponse, Response

from clientdesk.auth.dependencies import extract_token
from clientdesk.auth.jwt import TokenError, verify_session_token
from clientdesk.errors import Unauthorized

logger = structlog.get_logger()

API_PREFIX = "/api"

PUBLIC_PATHS = frozenset(
    {
        "/",
        "/api/health",
        "/api/auth",
        "/api/auth/login",
        "/api/auth/signup",
        "/api/auth/logout",
        "/docs",
        "/docs/oauth2-redirect",
        "/openapi.json",
    }
)

UNAUTHENTICATED_ONLY_PATHS = frozenset({"/login", "/signup"})


def _normalize(path: str) -> str:
    return path.rstrip("/") or "/"


class AuthGateMiddleware(BaseHTTPMiddleware):
    """Verify the session token and attach the user id to the request."""

    def __init__(
        self,
        app,
        public_paths: frozenset[str] = PUBLIC_PATHS,
        unauthenticated_only_paths: frozenset[str] = UNAUTHENTICATED_ONLY_PATHS,
    ):
        super().__init__(app)
        self.public_paths = public_paths
        self.unauthenticated_only_paths = unauthenticated_only_paths

    async def dispatch(self, request: Request, call_next) -> Response:
        path = _normalize(request.url.path)

        # CORS preflights carry no credentials
        if request.method == "OPTIONS" or path in self.public_paths:
            return await call_next(request)

        user_id = self._verify(request)

        if path in self.unauthenticated_only_paths:
            if user_id is not None:
                return RedirectResponse(url="/", status_code=307)
            return await call_next(request)

        if user_id is None:
            return self._reject(request, path)

        request.state.user_id = user_id
        structlog.contextvars.bind_contextvars(user_id=str(user_id))
        return await call_next(request)

    @staticmethod
    def _verify(request: Request):
        token = extract_token(request)
        if not token:
            return None
        try:
            return verify_session_token(token)
        except TokenError as e:
            logger.info(
                "auth.token_rejected",
                path=request.url.path,
                reason=type(e).__name__,
            )
            return None

    @staticmethod
    def _reject(request: Request, path: str) -> Response:
        if path == API_PREFIX or path.startswith(API_PREFIX + "/"):
            err = Unauthorized()
            return JSONResponse(status_code=err.status_code, content=err.to_body())
        login_url = "/login?" + urlencode({"from": request.url.path})
        return RedirectResponse(url=login_url, status_code=307)
