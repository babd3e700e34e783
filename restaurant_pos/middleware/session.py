"""
Route gate for the admin dashboard.

Any request under /dashboard without a non-empty session cookie is sent back
to the landing page. Everything else (landing page, auth endpoints, health,
metrics) passes through untouched.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from restaurant_pos.config import settings

logger = logging.getLogger(__name__)

PROTECTED_PREFIX = "/dashboard"
LOGIN_PATH = "/"


class SessionGateMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path.startswith(PROTECTED_PREFIX):
            if not request.cookies.get(settings.session_cookie_name):
                logger.info(
                    "Unauthenticated dashboard request, redirecting to login",
                    extra={"path": request.url.path},
                )
                return RedirectResponse(url=LOGIN_PATH, status_code=307)
        return await call_next(request)
