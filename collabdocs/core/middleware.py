import logging
from urllib.parse import urlencode

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from collabdocs.core.security import get_request_token, verify_session_token

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"

PUBLIC_PATHS = {LOGIN_PATH, "/health", "/docs", "/docs/oauth2-redirect", "/openapi.json", "/redoc"}
PUBLIC_PREFIXES = ("/api/auth/",)


def is_public_path(path: str) -> bool:
    return path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES)


def login_redirect_url(path: str) -> str:
    return f"{LOGIN_PATH}?{urlencode({'callbackUrl': path})}"


class AuthMiddleware(BaseHTTPMiddleware):
    """Пропускает дальше только запросы с действующей сессией.

    Остальные перенаправляются на страницу входа с адресом возврата.
    """

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        if request.method == "OPTIONS" or is_public_path(path):
            return await call_next(request)

        token = get_request_token(request.headers, request.cookies)
        payload = verify_session_token(token) if token else None

        if not payload:
            logger.debug("Unauthenticated request to %s redirected to login", path)
            return RedirectResponse(login_redirect_url(path), status_code=307)

        return await call_next(request)
