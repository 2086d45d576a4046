import logging
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from collabdocs.api.schemas import DataResponse, SuccessResponse
from collabdocs.core.auth import get_optional_user
from collabdocs.core.config import settings
from collabdocs.core.db import get_db
from collabdocs.core.middleware import LOGIN_PATH
from collabdocs.domains.identity.entities import User
from collabdocs.domains.identity.oauth import OAuthClient, OAuthError, get_oauth_client
from collabdocs.domains.identity.schemas import UserResponse
from collabdocs.domains.identity.services import IdentityService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])

STATE_COOKIE = "collabdocs_oauth_state"
CALLBACK_COOKIE = "collabdocs_oauth_callback"
STATE_MAX_AGE = 600


def safe_callback_url(callback_url: Optional[str]) -> str:
    """Возврат только на пути этого же приложения"""
    if callback_url and callback_url.startswith("/") and not callback_url.startswith("//"):
        return callback_url
    return "/"


def _callback_error() -> RedirectResponse:
    response = RedirectResponse(f"{LOGIN_PATH}?error=OAuthCallback", status_code=302)
    response.delete_cookie(STATE_COOKIE)
    response.delete_cookie(CALLBACK_COOKIE)
    return response


@router.get("/signin")
async def signin(
    callback_url: Optional[str] = Query(None, alias="callbackUrl"),
    oauth_client: OAuthClient = Depends(get_oauth_client)
):
    """Перенаправление на страницу входа провайдера"""
    state = secrets.token_urlsafe(24)

    response = RedirectResponse(oauth_client.authorization_url(state), status_code=302)
    response.set_cookie(STATE_COOKIE, state, max_age=STATE_MAX_AGE, httponly=True, samesite="lax")
    response.set_cookie(
        CALLBACK_COOKIE,
        safe_callback_url(callback_url),
        max_age=STATE_MAX_AGE,
        httponly=True,
        samesite="lax"
    )
    return response


@router.get("/callback/{provider}")
async def callback(
    provider: str,
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    oauth_client: OAuthClient = Depends(get_oauth_client)
):
    """Завершение входа: обмен кода, создание пользователя и выдача сессии"""
    expected_state = request.cookies.get(STATE_COOKIE)

    if provider != oauth_client.provider or not code:
        return _callback_error()

    if not state or not expected_state or not secrets.compare_digest(state, expected_state):
        logger.warning("OAuth callback with mismatched state")
        return _callback_error()

    try:
        profile = await oauth_client.fetch_profile(code)
    except OAuthError as e:
        logger.warning("OAuth sign-in failed: %s", e)
        return _callback_error()

    identity_service = IdentityService(db)
    user = await identity_service.sign_in(profile)
    token = identity_service.issue_session_token(user)

    response = RedirectResponse(
        safe_callback_url(request.cookies.get(CALLBACK_COOKIE)),
        status_code=302
    )
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_expire_minutes * 60,
        httponly=True,
        samesite="lax"
    )
    response.delete_cookie(STATE_COOKIE)
    response.delete_cookie(CALLBACK_COOKIE)
    return response


@router.get("/session", response_model=DataResponse[Optional[UserResponse]])
async def session(user: Optional[User] = Depends(get_optional_user)):
    """Текущий пользователь или null"""
    return {"data": UserResponse.model_validate(user) if user else None}


@router.post("/signout", response_model=DataResponse[SuccessResponse])
async def signout(response: Response):
    """Выход: сессионная cookie удаляется"""
    response.delete_cookie(settings.session_cookie_name)
    return {"data": {"success": True}}
