from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Query

from collabdocs.api.http.auth import safe_callback_url
from collabdocs.core.config import settings

router = APIRouter(tags=["pages"])


@router.get("/login")
async def login_page(
    callback_url: Optional[str] = Query(None, alias="callbackUrl"),
    error: Optional[str] = None
):
    """Точка входа: куда отправить пользователя для входа через провайдера"""
    callback_url = safe_callback_url(callback_url)
    signin_url = f"/api/auth/signin?{urlencode({'callbackUrl': callback_url})}"

    return {
        "data": {
            "providers": [{"id": settings.oauth_provider, "signinUrl": signin_url}],
            "callbackUrl": callback_url,
            "error": error,
        }
    }
