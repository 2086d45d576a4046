from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from collabdocs.core.db import get_db
from collabdocs.core.security import get_request_token
from collabdocs.domains.identity.entities import User
from collabdocs.domains.identity.services import IdentityService


async def get_optional_user(
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> Optional[User]:
    """Пользователь текущей сессии или None"""
    token = get_request_token(request.headers, request.cookies)
    if not token:
        return None

    identity_service = IdentityService(db)
    return await identity_service.get_user_from_token(token)
