from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from collabdocs.api.http.errors import handle_errors
from collabdocs.api.schemas import DataResponse
from collabdocs.core.db import get_db
from collabdocs.domains.identity.schemas import UserResponse
from collabdocs.domains.identity.services import IdentityService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=DataResponse[List[UserResponse]])
async def list_users(db: AsyncSession = Depends(get_db)):
    """Список пользователей (не больше 20)"""
    identity_service = IdentityService(db)

    with handle_errors("fetch users"):
        users = await identity_service.list_users()

    return {"data": [UserResponse.model_validate(user) for user in users]}
