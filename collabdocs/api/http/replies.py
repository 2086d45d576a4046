from typing import Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from collabdocs.api.http.errors import handle_errors, not_found
from collabdocs.api.schemas import DataResponse, SuccessResponse
from collabdocs.core.db import get_db
from collabdocs.domains.comments.schemas import ReplyUpdate, ReplyResponse
from collabdocs.domains.comments.services import CommentService

router = APIRouter(prefix="/replies", tags=["replies"])


@router.patch("/{reply_id}", response_model=DataResponse[ReplyResponse])
async def update_reply(
    reply_id: str,
    update_data: Optional[ReplyUpdate] = Body(None),
    db: AsyncSession = Depends(get_db)
):
    """Изменение текста ответа"""
    comment_service = CommentService(db)

    with handle_errors("update reply"):
        reply = await comment_service.update_reply(reply_id, update_data or ReplyUpdate())

    if not reply:
        raise not_found("Reply")

    return {"data": ReplyResponse.model_validate(reply)}


@router.delete("/{reply_id}", response_model=DataResponse[SuccessResponse])
async def delete_reply(reply_id: str, db: AsyncSession = Depends(get_db)):
    """Удаление ответа"""
    comment_service = CommentService(db)

    with handle_errors("delete reply"):
        deleted = await comment_service.delete_reply(reply_id)

    if not deleted:
        raise not_found("Reply")

    return {"data": {"success": True}}
