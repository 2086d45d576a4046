from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from collabdocs.api.http.errors import handle_errors, not_found
from collabdocs.api.schemas import DataResponse, SuccessResponse
from collabdocs.core.db import get_db
from collabdocs.domains.comments.schemas import (
    CommentCreate,
    CommentUpdate,
    CommentResolve,
    CommentResponse,
    ReplyCreate,
    ReplyResponse
)
from collabdocs.domains.comments.services import CommentService

router = APIRouter(tags=["comments"])


@router.get("/documents/{document_id}/comments", response_model=DataResponse[List[CommentResponse]])
async def list_comments(document_id: str, db: AsyncSession = Depends(get_db)):
    """Комментарии документа: новые первыми, ответы в ветке по порядку"""
    comment_service = CommentService(db)

    with handle_errors("fetch comments"):
        comments = await comment_service.list_comments(document_id)

    return {"data": [CommentResponse.model_validate(comment) for comment in comments]}


@router.post(
    "/documents/{document_id}/comments",
    response_model=DataResponse[CommentResponse],
    status_code=status.HTTP_201_CREATED
)
async def create_comment(
    document_id: str,
    comment_data: Optional[CommentCreate] = Body(None),
    db: AsyncSession = Depends(get_db)
):
    """Создание комментария к выделенному фрагменту"""
    comment_service = CommentService(db)

    with handle_errors("create comment"):
        comment = await comment_service.create_comment(document_id, comment_data or CommentCreate())

    if not comment:
        raise not_found("Document")

    return {"data": CommentResponse.model_validate(comment)}


@router.patch("/comments/{comment_id}", response_model=DataResponse[CommentResponse])
async def update_comment(
    comment_id: str,
    update_data: Optional[CommentUpdate] = Body(None),
    db: AsyncSession = Depends(get_db)
):
    """Изменение текста комментария"""
    comment_service = CommentService(db)

    with handle_errors("update comment"):
        comment = await comment_service.update_comment(comment_id, update_data or CommentUpdate())

    if not comment:
        raise not_found("Comment")

    return {"data": CommentResponse.model_validate(comment)}


@router.delete("/comments/{comment_id}", response_model=DataResponse[SuccessResponse])
async def delete_comment(comment_id: str, db: AsyncSession = Depends(get_db)):
    """Удаление комментария вместе с ответами"""
    comment_service = CommentService(db)

    with handle_errors("delete comment"):
        deleted = await comment_service.delete_comment(comment_id)

    if not deleted:
        raise not_found("Comment")

    return {"data": {"success": True}}


@router.post("/comments/{comment_id}/resolve", response_model=DataResponse[CommentResponse])
async def resolve_comment(
    comment_id: str,
    resolve_data: Optional[CommentResolve] = Body(None),
    db: AsyncSession = Depends(get_db)
):
    """Закрытие (по умолчанию) или переоткрытие ветки"""
    comment_service = CommentService(db)

    with handle_errors("resolve comment"):
        comment = await comment_service.resolve_comment(comment_id, resolve_data)

    if not comment:
        raise not_found("Comment")

    return {"data": CommentResponse.model_validate(comment)}


@router.post(
    "/comments/{comment_id}/replies",
    response_model=DataResponse[ReplyResponse],
    status_code=status.HTTP_201_CREATED
)
async def create_reply(
    comment_id: str,
    reply_data: Optional[ReplyCreate] = Body(None),
    db: AsyncSession = Depends(get_db)
):
    """Ответ в ветке комментария"""
    comment_service = CommentService(db)

    with handle_errors("create reply"):
        reply = await comment_service.add_reply(comment_id, reply_data or ReplyCreate())

    if not reply:
        raise not_found("Comment")

    return {"data": ReplyResponse.model_validate(reply)}
