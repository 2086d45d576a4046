import logging
from datetime import datetime, timezone
from typing import Optional, List

from sqlalchemy.ext.asyncio import AsyncSession

from collabdocs.db.repositories.comment_repository import CommentRepository, ReplyRepository
from collabdocs.db.repositories.document_repository import DocumentRepository
from collabdocs.domains.comments.entities import Comment, Reply
from collabdocs.domains.comments.schemas import (
    CommentCreate,
    CommentUpdate,
    CommentResolve,
    ReplyCreate,
    ReplyUpdate
)

logger = logging.getLogger(__name__)


class CommentService:
    """Сервис для работы с комментариями и ответами"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.comment_repository = CommentRepository(session)
        self.reply_repository = ReplyRepository(session)
        self.document_repository = DocumentRepository(session)

    async def list_comments(self, document_id: str) -> List[Comment]:
        """Комментарии документа с авторами и ответами"""
        return await self.comment_repository.get_by_document(document_id)

    async def create_comment(self, document_id: str, comment_data: CommentCreate) -> Optional[Comment]:
        """Создание комментария к выделенному фрагменту.

        Возвращает None, если документа нет.

        Raises:
            ValueError: не переданы обязательные поля, некорректный диапазон
                или неизвестный пользователь.
        """
        comment = Comment.create_comment(
            document_id=document_id,
            user_id=comment_data.user_id,
            content=comment_data.content,
            highlighted_text=comment_data.highlighted_text,
            selection_from=comment_data.selection_from,
            selection_to=comment_data.selection_to
        )

        if not await self.document_repository.get_by_id(document_id):
            return None

        created = await self.comment_repository.create(comment)
        logger.info("Comment %s created on document %s", created.id, document_id)
        return created

    async def update_comment(self, comment_id: str, update_data: CommentUpdate) -> Optional[Comment]:
        """Изменение текста комментария"""
        if not update_data.content:
            raise ValueError("Missing required fields")

        comment = await self.comment_repository.get_by_id(comment_id)
        if not comment:
            return None

        comment.content = update_data.content
        comment.updated_at = datetime.now(timezone.utc)
        return await self.comment_repository.update(comment)

    async def resolve_comment(self, comment_id: str, resolve_data: Optional[CommentResolve] = None) -> Optional[Comment]:
        """Закрытие или переоткрытие ветки; по умолчанию ветка закрывается"""
        is_resolved = True
        if resolve_data is not None and resolve_data.is_resolved is not None:
            is_resolved = resolve_data.is_resolved

        comment = await self.comment_repository.get_by_id(comment_id)
        if not comment:
            return None

        comment.is_resolved = is_resolved
        comment.updated_at = datetime.now(timezone.utc)
        return await self.comment_repository.update(comment)

    async def delete_comment(self, comment_id: str) -> bool:
        """Удаление комментария вместе с ответами"""
        deleted = await self.comment_repository.delete(comment_id)
        if deleted:
            logger.info("Comment %s deleted", comment_id)
        return deleted

    async def add_reply(self, comment_id: str, reply_data: ReplyCreate) -> Optional[Reply]:
        """Добавление ответа в ветку комментария; None, если комментария нет"""
        reply = Reply.create_reply(
            comment_id=comment_id,
            user_id=reply_data.user_id,
            content=reply_data.content
        )

        if not await self.comment_repository.get_by_id(comment_id):
            return None

        return await self.reply_repository.create(reply)

    async def update_reply(self, reply_id: str, update_data: ReplyUpdate) -> Optional[Reply]:
        """Изменение текста ответа"""
        if not update_data.content:
            raise ValueError("Missing required fields")

        reply = await self.reply_repository.get_by_id(reply_id)
        if not reply:
            return None

        reply.content = update_data.content
        reply.updated_at = datetime.now(timezone.utc)
        return await self.reply_repository.update(reply)

    async def delete_reply(self, reply_id: str) -> bool:
        """Удаление ответа"""
        return await self.reply_repository.delete(reply_id)
