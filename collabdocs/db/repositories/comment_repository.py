from typing import Optional, List, TYPE_CHECKING

from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from collabdocs.db.models.comment import Comment as CommentModel, Reply as ReplyModel
from collabdocs.db.models.user import User as UserModel

if TYPE_CHECKING:
    from collabdocs.domains.comments.entities import Comment, Reply
    from collabdocs.domains.identity.entities import User


def _user_to_domain(db_user: Optional[UserModel]) -> Optional["User"]:
    if db_user is None:
        return None

    from collabdocs.domains.identity.entities import User

    return User(
        id=db_user.id,
        name=db_user.name,
        email=db_user.email,
        avatar_url=db_user.avatar_url,
        created_at=db_user.created_at,
        updated_at=db_user.updated_at
    )


class CommentRepository:
    """Репозиторий для работы с комментариями"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _query(self):
        return (
            select(CommentModel)
            .options(
                selectinload(CommentModel.user),
                selectinload(CommentModel.replies).selectinload(ReplyModel.user),
            )
            .execution_options(populate_existing=True)
        )

    async def create(self, comment: "Comment") -> "Comment":
        """Создание комментария; возвращается вместе с автором и пустой веткой"""
        db_comment = CommentModel(
            document_id=comment.document_id,
            user_id=comment.user_id,
            highlighted_text=comment.highlighted_text,
            selection_from=comment.selection_from,
            selection_to=comment.selection_to,
            content=comment.content,
            is_resolved=comment.is_resolved,
            created_at=comment.created_at,
            updated_at=comment.updated_at
        )
        if comment.id:
            db_comment.id = comment.id

        self.session.add(db_comment)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ValueError("Invalid userId")

        return await self.get_by_id(db_comment.id)

    async def get_by_id(self, comment_id: str) -> Optional["Comment"]:
        """Получение комментария по id вместе с автором и ответами"""
        result = await self.session.execute(
            self._query().where(CommentModel.id == comment_id)
        )
        db_comment = result.scalar_one_or_none()
        return self._to_domain(db_comment) if db_comment else None

    async def get_by_document(self, document_id: str) -> List["Comment"]:
        """Комментарии документа, новые первыми; ответы в ветке старые первыми"""
        result = await self.session.execute(
            self._query()
            .where(CommentModel.document_id == document_id)
            .order_by(CommentModel.created_at.desc())
        )
        db_comments = result.scalars().all()
        return [self._to_domain(comment) for comment in db_comments]

    async def update(self, comment: "Comment") -> Optional["Comment"]:
        """Обновление текста и статуса комментария"""
        stmt = (
            update(CommentModel)
            .where(CommentModel.id == comment.id)
            .values(
                content=comment.content,
                is_resolved=comment.is_resolved,
                updated_at=comment.updated_at
            )
        )

        result = await self.session.execute(stmt)
        await self.session.commit()

        if result.rowcount == 0:
            return None
        return await self.get_by_id(comment.id)

    async def delete(self, comment_id: str) -> bool:
        """Удаление комментария; ответы удаляются каскадно"""
        stmt = delete(CommentModel).where(CommentModel.id == comment_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    def _to_domain(self, db_comment: CommentModel) -> "Comment":
        """Преобразование модели БД в доменную сущность"""
        from collabdocs.domains.comments.entities import Comment

        return Comment(
            id=db_comment.id,
            document_id=db_comment.document_id,
            user_id=db_comment.user_id,
            highlighted_text=db_comment.highlighted_text,
            selection_from=db_comment.selection_from,
            selection_to=db_comment.selection_to,
            content=db_comment.content,
            is_resolved=db_comment.is_resolved,
            user=_user_to_domain(db_comment.user),
            replies=[ReplyRepository.to_domain(reply) for reply in db_comment.replies],
            created_at=db_comment.created_at,
            updated_at=db_comment.updated_at
        )


class ReplyRepository:
    """Репозиторий для работы с ответами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, reply: "Reply") -> "Reply":
        """Создание ответа; возвращается вместе с автором"""
        db_reply = ReplyModel(
            comment_id=reply.comment_id,
            user_id=reply.user_id,
            content=reply.content,
            created_at=reply.created_at,
            updated_at=reply.updated_at
        )
        if reply.id:
            db_reply.id = reply.id

        self.session.add(db_reply)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ValueError("Invalid userId")

        return await self.get_by_id(db_reply.id)

    async def get_by_id(self, reply_id: str) -> Optional["Reply"]:
        """Получение ответа по id вместе с автором"""
        result = await self.session.execute(
            select(ReplyModel)
            .options(selectinload(ReplyModel.user))
            .where(ReplyModel.id == reply_id)
            .execution_options(populate_existing=True)
        )
        db_reply = result.scalar_one_or_none()
        return self.to_domain(db_reply) if db_reply else None

    async def update(self, reply: "Reply") -> Optional["Reply"]:
        """Обновление текста ответа"""
        stmt = (
            update(ReplyModel)
            .where(ReplyModel.id == reply.id)
            .values(content=reply.content, updated_at=reply.updated_at)
        )

        result = await self.session.execute(stmt)
        await self.session.commit()

        if result.rowcount == 0:
            return None
        return await self.get_by_id(reply.id)

    async def delete(self, reply_id: str) -> bool:
        """Удаление ответа"""
        stmt = delete(ReplyModel).where(ReplyModel.id == reply_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    @staticmethod
    def to_domain(db_reply: ReplyModel) -> "Reply":
        """Преобразование модели БД в доменную сущность"""
        from collabdocs.domains.comments.entities import Reply

        return Reply(
            id=db_reply.id,
            comment_id=db_reply.comment_id,
            user_id=db_reply.user_id,
            content=db_reply.content,
            user=_user_to_domain(db_reply.user),
            created_at=db_reply.created_at,
            updated_at=db_reply.updated_at
        )
