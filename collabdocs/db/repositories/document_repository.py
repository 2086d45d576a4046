from typing import Optional, List, TYPE_CHECKING

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from collabdocs.db.models.document import Document as DocumentModel

if TYPE_CHECKING:
    from collabdocs.domains.documents.entities import Document


class DocumentRepository:
    """Репозиторий для работы с документами"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: "Document") -> "Document":
        """Создание нового документа"""
        db_document = DocumentModel(
            title=document.title,
            content=document.content,
            created_at=document.created_at,
            updated_at=document.updated_at
        )
        if document.id:
            db_document.id = document.id

        self.session.add(db_document)
        await self.session.commit()
        await self.session.refresh(db_document)
        return self._to_domain(db_document)

    async def get_by_id(self, document_id: str) -> Optional["Document"]:
        """Получение документа по id"""
        result = await self.session.execute(
            select(DocumentModel).where(DocumentModel.id == document_id)
        )
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document) if db_document else None

    async def get_all(self) -> List["Document"]:
        """Все документы, последние измененные первыми"""
        result = await self.session.execute(
            select(DocumentModel).order_by(DocumentModel.updated_at.desc())
        )
        db_documents = result.scalars().all()
        return [self._to_domain(doc) for doc in db_documents]

    async def update(self, document: "Document") -> Optional["Document"]:
        """Обновление документа (полная замена заголовка и содержимого)"""
        stmt = (
            update(DocumentModel)
            .where(DocumentModel.id == document.id)
            .values(
                title=document.title,
                content=document.content,
                updated_at=document.updated_at
            )
        )

        result = await self.session.execute(stmt)
        await self.session.commit()

        if result.rowcount == 0:
            return None
        return await self.get_by_id(document.id)

    async def delete(self, document_id: str) -> bool:
        """Удаление документа; комментарии и ответы удаляются каскадно"""
        stmt = delete(DocumentModel).where(DocumentModel.id == document_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    def _to_domain(self, db_document: DocumentModel) -> "Document":
        """Преобразование модели БД в доменную сущность"""
        from collabdocs.domains.documents.content import normalize_content
        from collabdocs.domains.documents.entities import Document

        return Document(
            id=db_document.id,
            title=db_document.title,
            content=normalize_content(db_document.content) if isinstance(db_document.content, str) else db_document.content,
            created_at=db_document.created_at,
            updated_at=db_document.updated_at
        )
