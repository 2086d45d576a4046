import logging
from typing import Optional, List

from sqlalchemy.ext.asyncio import AsyncSession

from collabdocs.db.repositories.document_repository import DocumentRepository
from collabdocs.domains.documents.entities import Document
from collabdocs.domains.documents.schemas import DocumentCreate, DocumentUpdate

logger = logging.getLogger(__name__)


class DocumentService:
    """Сервис для работы с документами"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.document_repository = DocumentRepository(session)

    async def list_documents(self) -> List[Document]:
        """Все документы (общее рабочее пространство, без фильтра по владельцу)"""
        return await self.document_repository.get_all()

    async def create_document(self, document_data: Optional[DocumentCreate] = None) -> Document:
        """Создание нового документа"""
        document_data = document_data or DocumentCreate()
        document = Document.create_document(
            title=document_data.title,
            content=document_data.content
        )

        created = await self.document_repository.create(document)
        logger.info("Document %s created", created.id)
        return created

    async def get_document(self, document_id: str) -> Optional[Document]:
        """Получение документа по id"""
        return await self.document_repository.get_by_id(document_id)

    async def update_document(self, document_id: str, update_data: DocumentUpdate) -> Optional[Document]:
        """Частичное обновление: меняются только переданные поля"""
        document = await self.document_repository.get_by_id(document_id)

        if not document:
            return None

        fields = update_data.model_fields_set

        if "title" in fields and update_data.title is not None:
            document.update_title(update_data.title)

        # Содержимое заменяется целиком, без частичных патчей
        if "content" in fields and update_data.content is not None:
            document.replace_content(update_data.content)

        return await self.document_repository.update(document)

    async def delete_document(self, document_id: str) -> bool:
        """Удаление документа вместе с комментариями и ответами"""
        deleted = await self.document_repository.delete(document_id)
        if deleted:
            logger.info("Document %s deleted", document_id)
        return deleted
